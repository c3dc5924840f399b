"""
Test suite for projects.

Tests cover:
- Defaults for status and escrow status
- Model validation (budget, blank fields, self-hire)
- Filtering by client or freelancer
- Partial updates and the updated timestamp
- End-to-end marketplace scenario
"""

import uuid
from datetime import timedelta
from decimal import Decimal

import pytest
from django.core.exceptions import ValidationError
from django.urls import reverse
from rest_framework import status

from core import services
from core.models import Project


@pytest.mark.django_db
class TestProjectModel:

    def test_defaults(self, project):
        assert project.status == 'open'
        assert project.escrow_status == 'pending'
        assert project.tags == []
        assert project.freelancer is None
        assert project.smart_contract_address is None

    def test_budget_must_be_positive(self, make_project):
        with pytest.raises(ValidationError) as exc_info:
            make_project(total_budget=Decimal('0'))
        assert 'total_budget' in exc_info.value.message_dict

    def test_blank_title_rejected(self, make_project):
        with pytest.raises(ValidationError):
            make_project(title='   ')

    def test_client_cannot_hire_themselves(self, make_project, client_user):
        with pytest.raises(ValidationError) as exc_info:
            make_project(freelancer=client_user)
        assert 'freelancer' in exc_info.value.message_dict

    def test_invalid_status_rejected(self, make_project):
        with pytest.raises(ValidationError):
            make_project(status='archived')


@pytest.mark.django_db
class TestProjectServices:

    def test_list_by_client_and_freelancer(self, make_user, make_project, client_user, freelancer_user):
        other_client = make_user()
        p1 = make_project(freelancer=freelancer_user)
        p2 = make_project(client=other_client)
        p3 = make_project(client=other_client, freelancer=freelancer_user)

        assert list(services.list_projects(client_id=client_user.id)) == [p1]
        assert list(services.list_projects(freelancer_id=freelancer_user.id)) == [p1, p3]
        assert list(services.list_projects()) == [p1, p2, p3]

    def test_client_filter_wins_when_both_given(self, make_user, make_project, client_user, freelancer_user):
        p1 = make_project()
        make_project(client=make_user(), freelancer=freelancer_user)

        projects = services.list_projects(client_id=client_user.id, freelancer_id=freelancer_user.id)
        assert list(projects) == [p1]

    def test_malformed_filter_matches_nothing(self, project):
        assert list(services.list_projects(client_id='garbage')) == []

    def test_update_round_trip(self, project):
        updated = services.update_project(project.id, status='in_progress')
        reloaded = services.get_project(project.id)

        assert updated.status == 'in_progress'
        assert reloaded.status == 'in_progress'
        assert reloaded.title == project.title
        assert reloaded.total_budget == project.total_budget
        assert reloaded.escrow_status == 'pending'

    def test_update_refreshes_updated_at(self, project):
        stale = project.created_at - timedelta(days=1)
        Project.objects.filter(pk=project.pk).update(updated_at=stale)

        updated = services.update_project(project.id, escrow_status='funded')

        assert updated.updated_at > stale
        assert updated.created_at == project.created_at

    def test_update_unknown_project(self):
        assert services.update_project(uuid.uuid4(), status='completed') is None

    def test_invalid_update_is_not_saved(self, project):
        with pytest.raises(ValidationError):
            services.update_project(project.id, total_budget=Decimal('-5'))
        assert services.get_project(project.id).total_budget == Decimal('1500.00')


@pytest.mark.django_db
class TestProjectAPI:

    url = '/api/projects'

    def test_create_project_with_defaults(self, api_client, client_user):
        response = api_client.post(self.url, {
            'title': 'NFT storefront',
            'description': 'Storefront for a small NFT collection.',
            'clientId': str(client_user.id),
            'totalBudget': '2500',
            'tags': ['web3', 'react'],
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data['status'] == 'open'
        assert data['escrowStatus'] == 'pending'
        assert data['clientId'] == str(client_user.id)
        assert data['freelancerId'] is None
        assert data['totalBudget'] == '2500.0000'
        assert data['tags'] == ['web3', 'react']
        assert data['createdAt'] is not None
        assert data['updatedAt'] is not None

    def test_create_with_null_optional_fields(self, api_client, client_user):
        response = api_client.post(self.url, {
            'title': 'Landing page',
            'description': 'One page site.',
            'clientId': str(client_user.id),
            'totalBudget': '300',
            'category': None,
            'smartContractAddress': None,
            'deadline': None,
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()['category'] is None
        assert response.json()['smartContractAddress'] is None

    def test_create_with_unknown_client(self, api_client):
        response = api_client.post(self.url, {
            'title': 'Orphan',
            'description': 'No such client.',
            'clientId': str(uuid.uuid4()),
            'totalBudget': '100',
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()['message'] == 'Invalid project data'
        assert 'clientId' in response.json()['errors']

    def test_create_with_non_positive_budget(self, api_client, client_user):
        response = api_client.post(self.url, {
            'title': 'Cheap',
            'description': 'Too cheap.',
            'clientId': str(client_user.id),
            'totalBudget': '0',
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'totalBudget' in response.json()['errors']

    def test_self_hire_rejected(self, api_client, client_user):
        response = api_client.post(self.url, {
            'title': 'Solo',
            'description': 'Hiring myself.',
            'clientId': str(client_user.id),
            'freelancerId': str(client_user.id),
            'totalBudget': '100',
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'freelancerId' in response.json()['errors']

    def test_get_project(self, api_client, project):
        response = api_client.get(reverse('project_detail', args=[project.id]))

        assert response.status_code == status.HTTP_200_OK
        assert response.json()['title'] == project.title

    def test_get_unknown_project(self, api_client):
        response = api_client.get(reverse('project_detail', args=[uuid.uuid4()]))

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {'message': 'Project not found'}

    def test_patch_project(self, api_client, project, freelancer_user):
        response = api_client.patch(
            reverse('project_detail', args=[project.id]),
            {'freelancerId': str(freelancer_user.id), 'status': 'in_progress'},
            format='json'
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()['freelancerId'] == str(freelancer_user.id)
        assert response.json()['status'] == 'in_progress'
        assert response.json()['title'] == project.title

        project.refresh_from_db()
        assert project.freelancer == freelancer_user

    def test_patch_values_read_back_unchanged(self, api_client, project):
        url = reverse('project_detail', args=[project.id])
        payload = {
            'title': ' Padded ',
            'description': 'Trailing newline\n',
            'category': '  design',
            'tags': [' web3 '],
        }

        assert api_client.patch(url, payload, format='json').status_code == status.HTTP_200_OK

        data = api_client.get(url).json()
        for key, value in payload.items():
            assert data[key] == value

    def test_patch_cannot_reassign_client(self, api_client, project, freelancer_user):
        response = api_client.patch(
            reverse('project_detail', args=[project.id]),
            {'clientId': str(freelancer_user.id)},
            format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'clientId' in response.json()['errors']

    def test_patch_unknown_project(self, api_client):
        response = api_client.patch(
            reverse('project_detail', args=[uuid.uuid4()]),
            {'status': 'completed'},
            format='json'
        )
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_filter_by_freelancer(self, api_client, make_project, freelancer_user):
        hired = make_project(freelancer=freelancer_user)
        make_project()

        response = api_client.get(self.url, {'freelancerId': str(freelancer_user.id)})

        assert response.status_code == status.HTTP_200_OK
        assert [p['id'] for p in response.json()] == [str(hired.id)]


@pytest.mark.django_db
def test_client_and_freelancer_scenario(api_client):
    """A client hires a freelancer; both listings reflect exactly those records."""
    user_a = api_client.post('/api/users', {
        'username': 'client-a',
        'email': 'a@example.com',
        'isFreelancer': False,
    }, format='json').json()
    user_b = api_client.post('/api/users', {
        'username': 'freelancer-b',
        'email': 'b@example.com',
        'isFreelancer': True,
    }, format='json').json()

    created = api_client.post('/api/projects', {
        'title': 'Audit',
        'description': 'Audit a token contract.',
        'clientId': user_a['id'],
        'freelancerId': user_b['id'],
        'totalBudget': '5.5',
    }, format='json')
    assert created.status_code == status.HTTP_201_CREATED
    assert created.json()['totalBudget'] == '5.5000'

    projects = api_client.get('/api/projects', {'clientId': user_a['id']}).json()
    assert [p['id'] for p in projects] == [created.json()['id']]

    freelancers = api_client.get('/api/users/freelancers').json()
    assert [u['id'] for u in freelancers] == [user_b['id']]

    assert Project.objects.count() == 1
