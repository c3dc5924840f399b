"""
Test suite for milestones.

Tests cover:
- Creation always starts pending
- Forward-only status transitions
- completedAt / paidAt stamped exactly once
- Module must belong to the milestone's project
"""

import uuid
from datetime import timedelta
from decimal import Decimal

import pytest
from django.core.exceptions import ValidationError
from django.test import TestCase
from django.urls import reverse
from django.utils import timezone
from rest_framework import status

from core import services
from core.models import Milestone


class MilestoneTransitionTests(TestCase):
    """Test the milestone status state machine."""

    def setUp(self):
        client = services.create_user(username='alice', email='alice@example.com')
        self.project = services.create_project(
            client=client,
            title='Escrow dashboard',
            description='Dashboard for escrow payments.',
            total_budget=Decimal('1000.00'),
        )
        self.milestone = services.create_milestone(
            self.project,
            description='Design handoff',
            amount=Decimal('250.00'),
        )

    def test_new_milestone_is_pending(self):
        self.assertEqual(self.milestone.status, 'pending')
        self.assertIsNone(self.milestone.completed_at)
        self.assertIsNone(self.milestone.paid_at)

    def test_create_ignores_requested_status(self):
        milestone = services.create_milestone(
            self.project,
            description='Skip ahead',
            amount=Decimal('10.00'),
            status='paid',
            paid_at=timezone.now(),
        )
        self.assertEqual(milestone.status, 'pending')
        self.assertIsNone(milestone.paid_at)

    def test_valid_transitions(self):
        self.assertEqual(self.milestone.can_transition_to('completed'), (True, None))
        self.assertFalse(self.milestone.can_transition_to('paid')[0])

    def test_pending_to_completed_to_paid(self):
        completed = services.update_milestone(self.milestone.id, status='completed')
        self.assertEqual(completed.status, 'completed')
        self.assertIsNotNone(completed.completed_at)
        self.assertIsNone(completed.paid_at)

        paid = services.update_milestone(self.milestone.id, status='paid')
        self.assertEqual(paid.status, 'paid')
        self.assertEqual(paid.completed_at, completed.completed_at)
        self.assertIsNotNone(paid.paid_at)

    def test_cannot_skip_to_paid(self):
        with self.assertRaises(ValidationError) as ctx:
            services.update_milestone(self.milestone.id, status='paid')

        self.assertIn('status', ctx.exception.message_dict)
        self.assertEqual(Milestone.objects.get(pk=self.milestone.pk).status, 'pending')

    def test_cannot_move_backwards(self):
        services.update_milestone(self.milestone.id, status='completed')

        with self.assertRaises(ValidationError):
            services.update_milestone(self.milestone.id, status='pending')

    def test_paid_is_terminal(self):
        services.update_milestone(self.milestone.id, status='completed')
        paid = services.update_milestone(self.milestone.id, status='paid')

        valid, message = paid.can_transition_to('completed')
        self.assertFalse(valid)
        self.assertEqual(message, 'Cannot modify a paid milestone.')

    def test_timestamps_are_stamped_once(self):
        first = timezone.now() - timedelta(days=2)
        self.milestone.transition_to('completed', current_time=first)
        self.milestone.save()

        # Re-applying the same status keeps the original timestamp.
        updated = services.update_milestone(self.milestone.id, status='completed')
        self.assertEqual(updated.completed_at, first)

    def test_timestamps_cannot_be_set_directly(self):
        updated = services.update_milestone(
            self.milestone.id,
            description='Design handoff v2',
            completed_at=timezone.now(),
        )
        self.assertEqual(updated.description, 'Design handoff v2')
        self.assertIsNone(updated.completed_at)

    def test_module_must_belong_to_project(self):
        other_project = services.create_project(
            client=self.project.client,
            title='Other',
            description='Another project.',
            total_budget=Decimal('50.00'),
        )
        foreign_module = services.create_project_module(
            other_project,
            name='Foreign',
            budget=Decimal('10.00'),
            order=1,
        )

        with self.assertRaises(ValidationError) as ctx:
            services.create_milestone(
                self.project,
                module=foreign_module,
                description='Wrong module',
                amount=Decimal('10.00'),
            )
        self.assertIn('module', ctx.exception.message_dict)


@pytest.mark.django_db
class TestMilestoneAPI:

    def url(self, project_id):
        return reverse('project_milestones', args=[project_id])

    def test_create_and_list(self, api_client, project):
        module = services.create_project_module(project, name='Backend', budget=Decimal('300'), order=1)

        response = api_client.post(self.url(project.id), {
            'description': 'Backend delivered',
            'amount': '300',
            'moduleId': str(module.id),
            'status': 'paid',
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data['status'] == 'pending'
        assert data['moduleId'] == str(module.id)
        assert data['projectId'] == str(project.id)
        assert data['completedAt'] is None
        assert data['paidAt'] is None

        listed = api_client.get(self.url(project.id)).json()
        assert [m['id'] for m in listed] == [data['id']]

    def test_create_with_module_of_other_project(self, api_client, project, make_project):
        foreign = services.create_project_module(make_project(), name='X', budget=Decimal('5'), order=1)

        response = api_client.post(self.url(project.id), {
            'description': 'Mismatch',
            'amount': '5',
            'moduleId': str(foreign.id),
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()['message'] == 'Invalid milestone data'
        assert 'moduleId' in response.json()['errors']

    def test_create_under_unknown_project(self, api_client):
        response = api_client.post(self.url(uuid.uuid4()), {
            'description': 'Nowhere',
            'amount': '5',
        }, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_patch_status_transitions(self, api_client, project):
        milestone = services.create_milestone(project, description='Launch', amount=Decimal('100'))
        url = reverse('milestone_detail', args=[milestone.id])

        completed = api_client.patch(url, {'status': 'completed'}, format='json')
        assert completed.status_code == status.HTTP_200_OK
        assert completed.json()['completedAt'] is not None

        paid = api_client.patch(url, {'status': 'paid'}, format='json')
        assert paid.status_code == status.HTTP_200_OK
        assert paid.json()['paidAt'] is not None
        assert paid.json()['completedAt'] == completed.json()['completedAt']

        backwards = api_client.patch(url, {'status': 'completed'}, format='json')
        assert backwards.status_code == status.HTTP_400_BAD_REQUEST
        assert backwards.json()['errors']['status'] == ['Cannot modify a paid milestone.']

    def test_patch_skip_transition(self, api_client, project):
        milestone = services.create_milestone(project, description='Launch', amount=Decimal('100'))

        response = api_client.patch(
            reverse('milestone_detail', args=[milestone.id]),
            {'status': 'paid'},
            format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'status' in response.json()['errors']

    def test_patch_rejects_timestamps(self, api_client, project):
        milestone = services.create_milestone(project, description='Launch', amount=Decimal('100'))

        response = api_client.patch(
            reverse('milestone_detail', args=[milestone.id]),
            {'paidAt': '2030-01-01T00:00:00Z'},
            format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'paidAt' in response.json()['errors']

    def test_patch_unknown_milestone(self, api_client):
        response = api_client.patch(
            reverse('milestone_detail', args=[uuid.uuid4()]),
            {'status': 'completed'},
            format='json'
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {'message': 'Milestone not found'}
