"""
Shared fixtures for the marketplace test suite.
"""

from datetime import timedelta
from decimal import Decimal
from itertools import count

import pytest
from django.utils import timezone
from rest_framework.test import APIClient

from core import services
from core.models import Message


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def make_user(db):
    """Factory fixture for creating users with unique usernames and emails."""
    sequence = count(1)

    def _make_user(**kwargs):
        n = next(sequence)
        defaults = {
            'username': f'user{n}',
            'email': f'user{n}@example.com',
        }
        defaults.update(kwargs)
        return services.create_user(**defaults)
    return _make_user


@pytest.fixture
def client_user(make_user):
    return make_user(username='alice', email='alice@example.com')


@pytest.fixture
def freelancer_user(make_user):
    return make_user(
        username='bob',
        email='bob@example.com',
        is_freelancer=True,
        skills=['Solidity', 'React'],
        hourly_rate=Decimal('85.00'),
    )


@pytest.fixture
def make_project(db, client_user):
    """Factory fixture for creating projects owned by ``client_user`` by default."""
    def _make_project(**kwargs):
        defaults = {
            'client': client_user,
            'title': 'Escrow dashboard',
            'description': 'Build a dashboard for escrow payments.',
            'total_budget': Decimal('1500.00'),
        }
        defaults.update(kwargs)
        return services.create_project(**defaults)
    return _make_project


@pytest.fixture
def project(make_project):
    return make_project()


@pytest.fixture
def make_message(db):
    """
    Factory fixture for messages with explicit, strictly increasing timestamps.

    ``minutes_ago`` sets how far in the past the message was sent.
    """
    now = timezone.now()

    def _make_message(sender, receiver, content='hello', minutes_ago=0, **kwargs):
        return Message.objects.create(
            sender=sender,
            receiver=receiver,
            content=content,
            created_at=now - timedelta(minutes=minutes_ago),
            **kwargs
        )
    return _make_message
