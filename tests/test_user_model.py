"""
Test suite for the marketplace User model and user operations.

Tests cover:
- Username and email uniqueness (email case-insensitive)
- Profile defaults
- Field range validation
- Partial updates
"""

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.test import TestCase

from core import services
from core.models import User


class UserCreationTests(TestCase):
    """Test user creation through the service layer."""

    def test_create_user_with_defaults(self):
        """A user created with only username and email gets profile defaults."""
        user = services.create_user(username='alice', email='alice@example.com')

        self.assertIsNotNone(user.id)
        self.assertEqual(user.skills, [])
        self.assertEqual(user.success_rate, 0)
        self.assertEqual(user.completed_projects, 0)
        self.assertEqual(user.rating, Decimal('0.00'))
        self.assertEqual(user.total_reviews, 0)
        self.assertFalse(user.is_freelancer)
        self.assertIsNone(user.hourly_rate)
        self.assertIsNotNone(user.created_at)

    def test_email_is_stored_lowercase(self):
        user = services.create_user(username='alice', email='Alice@Example.COM')
        self.assertEqual(user.email, 'alice@example.com')

    def test_users_have_no_usable_password(self):
        user = services.create_user(username='alice', email='alice@example.com')
        self.assertFalse(user.has_usable_password())

    def test_duplicate_username_rejected(self):
        services.create_user(username='alice', email='alice@example.com')

        with self.assertRaises(ValidationError) as ctx:
            services.create_user(username='alice', email='other@example.com')

        self.assertIn('username', ctx.exception.message_dict)
        self.assertEqual(User.objects.count(), 1)

    def test_duplicate_email_rejected_case_insensitive(self):
        services.create_user(username='alice', email='alice@example.com')

        with self.assertRaises(ValidationError) as ctx:
            services.create_user(username='alice2', email='ALICE@example.com')

        self.assertIn('email', ctx.exception.message_dict)

    def test_email_required(self):
        with self.assertRaises(ValidationError):
            services.create_user(username='alice', email='')

    def test_success_rate_cannot_exceed_100(self):
        with self.assertRaises(ValidationError):
            services.create_user(username='alice', email='alice@example.com', success_rate=101)

    def test_rating_cannot_exceed_five(self):
        with self.assertRaises(ValidationError):
            services.create_user(username='alice', email='alice@example.com', rating=Decimal('5.01'))

    def test_invalid_wallet_address_rejected(self):
        with self.assertRaises(ValidationError) as ctx:
            services.create_user(
                username='alice',
                email='alice@example.com',
                wallet_address='not-a-wallet'
            )
        self.assertIn('wallet_address', ctx.exception.message_dict)

    def test_skills_must_be_strings(self):
        with self.assertRaises(ValidationError):
            services.create_user(username='alice', email='alice@example.com', skills=['Rust', 3])


class UserLookupTests(TestCase):
    """Test user lookups and listing."""

    def setUp(self):
        self.client_user = services.create_user(username='alice', email='alice@example.com')
        self.freelancer = services.create_user(
            username='bob',
            email='bob@example.com',
            is_freelancer=True
        )

    def test_get_user(self):
        self.assertEqual(services.get_user(self.client_user.id), self.client_user)
        self.assertEqual(services.get_user(str(self.client_user.id)), self.client_user)

    def test_get_unknown_user_returns_none(self):
        self.assertIsNone(services.get_user('00000000-0000-0000-0000-000000000000'))

    def test_get_malformed_id_returns_none(self):
        self.assertIsNone(services.get_user('not-a-uuid'))

    def test_get_user_by_email_ignores_case(self):
        self.assertEqual(services.get_user_by_email('BOB@example.com'), self.freelancer)
        self.assertIsNone(services.get_user_by_email('nobody@example.com'))

    def test_list_freelancers(self):
        self.assertEqual(list(services.list_freelancers()), [self.freelancer])


class UserUpdateTests(TestCase):
    """Test partial updates of users."""

    def setUp(self):
        self.user = services.create_user(
            username='alice',
            email='alice@example.com',
            bio='Original bio',
            skills=['Django']
        )

    def test_update_changes_only_given_fields(self):
        updated = services.update_user(self.user.id, bio='New bio')

        self.assertEqual(updated.bio, 'New bio')
        reloaded = services.get_user(self.user.id)
        self.assertEqual(reloaded.bio, 'New bio')
        self.assertEqual(reloaded.skills, ['Django'])
        self.assertEqual(reloaded.email, 'alice@example.com')

    def test_update_unknown_user_returns_none(self):
        self.assertIsNone(services.update_user('00000000-0000-0000-0000-000000000000', bio='x'))

    def test_update_to_taken_email_rejected(self):
        services.create_user(username='bob', email='bob@example.com')

        with self.assertRaises(ValidationError):
            services.update_user(self.user.id, email='bob@example.com')

        self.assertEqual(services.get_user(self.user.id).email, 'alice@example.com')
