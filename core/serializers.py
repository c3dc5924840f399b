"""
Serializers for the marketplace API.

Models use snake_case field names while the JSON contract used by the
client is camelCase; ``CamelCaseSerializerMixin`` translates keys in both
directions so validation logic can stay in snake_case.
"""

from collections.abc import Mapping
from decimal import Decimal

from rest_framework import serializers

from .models import (
    Message,
    Milestone,
    Project,
    ProjectModule,
    Proposal,
    SmartContractTerms,
    User,
)
from .utils import to_camel_case, to_snake_case


class CamelCaseSerializerMixin:
    """
    Accept and emit camelCase keys on top of snake_case serializer fields.

    Set ``reject_unknown_fields = True`` to make the serializer fail on
    keys that do not match a writable field (used by patch serializers).
    """

    reject_unknown_fields = False

    def to_internal_value(self, data):
        if isinstance(data, Mapping):
            data = {to_snake_case(key): value for key, value in data.items()}

            if self.reject_unknown_fields:
                writable = {
                    name for name, field in self.fields.items() if not field.read_only
                }
                unknown = sorted(set(data) - writable)
                if unknown:
                    raise serializers.ValidationError({
                        field: ['This field cannot be updated.'] for field in unknown
                    })

        return super().to_internal_value(data)

    def build_standard_field(self, field_name, model_field):
        # Text is stored exactly as sent; blank checks live in validate_<field>.
        field_class, field_kwargs = super().build_standard_field(field_name, model_field)
        if issubclass(field_class, serializers.CharField):
            field_kwargs['trim_whitespace'] = False
        return field_class, field_kwargs

    def to_representation(self, instance):
        data = super().to_representation(instance)
        return {to_camel_case(key): value for key, value in data.items()}


class UUIDRelatedField(serializers.PrimaryKeyRelatedField):
    """Primary key relation that reports malformed ids as validation errors."""

    def __init__(self, **kwargs):
        kwargs.setdefault('pk_field', serializers.UUIDField())
        super().__init__(**kwargs)


def validate_positive(value, label):
    if value is not None and value <= Decimal('0'):
        raise serializers.ValidationError(f"{label} must be greater than 0.")
    return value


def validate_not_blank(value, label):
    if not value or not value.strip():
        raise serializers.ValidationError(f"{label} cannot be empty or whitespace only.")
    return value


# ============================================================================
# User Serializers
# ============================================================================

class UserSerializer(CamelCaseSerializerMixin, serializers.ModelSerializer):
    """
    Serializer for creating and displaying marketplace users.

    Fields:
    - username: Required, unique
    - email: Required, unique (case-insensitive)
    - walletAddress, profileImage, bio, skills, hourlyRate: Optional profile data
    - successRate, completedProjects, rating, totalReviews: Reputation counters
    - isFreelancer: Defaults to False
    """

    class Meta:
        model = User
        fields = [
            'id',
            'username',
            'email',
            'wallet_address',
            'profile_image',
            'bio',
            'skills',
            'hourly_rate',
            'success_rate',
            'completed_projects',
            'rating',
            'total_reviews',
            'is_freelancer',
            'created_at',
        ]
        read_only_fields = ['id', 'created_at']
        extra_kwargs = {
            'username': {'validators': []},
            'email': {'validators': []},
        }

    def validate_username(self, value):
        value = validate_not_blank(value, 'Username')
        queryset = User.objects.filter(username=value)
        if self.instance is not None:
            queryset = queryset.exclude(pk=self.instance.pk)
        if queryset.exists():
            raise serializers.ValidationError("A user with that username already exists.")
        return value

    def validate_email(self, value):
        """
        Validate email uniqueness.

        Emails are compared case-insensitively and stored lowercase.
        """
        value = value.strip().lower()
        queryset = User.objects.filter(email__iexact=value)
        if self.instance is not None:
            queryset = queryset.exclude(pk=self.instance.pk)
        if queryset.exists():
            raise serializers.ValidationError("A user with that email already exists.")
        return value

    def validate_skills(self, value):
        if value is None:
            return []
        if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
            raise serializers.ValidationError("Skills must be a list of strings.")
        if any(not item.strip() for item in value):
            raise serializers.ValidationError("Skills cannot contain empty values.")
        return value

    def validate_success_rate(self, value):
        if value is not None and not 0 <= value <= 100:
            raise serializers.ValidationError("Success rate must be between 0 and 100.")
        return value

    def validate_rating(self, value):
        if value is not None and not Decimal('0') <= value <= Decimal('5'):
            raise serializers.ValidationError("Rating must be between 0.00 and 5.00.")
        return value


class UserUpdateSerializer(UserSerializer):
    """Partial update of a user profile; unknown keys are rejected."""

    reject_unknown_fields = True


# ============================================================================
# Project Serializers
# ============================================================================

class ProjectSerializer(CamelCaseSerializerMixin, serializers.ModelSerializer):
    """
    Serializer for projects.

    ``status`` defaults to ``open`` and ``escrowStatus`` to ``pending`` when
    omitted. ``clientId`` must reference an existing user.
    """

    client_id = UUIDRelatedField(source='client', queryset=User.objects.all())
    freelancer_id = UUIDRelatedField(
        source='freelancer',
        queryset=User.objects.all(),
        required=False,
        allow_null=True
    )

    class Meta:
        model = Project
        fields = [
            'id',
            'title',
            'description',
            'client_id',
            'freelancer_id',
            'total_budget',
            'status',
            'category',
            'tags',
            'deadline',
            'smart_contract_address',
            'escrow_status',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def validate_title(self, value):
        return validate_not_blank(value, 'Title')

    def validate_description(self, value):
        return validate_not_blank(value, 'Description')

    def validate_total_budget(self, value):
        return validate_positive(value, 'Total budget')

    def validate_tags(self, value):
        if value is None:
            return []
        if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
            raise serializers.ValidationError("Tags must be a list of strings.")
        return value

    def validate(self, attrs):
        client = attrs.get('client', getattr(self.instance, 'client', None))
        freelancer = attrs.get('freelancer', getattr(self.instance, 'freelancer', None))
        if client is not None and freelancer is not None and client.pk == freelancer.pk:
            raise serializers.ValidationError({
                'freelancer_id': 'A client cannot hire themselves.'
            })
        return attrs


class ProjectUpdateSerializer(ProjectSerializer):
    """Partial update of a project; the client cannot be reassigned."""

    reject_unknown_fields = True

    client_id = serializers.UUIDField(read_only=True)


# ============================================================================
# Project Module Serializers
# ============================================================================

class ProjectModuleSerializer(CamelCaseSerializerMixin, serializers.ModelSerializer):
    """
    Serializer for project modules.

    The project is taken from the URL, never from the payload.
    """

    project_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = ProjectModule
        fields = [
            'id',
            'project_id',
            'name',
            'description',
            'budget',
            'deadline',
            'status',
            'priority',
            'progress',
            'order',
            'created_at',
        ]
        read_only_fields = ['id', 'project_id', 'created_at']
        # Order uniqueness is checked by the model against the bound project.
        validators = []

    def validate_name(self, value):
        return validate_not_blank(value, 'Module name')

    def validate_budget(self, value):
        return validate_positive(value, 'Module budget')

    def validate_progress(self, value):
        if value is not None and not 0 <= value <= 100:
            raise serializers.ValidationError("Progress must be between 0 and 100.")
        return value


class ProjectModuleUpdateSerializer(ProjectModuleSerializer):
    reject_unknown_fields = True


# ============================================================================
# Smart Contract Serializers
# ============================================================================

class SmartContractTermsSerializer(CamelCaseSerializerMixin, serializers.ModelSerializer):
    """
    Serializer for smart contract terms.

    Only the terms document and payment schedule are required; every other
    field falls back to the platform defaults.
    """

    project_id = serializers.UUIDField(read_only=True)
    terms = serializers.DictField()

    class Meta:
        model = SmartContractTerms
        fields = [
            'id',
            'project_id',
            'terms',
            'payment_schedule',
            'revision_rounds',
            'cancellation_terms',
            'quality_standards',
            'dispute_resolution',
            'platform_fee',
            'gas_fee_responsibility',
            'auto_release_after_days',
            'is_active',
            'created_at',
        ]
        read_only_fields = ['id', 'project_id', 'created_at']
        validators = []

    def validate_platform_fee(self, value):
        if value is not None and not Decimal('0') <= value <= Decimal('10'):
            raise serializers.ValidationError("Platform fee must be between 0 and 10 percent.")
        return value

    def validate_auto_release_after_days(self, value):
        if value is not None and not 1 <= value <= 30:
            raise serializers.ValidationError("Auto release must be between 1 and 30 days.")
        return value


class SmartContractTermsUpdateSerializer(SmartContractTermsSerializer):
    reject_unknown_fields = True


# ============================================================================
# Proposal Serializers
# ============================================================================

class ProposalSerializer(CamelCaseSerializerMixin, serializers.ModelSerializer):
    """Serializer for proposals; the project comes from the URL."""

    project_id = serializers.UUIDField(read_only=True)
    freelancer_id = UUIDRelatedField(source='freelancer', queryset=User.objects.all())

    class Meta:
        model = Proposal
        fields = [
            'id',
            'project_id',
            'freelancer_id',
            'cover_letter',
            'proposed_budget',
            'proposed_deadline',
            'status',
            'created_at',
        ]
        read_only_fields = ['id', 'project_id', 'created_at']

    def validate_cover_letter(self, value):
        return validate_not_blank(value, 'Cover letter')

    def validate_proposed_budget(self, value):
        return validate_positive(value, 'Proposed budget')


class ProposalUpdateSerializer(ProposalSerializer):
    """Partial update of a proposal; the bidding freelancer is fixed."""

    reject_unknown_fields = True

    freelancer_id = serializers.UUIDField(read_only=True)


# ============================================================================
# Message Serializers
# ============================================================================

class MessageSerializer(CamelCaseSerializerMixin, serializers.ModelSerializer):
    """
    Serializer for direct messages.

    ``isRead`` and ``createdAt`` are managed by the server: new messages are
    unread and only the mark-read endpoint flips the flag.
    """

    project_id = UUIDRelatedField(
        source='project',
        queryset=Project.objects.all(),
        required=False,
        allow_null=True
    )
    sender_id = UUIDRelatedField(source='sender', queryset=User.objects.all())
    receiver_id = UUIDRelatedField(source='receiver', queryset=User.objects.all())

    class Meta:
        model = Message
        fields = [
            'id',
            'project_id',
            'sender_id',
            'receiver_id',
            'content',
            'file_attachment',
            'is_read',
            'created_at',
        ]
        read_only_fields = ['id', 'is_read', 'created_at']

    def validate_content(self, value):
        return validate_not_blank(value, 'Message content')

    def validate(self, attrs):
        sender = attrs.get('sender')
        receiver = attrs.get('receiver')
        if sender is not None and receiver is not None and sender.pk == receiver.pk:
            raise serializers.ValidationError({
                'receiver_id': 'Users cannot message themselves.'
            })
        return attrs


class ConversationSerializer(serializers.Serializer):
    """Read-only view of one inbox row produced by the conversation aggregator."""

    def to_representation(self, instance):
        return {
            'user': UserSerializer(instance.user).data,
            'lastMessage': MessageSerializer(instance.last_message).data,
            'unreadCount': instance.unread_count,
        }


# ============================================================================
# Milestone Serializers
# ============================================================================

class MilestoneSerializer(CamelCaseSerializerMixin, serializers.ModelSerializer):
    """
    Serializer for milestones.

    New milestones always start ``pending``; ``completedAt`` and ``paidAt``
    are stamped by the server on the matching status transition.
    """

    project_id = serializers.UUIDField(read_only=True)
    module_id = UUIDRelatedField(
        source='module',
        queryset=ProjectModule.objects.all(),
        required=False,
        allow_null=True
    )

    class Meta:
        model = Milestone
        fields = [
            'id',
            'project_id',
            'module_id',
            'description',
            'amount',
            'status',
            'completed_at',
            'paid_at',
            'created_at',
        ]
        read_only_fields = ['id', 'project_id', 'status', 'completed_at', 'paid_at', 'created_at']

    def validate_description(self, value):
        return validate_not_blank(value, 'Description')

    def validate_amount(self, value):
        return validate_positive(value, 'Amount')

    def validate(self, attrs):
        module = attrs.get('module')
        project = self.context.get('project') or getattr(self.instance, 'project', None)
        if module is not None and project is not None and module.project_id != project.pk:
            raise serializers.ValidationError({
                'module_id': 'Module does not belong to this project.'
            })
        return attrs


class MilestoneUpdateSerializer(MilestoneSerializer):
    """Partial update of a milestone, including forward status transitions."""

    reject_unknown_fields = True

    class Meta(MilestoneSerializer.Meta):
        read_only_fields = ['id', 'project_id', 'completed_at', 'paid_at', 'created_at']
