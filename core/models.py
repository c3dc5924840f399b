"""
Domain models for the Freelance Marketplace.
"""

import uuid
from decimal import Decimal

from django.contrib.auth.models import AbstractUser
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from .validators import validate_string_list, validate_terms_document, validate_wallet_address


class User(AbstractUser):
    """
    Custom User model extending Django's AbstractUser.

    A single account type covers both sides of the marketplace; the
    ``is_freelancer`` flag marks users offering their services.

    Additional fields:
    - id: UUID primary key
    - email: Required, unique email address
    - wallet_address: Optional wallet address
    - profile_image: Optional avatar URL
    - bio: Optional free text
    - skills: Ordered list of skill names
    - hourly_rate: Optional hourly rate
    - success_rate: Percentage of successful projects (0-100)
    - completed_projects: Number of completed projects
    - rating: Average rating (0.00-5.00)
    - total_reviews: Number of reviews received
    - is_freelancer: Whether the user offers freelance work
    - created_at: Account creation timestamp
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    email = models.EmailField(
        _('email address'),
        unique=True,
        blank=False,
        null=False,
        error_messages={
            'unique': _('A user with that email already exists.'),
        },
        help_text=_('Required. Enter a valid email address.')
    )

    wallet_address = models.CharField(
        _('wallet address'),
        max_length=100,
        blank=True,
        null=True,
        validators=[validate_wallet_address],
        help_text=_('Optional. Wallet address connected by the user.')
    )

    profile_image = models.URLField(
        _('profile image'),
        max_length=500,
        blank=True,
        null=True,
        help_text=_('Optional. URL of the profile picture.')
    )

    bio = models.TextField(
        _('bio'),
        blank=True,
        null=True
    )

    skills = models.JSONField(
        _('skills'),
        default=list,
        blank=True,
        validators=[validate_string_list],
        help_text=_('Ordered list of skill names.')
    )

    hourly_rate = models.DecimalField(
        _('hourly rate'),
        max_digits=10,
        decimal_places=4,
        blank=True,
        null=True,
        validators=[MinValueValidator(Decimal('0'), message=_('Hourly rate cannot be negative.'))]
    )

    success_rate = models.PositiveSmallIntegerField(
        _('success rate'),
        default=0,
        validators=[MaxValueValidator(100, message=_('Success rate cannot exceed 100.'))],
        help_text=_('Percentage of projects completed successfully.')
    )

    completed_projects = models.PositiveIntegerField(
        _('completed projects'),
        default=0
    )

    rating = models.DecimalField(
        _('rating'),
        max_digits=3,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[
            MinValueValidator(Decimal('0.00'), message=_('Rating cannot be negative.')),
            MaxValueValidator(Decimal('5.00'), message=_('Rating cannot exceed 5.00.'))
        ]
    )

    total_reviews = models.PositiveIntegerField(
        _('total reviews'),
        default=0
    )

    is_freelancer = models.BooleanField(
        _('freelancer status'),
        default=False,
        help_text=_('Indicates whether the user offers freelance services.')
    )

    created_at = models.DateTimeField(
        _('created at'),
        auto_now_add=True
    )

    class Meta:
        verbose_name = _('user')
        verbose_name_plural = _('users')
        ordering = ['created_at']
        indexes = [
            models.Index(fields=['is_freelancer'], name='user_is_freelancer_idx'),
        ]

    def __str__(self):
        return self.username

    def clean(self):
        """
        Validate model fields.

        Ensures:
        - Email is provided
        - Email is lowercase for case-insensitive uniqueness

        Raises:
            ValidationError: If validation fails
        """
        super().clean()

        if self.email:
            self.email = self.email.lower()

        if not self.email:
            raise ValidationError({
                'email': _('Email address is required.')
            })

    def save(self, *args, **kwargs):
        """Normalize email and run full validation before saving."""
        if self.email:
            self.email = self.email.lower()

        # Marketplace accounts do not log in through this service.
        if not self.password:
            self.set_unusable_password()

        self.full_clean()
        super().save(*args, **kwargs)


class Project(models.Model):
    """
    Project posted by a client.

    Fields:
    - client: User who posted the project
    - freelancer: Optional user hired for the project
    - title / description: Project summary
    - total_budget: Total budget (must be > 0)
    - status: open, in_progress, completed, cancelled
    - category / tags: Classification
    - deadline: Optional due date
    - smart_contract_address: Placeholder contract address
    - escrow_status: pending, funded, released
    - created_at / updated_at: Timestamps
    """

    STATUS_CHOICES = [
        ('open', 'Open'),
        ('in_progress', 'In Progress'),
        ('completed', 'Completed'),
        ('cancelled', 'Cancelled'),
    ]

    ESCROW_STATUS_CHOICES = [
        ('pending', 'Pending'),
        ('funded', 'Funded'),
        ('released', 'Released'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    client = models.ForeignKey(
        User,
        on_delete=models.PROTECT,
        related_name='client_projects',
        help_text=_('Client who posted the project')
    )

    freelancer = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        related_name='freelancer_projects',
        blank=True,
        null=True,
        help_text=_('Freelancer hired for the project')
    )

    title = models.CharField(
        _('title'),
        max_length=200
    )

    description = models.TextField(
        _('description')
    )

    total_budget = models.DecimalField(
        _('total budget'),
        max_digits=10,
        decimal_places=4
    )

    status = models.CharField(
        _('status'),
        max_length=20,
        choices=STATUS_CHOICES,
        default='open'
    )

    category = models.CharField(
        _('category'),
        max_length=100,
        blank=True,
        null=True
    )

    tags = models.JSONField(
        _('tags'),
        default=list,
        blank=True,
        validators=[validate_string_list]
    )

    deadline = models.DateTimeField(
        _('deadline'),
        blank=True,
        null=True
    )

    smart_contract_address = models.CharField(
        _('smart contract address'),
        max_length=100,
        blank=True,
        null=True,
        validators=[validate_wallet_address]
    )

    escrow_status = models.CharField(
        _('escrow status'),
        max_length=20,
        choices=ESCROW_STATUS_CHOICES,
        default='pending'
    )

    created_at = models.DateTimeField(
        _('created at'),
        auto_now_add=True
    )

    updated_at = models.DateTimeField(
        _('updated at'),
        auto_now=True
    )

    class Meta:
        verbose_name = _('project')
        verbose_name_plural = _('projects')
        ordering = ['created_at']
        indexes = [
            models.Index(fields=['client'], name='project_client_idx'),
            models.Index(fields=['freelancer'], name='project_freelancer_idx'),
            models.Index(fields=['status'], name='project_status_idx'),
        ]

    def __str__(self):
        return self.title

    def clean(self):
        """
        Validate model fields.

        Ensures:
        - Title and description are not blank
        - Total budget is greater than 0
        - Client and freelancer are different users

        Raises:
            ValidationError: If validation fails
        """
        super().clean()

        if not self.title or not self.title.strip():
            raise ValidationError({
                'title': _('Title cannot be empty.')
            })

        if not self.description or not self.description.strip():
            raise ValidationError({
                'description': _('Description cannot be empty.')
            })

        if self.total_budget is not None and self.total_budget <= 0:
            raise ValidationError({
                'total_budget': _('Total budget must be greater than 0.')
            })

        if self.client_id and self.freelancer_id and self.client_id == self.freelancer_id:
            raise ValidationError({
                'freelancer': _('A client cannot hire themselves.')
            })

    def save(self, *args, **kwargs):
        self.full_clean()
        super().save(*args, **kwargs)


class ProjectModule(models.Model):
    """
    A budgeted unit of work inside a project.

    Modules are displayed in ascending ``order``; the order value is unique
    within a project. Progress is kept consistent with status: pending
    modules have no progress and completed modules are at 100.
    """

    STATUS_CHOICES = [
        ('pending', 'Pending'),
        ('in_progress', 'In Progress'),
        ('completed', 'Completed'),
    ]

    PRIORITY_CHOICES = [
        ('low', 'Low'),
        ('medium', 'Medium'),
        ('high', 'High'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    project = models.ForeignKey(
        Project,
        on_delete=models.CASCADE,
        related_name='modules'
    )

    name = models.CharField(
        _('name'),
        max_length=200
    )

    description = models.TextField(
        _('description'),
        blank=True,
        null=True
    )

    budget = models.DecimalField(
        _('budget'),
        max_digits=10,
        decimal_places=4
    )

    deadline = models.DateTimeField(
        _('deadline'),
        blank=True,
        null=True
    )

    status = models.CharField(
        _('status'),
        max_length=20,
        choices=STATUS_CHOICES,
        default='pending'
    )

    priority = models.CharField(
        _('priority'),
        max_length=10,
        choices=PRIORITY_CHOICES,
        default='medium'
    )

    progress = models.PositiveSmallIntegerField(
        _('progress'),
        default=0,
        validators=[MaxValueValidator(100, message=_('Progress cannot exceed 100.'))]
    )

    order = models.IntegerField(
        _('order'),
        help_text=_('Display position of the module within its project')
    )

    created_at = models.DateTimeField(
        _('created at'),
        auto_now_add=True
    )

    class Meta:
        verbose_name = _('project module')
        verbose_name_plural = _('project modules')
        ordering = ['project', 'order']
        constraints = [
            models.UniqueConstraint(
                fields=['project', 'order'],
                name='unique_module_order_per_project'
            )
        ]

    def __str__(self):
        return f"{self.order}. {self.name}"

    def clean(self):
        super().clean()

        if not self.name or not self.name.strip():
            raise ValidationError({
                'name': _('Module name cannot be empty.')
            })

        if self.budget is not None and self.budget <= 0:
            raise ValidationError({
                'budget': _('Module budget must be greater than 0.')
            })

        if self.status == 'completed' and self.progress != 100:
            raise ValidationError({
                'progress': _('A completed module must have progress 100.')
            })

        if self.status == 'pending' and self.progress:
            raise ValidationError({
                'progress': _('A pending module cannot have progress.')
            })

    def save(self, *args, **kwargs):
        self.full_clean()
        super().save(*args, **kwargs)


class SmartContractTerms(models.Model):
    """
    Payment terms attached to a project.

    The contract is a plain record; nothing is deployed anywhere. A project
    may keep inactive historical terms but at most one active set.
    """

    PAYMENT_SCHEDULE_CHOICES = [
        ('upon_module_completion', 'Upon module completion'),
        ('weekly_milestones', 'Weekly milestones'),
        ('50_50_split', '50% upfront, 50% completion'),
        ('milestone_based', 'Milestone-based payments'),
    ]

    DISPUTE_RESOLUTION_CHOICES = [
        ('community_arbitration', 'Community Arbitration'),
        ('platform_mediation', 'Platform Mediation'),
        ('external_arbitrator', 'External Arbitrator'),
        ('direct_negotiation', 'Direct Negotiation Only'),
    ]

    GAS_FEE_CHOICES = [
        ('split', 'Split between parties'),
        ('client_pays', 'Client pays all fees'),
        ('freelancer_pays', 'Freelancer pays all fees'),
        ('platform_covers', 'Platform covers fees'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    project = models.ForeignKey(
        Project,
        on_delete=models.CASCADE,
        related_name='contract_terms'
    )

    terms = models.JSONField(
        _('terms'),
        blank=True,
        validators=[validate_terms_document],
        help_text=_('Free-form key/value terms document')
    )

    payment_schedule = models.CharField(
        _('payment schedule'),
        max_length=50,
        choices=PAYMENT_SCHEDULE_CHOICES
    )

    revision_rounds = models.PositiveSmallIntegerField(
        _('revision rounds'),
        default=3
    )

    cancellation_terms = models.TextField(
        _('cancellation terms'),
        blank=True,
        null=True
    )

    quality_standards = models.TextField(
        _('quality standards'),
        blank=True,
        null=True
    )

    dispute_resolution = models.CharField(
        _('dispute resolution'),
        max_length=50,
        choices=DISPUTE_RESOLUTION_CHOICES,
        default='community_arbitration'
    )

    platform_fee = models.DecimalField(
        _('platform fee'),
        max_digits=5,
        decimal_places=2,
        default=Decimal('2.50'),
        validators=[
            MinValueValidator(Decimal('0'), message=_('Platform fee cannot be negative.')),
            MaxValueValidator(Decimal('10'), message=_('Platform fee cannot exceed 10%.'))
        ],
        help_text=_('Percentage charged by the platform')
    )

    gas_fee_responsibility = models.CharField(
        _('gas fee responsibility'),
        max_length=20,
        choices=GAS_FEE_CHOICES,
        default='split'
    )

    auto_release_after_days = models.PositiveSmallIntegerField(
        _('auto release after days'),
        default=7,
        validators=[
            MinValueValidator(1, message=_('Auto release must be at least 1 day.')),
            MaxValueValidator(30, message=_('Auto release cannot exceed 30 days.'))
        ]
    )

    is_active = models.BooleanField(
        _('active'),
        default=True
    )

    created_at = models.DateTimeField(
        _('created at'),
        auto_now_add=True
    )

    class Meta:
        verbose_name = _('smart contract terms')
        verbose_name_plural = _('smart contract terms')
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(
                fields=['project'],
                condition=models.Q(is_active=True),
                name='unique_active_contract_per_project',
                violation_error_message=_('This project already has active contract terms.')
            )
        ]

    def __str__(self):
        return f"Contract terms for {self.project}"

    def save(self, *args, **kwargs):
        self.full_clean()
        super().save(*args, **kwargs)


class Proposal(models.Model):
    """
    Bid submitted by a freelancer on a project.
    """

    STATUS_CHOICES = [
        ('pending', 'Pending'),
        ('accepted', 'Accepted'),
        ('rejected', 'Rejected'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    project = models.ForeignKey(
        Project,
        on_delete=models.CASCADE,
        related_name='proposals'
    )

    freelancer = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name='proposals'
    )

    cover_letter = models.TextField(
        _('cover letter')
    )

    proposed_budget = models.DecimalField(
        _('proposed budget'),
        max_digits=10,
        decimal_places=4
    )

    proposed_deadline = models.DateTimeField(
        _('proposed deadline'),
        blank=True,
        null=True
    )

    status = models.CharField(
        _('status'),
        max_length=20,
        choices=STATUS_CHOICES,
        default='pending'
    )

    created_at = models.DateTimeField(
        _('created at'),
        auto_now_add=True
    )

    class Meta:
        verbose_name = _('proposal')
        verbose_name_plural = _('proposals')
        ordering = ['created_at']
        indexes = [
            models.Index(fields=['project'], name='proposal_project_idx'),
            models.Index(fields=['freelancer'], name='proposal_freelancer_idx'),
        ]

    def __str__(self):
        return f"Proposal by {self.freelancer} on {self.project}"

    def clean(self):
        super().clean()

        if not self.cover_letter or not self.cover_letter.strip():
            raise ValidationError({
                'cover_letter': _('Cover letter cannot be empty.')
            })

        if self.proposed_budget is not None and self.proposed_budget <= 0:
            raise ValidationError({
                'proposed_budget': _('Proposed budget must be greater than 0.')
            })

    def save(self, *args, **kwargs):
        self.full_clean()
        super().save(*args, **kwargs)


class Message(models.Model):
    """
    Direct message between two users, optionally tied to a project.

    ``created_at`` never changes after creation and ``is_read`` only moves
    from False to True.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    project = models.ForeignKey(
        Project,
        on_delete=models.SET_NULL,
        related_name='messages',
        blank=True,
        null=True
    )

    sender = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name='sent_messages'
    )

    receiver = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name='received_messages'
    )

    content = models.TextField(
        _('content')
    )

    file_attachment = models.CharField(
        _('file attachment'),
        max_length=500,
        blank=True,
        null=True,
        help_text=_('Reference to an uploaded attachment')
    )

    is_read = models.BooleanField(
        _('read'),
        default=False
    )

    created_at = models.DateTimeField(
        _('created at'),
        default=timezone.now,
        editable=False
    )

    class Meta:
        verbose_name = _('message')
        verbose_name_plural = _('messages')
        ordering = ['created_at']
        indexes = [
            models.Index(fields=['sender', 'receiver'], name='message_participants_idx'),
            models.Index(fields=['receiver', 'is_read'], name='message_unread_idx'),
            models.Index(fields=['created_at'], name='message_created_idx'),
        ]

    def __str__(self):
        return f"From {self.sender} to {self.receiver}: {self.content[:50]}"

    def clean(self):
        super().clean()

        if not self.content or not self.content.strip():
            raise ValidationError({
                'content': _('Message content cannot be empty.')
            })

        if self.sender_id and self.receiver_id and self.sender_id == self.receiver_id:
            raise ValidationError({
                'receiver': _('Users cannot message themselves.')
            })

    def mark_as_read(self):
        """
        Flag the message as read.

        Returns:
            bool: True if the flag changed, False if it was already read
        """
        if self.is_read:
            return False
        self.is_read = True
        self.save(update_fields=['is_read'])
        return True

    def save(self, *args, **kwargs):
        self.full_clean()
        super().save(*args, **kwargs)


class Milestone(models.Model):
    """
    Payment milestone of a project, optionally tied to a module.

    Status moves pending -> completed -> paid and never backwards.
    ``completed_at`` and ``paid_at`` are stamped once, at the matching
    transition.
    """

    STATUS_CHOICES = [
        ('pending', 'Pending'),
        ('completed', 'Completed'),
        ('paid', 'Paid'),
    ]

    TRANSITIONS = {
        'pending': 'completed',
        'completed': 'paid',
    }

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    project = models.ForeignKey(
        Project,
        on_delete=models.CASCADE,
        related_name='milestones'
    )

    module = models.ForeignKey(
        ProjectModule,
        on_delete=models.SET_NULL,
        related_name='milestones',
        blank=True,
        null=True
    )

    description = models.TextField(
        _('description')
    )

    amount = models.DecimalField(
        _('amount'),
        max_digits=10,
        decimal_places=4
    )

    status = models.CharField(
        _('status'),
        max_length=20,
        choices=STATUS_CHOICES,
        default='pending'
    )

    completed_at = models.DateTimeField(
        _('completed at'),
        blank=True,
        null=True
    )

    paid_at = models.DateTimeField(
        _('paid at'),
        blank=True,
        null=True
    )

    created_at = models.DateTimeField(
        _('created at'),
        auto_now_add=True
    )

    class Meta:
        verbose_name = _('milestone')
        verbose_name_plural = _('milestones')
        ordering = ['created_at']
        indexes = [
            models.Index(fields=['project'], name='milestone_project_idx'),
            models.Index(fields=['status'], name='milestone_status_idx'),
        ]

    def __str__(self):
        return f"{self.description[:50]} ({self.status})"

    def clean(self):
        super().clean()

        if not self.description or not self.description.strip():
            raise ValidationError({
                'description': _('Description cannot be empty.')
            })

        if self.amount is not None and self.amount <= 0:
            raise ValidationError({
                'amount': _('Amount must be greater than 0.')
            })

        if self.module_id and self.project_id and self.module.project_id != self.project_id:
            raise ValidationError({
                'module': _('Module does not belong to this project.')
            })

    def can_transition_to(self, new_status):
        """
        Validate if the milestone can move to ``new_status``.

        Valid transitions:
        - pending -> completed
        - completed -> paid
        - paid -> (terminal)

        Returns:
            tuple: (is_valid: bool, error_message: str or None)
        """
        current_status = self.status

        if current_status == new_status:
            return True, None

        if current_status == 'paid':
            return False, 'Cannot modify a paid milestone.'

        if self.TRANSITIONS.get(current_status) == new_status:
            return True, None

        return False, f'Invalid status transition from {current_status} to {new_status}.'

    def transition_to(self, new_status, current_time=None):
        """
        Apply a status transition and stamp its timestamp.

        Raises:
            ValidationError: If the transition is not allowed
        """
        is_valid, error_message = self.can_transition_to(new_status)
        if not is_valid:
            raise ValidationError({'status': error_message})

        if new_status == self.status:
            return

        if current_time is None:
            current_time = timezone.now()

        self.status = new_status
        if new_status == 'completed' and self.completed_at is None:
            self.completed_at = current_time
        elif new_status == 'paid' and self.paid_at is None:
            self.paid_at = current_time

    def save(self, *args, **kwargs):
        self.full_clean()
        super().save(*args, **kwargs)
