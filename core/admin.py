"""
Django admin configuration for the marketplace models.
"""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.translation import gettext_lazy as _

from .models import (
    Message,
    Milestone,
    Project,
    ProjectModule,
    Proposal,
    SmartContractTerms,
    User,
)


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """
    Admin interface for marketplace users.

    Extends Django's UserAdmin with the freelancer profile fields.
    """

    list_display = [
        'username',
        'email',
        'is_freelancer',
        'rating',
        'completed_projects',
        'is_staff',
        'created_at',
    ]

    list_filter = [
        'is_freelancer',
        'is_staff',
        'is_active',
        'created_at',
    ]

    search_fields = [
        'username',
        'email',
        'first_name',
        'last_name',
        'wallet_address',
    ]

    ordering = ['-created_at']

    fieldsets = (
        (None, {
            'fields': ('username', 'password')
        }),
        (_('Personal Info'), {
            'fields': ('first_name', 'last_name', 'email', 'profile_image', 'bio')
        }),
        (_('Freelancer Profile'), {
            'fields': (
                'is_freelancer',
                'skills',
                'hourly_rate',
                'wallet_address',
            )
        }),
        (_('Reputation'), {
            'fields': ('rating', 'total_reviews', 'success_rate', 'completed_projects')
        }),
        (_('Permissions'), {
            'fields': (
                'is_active',
                'is_staff',
                'is_superuser',
                'groups',
                'user_permissions',
            ),
            'classes': ('collapse',),
        }),
        (_('Important Dates'), {
            'fields': ('last_login', 'date_joined', 'created_at'),
            'classes': ('collapse',),
        }),
    )

    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': (
                'username',
                'email',
                'password1',
                'password2',
                'is_freelancer',
            ),
        }),
    )

    readonly_fields = ['created_at', 'last_login', 'date_joined']

    date_hierarchy = 'created_at'

    list_per_page = 25


class ProjectModuleInline(admin.TabularInline):
    model = ProjectModule
    extra = 0
    fields = ['order', 'name', 'budget', 'status', 'priority', 'progress']
    ordering = ['order']


class MilestoneInline(admin.TabularInline):
    model = Milestone
    extra = 0
    fields = ['description', 'module', 'amount', 'status', 'completed_at', 'paid_at']
    readonly_fields = ['completed_at', 'paid_at']


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    """Admin interface for Project model."""

    list_display = [
        'title',
        'client',
        'freelancer',
        'total_budget',
        'status',
        'escrow_status',
        'created_at',
    ]

    list_filter = [
        'status',
        'escrow_status',
        'category',
        'created_at',
    ]

    search_fields = [
        'title',
        'description',
        'client__username',
        'client__email',
        'freelancer__username',
    ]

    readonly_fields = ['created_at', 'updated_at']

    ordering = ['-created_at']

    date_hierarchy = 'created_at'

    list_per_page = 25

    inlines = [ProjectModuleInline, MilestoneInline]

    fieldsets = (
        (None, {
            'fields': ('client', 'freelancer', 'title', 'description')
        }),
        (_('Budget & Classification'), {
            'fields': ('total_budget', 'category', 'tags', 'deadline')
        }),
        (_('Status'), {
            'fields': ('status', 'escrow_status', 'smart_contract_address')
        }),
        (_('Timestamps'), {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',),
        }),
    )


@admin.register(ProjectModule)
class ProjectModuleAdmin(admin.ModelAdmin):
    """Admin interface for ProjectModule model."""

    list_display = [
        'name',
        'project',
        'order',
        'budget',
        'status',
        'priority',
        'progress',
    ]

    list_filter = [
        'status',
        'priority',
    ]

    search_fields = [
        'name',
        'project__title',
    ]

    readonly_fields = ['created_at']

    ordering = ['project', 'order']

    list_per_page = 50


@admin.register(SmartContractTerms)
class SmartContractTermsAdmin(admin.ModelAdmin):
    """Admin interface for SmartContractTerms model."""

    list_display = [
        'project',
        'payment_schedule',
        'dispute_resolution',
        'platform_fee',
        'is_active',
        'created_at',
    ]

    list_filter = [
        'is_active',
        'payment_schedule',
        'dispute_resolution',
        'gas_fee_responsibility',
    ]

    search_fields = [
        'project__title',
    ]

    readonly_fields = ['created_at']

    ordering = ['-created_at']

    list_per_page = 25

    fieldsets = (
        (None, {
            'fields': ('project', 'terms', 'is_active')
        }),
        (_('Payment'), {
            'fields': (
                'payment_schedule',
                'platform_fee',
                'gas_fee_responsibility',
                'auto_release_after_days',
            )
        }),
        (_('Agreement'), {
            'fields': (
                'revision_rounds',
                'cancellation_terms',
                'quality_standards',
                'dispute_resolution',
            )
        }),
        (_('Timestamps'), {
            'fields': ('created_at',),
            'classes': ('collapse',),
        }),
    )


@admin.register(Proposal)
class ProposalAdmin(admin.ModelAdmin):
    """Admin interface for Proposal model."""

    list_display = [
        'project',
        'freelancer',
        'proposed_budget',
        'status',
        'created_at',
    ]

    list_filter = [
        'status',
        'created_at',
    ]

    search_fields = [
        'project__title',
        'freelancer__username',
        'freelancer__email',
        'cover_letter',
    ]

    readonly_fields = ['created_at']

    ordering = ['-created_at']

    list_per_page = 25


@admin.register(Message)
class MessageAdmin(admin.ModelAdmin):
    """Admin interface for Message model."""

    list_display = [
        'sender',
        'receiver',
        'project',
        'is_read',
        'created_at',
    ]

    list_filter = [
        'is_read',
        'created_at',
    ]

    search_fields = [
        'sender__username',
        'receiver__username',
        'content',
    ]

    readonly_fields = ['created_at']

    ordering = ['-created_at']

    date_hierarchy = 'created_at'

    list_per_page = 50


@admin.register(Milestone)
class MilestoneAdmin(admin.ModelAdmin):
    """Admin interface for Milestone model."""

    list_display = [
        'description',
        'project',
        'module',
        'amount',
        'status',
        'completed_at',
        'paid_at',
    ]

    list_filter = [
        'status',
        'created_at',
    ]

    search_fields = [
        'description',
        'project__title',
    ]

    # Timestamps are stamped by status transitions.
    readonly_fields = ['completed_at', 'paid_at', 'created_at']

    ordering = ['-created_at']

    list_per_page = 25
