"""
Query and command operations over the marketplace entities.

Every entity type gets the same contract:

- ``get_*`` returns the instance or ``None`` when the id is unknown or malformed
- ``list_*`` returns an ordered QuerySet
- ``create_*`` assigns a fresh id, applies model defaults and raises
  ``django.core.exceptions.ValidationError`` on invalid input
- ``update_*`` shallow-merges the given fields and returns the instance, or
  ``None`` when the id is unknown

Updates lock the target row for the duration of the call so concurrent
writers never drop each other's fields within a single update.
"""

import logging
import uuid

from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import Q

from .models import (
    Message,
    Milestone,
    Project,
    ProjectModule,
    Proposal,
    SmartContractTerms,
    User,
)
from .utils import get_contract_address_generator

logger = logging.getLogger(__name__)


def as_uuid(value):
    """Return ``value`` as a UUID, or None when it is not a valid id."""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError, AttributeError):
        return None


def _get(model, pk):
    pk = as_uuid(pk)
    if pk is None:
        return None
    return model.objects.filter(pk=pk).first()


def _create(model, fields):
    with transaction.atomic():
        instance = model(**fields)
        instance.save()
    return instance


def _update(model, pk, changes, before_save=None):
    pk = as_uuid(pk)
    if pk is None:
        return None

    with transaction.atomic():
        instance = model.objects.select_for_update().filter(pk=pk).first()
        if instance is None:
            return None

        for field, value in changes.items():
            setattr(instance, field, value)

        if before_save is not None:
            before_save(instance, changes)

        instance.save()
    return instance


# ============================================================================
# Users
# ============================================================================

def get_user(user_id):
    return _get(User, user_id)


def get_user_by_email(email):
    if not email:
        return None
    return User.objects.filter(email__iexact=email.strip()).first()


def list_freelancers():
    return User.objects.filter(is_freelancer=True).order_by('created_at')


def create_user(**fields):
    """
    Create a marketplace user.

    Raises:
        ValidationError: If required fields are missing or the username or
            email is already taken
    """
    return _create(User, fields)


def update_user(user_id, **changes):
    return _update(User, user_id, changes)


# ============================================================================
# Projects
# ============================================================================

def get_project(project_id):
    return _get(Project, project_id)


def list_projects(client_id=None, freelancer_id=None):
    """
    List projects, optionally filtered by client or freelancer.

    The filters are mutually exclusive; when both are given the client
    filter wins. Malformed ids match nothing.
    """
    queryset = Project.objects.order_by('created_at')

    if client_id:
        client_id = as_uuid(client_id)
        return queryset.filter(client_id=client_id) if client_id else queryset.none()

    if freelancer_id:
        freelancer_id = as_uuid(freelancer_id)
        return queryset.filter(freelancer_id=freelancer_id) if freelancer_id else queryset.none()

    return queryset


def create_project(**fields):
    """
    Create a project.

    ``status`` defaults to ``open`` and ``escrow_status`` to ``pending``.
    """
    return _create(Project, fields)


def update_project(project_id, **changes):
    """Update a project; ``updated_at`` is refreshed on every call."""
    return _update(Project, project_id, changes)


# ============================================================================
# Project Modules
# ============================================================================

def get_project_module(module_id):
    return _get(ProjectModule, module_id)


def _sync_module_progress(module, changes):
    # A status change without an explicit progress snaps progress to match.
    if 'status' in changes and 'progress' not in changes:
        if module.status == 'completed':
            module.progress = 100
        elif module.status == 'pending':
            module.progress = 0


def list_project_modules(project_id):
    """Modules of a project in ascending display order."""
    project_id = as_uuid(project_id)
    if project_id is None:
        return ProjectModule.objects.none()
    return ProjectModule.objects.filter(project_id=project_id).order_by('order')


def create_project_module(project, **fields):
    with transaction.atomic():
        module = ProjectModule(project=project, **fields)
        _sync_module_progress(module, fields)
        module.save()
    return module


def update_project_module(module_id, **changes):
    return _update(ProjectModule, module_id, changes, before_save=_sync_module_progress)


# ============================================================================
# Smart Contract Terms
# ============================================================================

def get_smart_contract_terms(contract_id):
    return _get(SmartContractTerms, contract_id)


def get_smart_contract(project_id):
    """
    Return the contract terms of a project.

    The active record is preferred; otherwise the most recent one.
    """
    project_id = as_uuid(project_id)
    if project_id is None:
        return None
    return (
        SmartContractTerms.objects
        .filter(project_id=project_id)
        .order_by('-is_active', '-created_at')
        .first()
    )


def create_smart_contract(project, **fields):
    """
    Create contract terms for a project.

    When the project has no contract address yet, a placeholder address is
    generated through ``CONTRACT_ADDRESS_GENERATOR`` and stored on it.

    Raises:
        ValidationError: If the project already has active terms
    """
    with transaction.atomic():
        project = Project.objects.select_for_update().get(pk=project.pk)
        contract = SmartContractTerms(project=project, **fields)
        contract.save()

        if not project.smart_contract_address:
            project.smart_contract_address = get_contract_address_generator()()
            project.save()
            logger.info(
                f"Assigned contract address {project.smart_contract_address} "
                f"to project {project.id}"
            )
    return contract


def update_smart_contract(contract_id, **changes):
    return _update(SmartContractTerms, contract_id, changes)


# ============================================================================
# Proposals
# ============================================================================

def get_proposal(proposal_id):
    return _get(Proposal, proposal_id)


def list_proposals(project_id):
    project_id = as_uuid(project_id)
    if project_id is None:
        return Proposal.objects.none()
    return Proposal.objects.filter(project_id=project_id).order_by('created_at')


def create_proposal(project, **fields):
    return _create(Proposal, dict(fields, project=project))


def update_proposal(proposal_id, **changes):
    return _update(Proposal, proposal_id, changes)


# ============================================================================
# Messages
# ============================================================================

def list_messages(sender_id, receiver_id):
    """
    Return the thread between two users, oldest first.

    The pair is unordered: messages in both directions are included.
    """
    sender_id = as_uuid(sender_id)
    receiver_id = as_uuid(receiver_id)
    if sender_id is None or receiver_id is None:
        return Message.objects.none()

    return Message.objects.filter(
        Q(sender_id=sender_id, receiver_id=receiver_id)
        | Q(sender_id=receiver_id, receiver_id=sender_id)
    ).order_by('created_at', 'id')


def create_message(**fields):
    fields.pop('is_read', None)
    fields.pop('created_at', None)
    return _create(Message, fields)


def mark_message_read(message_id):
    """
    Mark a message as read.

    Idempotent: marking an already read message succeeds without changes.

    Returns:
        Message or None: The message, or None if it does not exist
    """
    message_id = as_uuid(message_id)
    if message_id is None:
        return None

    with transaction.atomic():
        message = Message.objects.select_for_update().filter(pk=message_id).first()
        if message is None:
            return None
        message.mark_as_read()
    return message


# ============================================================================
# Milestones
# ============================================================================

def get_milestone(milestone_id):
    return _get(Milestone, milestone_id)


def list_milestones(project_id):
    project_id = as_uuid(project_id)
    if project_id is None:
        return Milestone.objects.none()
    return Milestone.objects.filter(project_id=project_id).order_by('created_at')


def create_milestone(project, **fields):
    """Create a milestone; new milestones always start pending."""
    for managed in ('status', 'completed_at', 'paid_at'):
        fields.pop(managed, None)
    return _create(Milestone, dict(fields, project=project))


def update_milestone(milestone_id, **changes):
    """
    Update a milestone.

    A ``status`` change must follow pending -> completed -> paid; the
    matching timestamp is stamped once.

    Raises:
        ValidationError: If the status transition is not allowed
    """
    new_status = changes.pop('status', None)
    for managed in ('completed_at', 'paid_at'):
        changes.pop(managed, None)

    def apply_transition(milestone, _changes):
        if new_status is not None:
            milestone.transition_to(new_status)

    return _update(Milestone, milestone_id, changes, before_save=apply_transition)
