"""
API views for the Freelance Marketplace.

Views validate input with a serializer, delegate to ``core.services`` and
serialize the result. Failures are raised as exceptions and rendered by
``core.exceptions.api_exception_handler`` using the per-view
``validation_error_message``, ``not_found_message`` and ``error_message``.
"""

import logging

from rest_framework import status
from rest_framework.exceptions import NotFound
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from . import services
from .conversations import get_conversations
from .serializers import (
    ConversationSerializer,
    MessageSerializer,
    MilestoneSerializer,
    MilestoneUpdateSerializer,
    ProjectModuleSerializer,
    ProjectModuleUpdateSerializer,
    ProjectSerializer,
    ProjectUpdateSerializer,
    ProposalSerializer,
    ProposalUpdateSerializer,
    SmartContractTermsSerializer,
    SmartContractTermsUpdateSerializer,
    UserSerializer,
    UserUpdateSerializer,
)

logger = logging.getLogger(__name__)


class MarketplaceAPIView(APIView):
    """
    Base view for the marketplace API.

    The API is public; there is no authentication layer.
    """

    permission_classes = [AllowAny]

    validation_error_message = None
    not_found_message = None
    error_message = None

    def get_or_404(self, getter, pk):
        instance = getter(pk)
        if instance is None:
            logger.warning(f"{self.__class__.__name__}: no record for id {pk}")
            raise NotFound()
        return instance

    def validate(self, serializer_class, data, instance=None, **context):
        """Validate request data and return the validated fields."""
        serializer = serializer_class(
            instance,
            data=data,
            partial=instance is not None,
            context=dict(context, request=self.request),
        )
        serializer.is_valid(raise_exception=True)
        return serializer.validated_data


# ============================================================================
# Users
# ============================================================================

class FreelancerListView(MarketplaceAPIView):
    """
    API endpoint listing every user flagged as a freelancer.

    GET /api/users/freelancers
    """

    error_message = 'Failed to fetch freelancers'

    def get(self, request, *args, **kwargs):
        freelancers = services.list_freelancers()
        return Response(UserSerializer(freelancers, many=True).data)


class UserCreateView(MarketplaceAPIView):
    """
    API endpoint for creating users.

    POST /api/users

    ``username`` and ``email`` are required and unique (email is compared
    case-insensitively). Everything else falls back to the profile defaults.
    """

    validation_error_message = 'Invalid user data'
    error_message = 'Failed to create user'

    def post(self, request, *args, **kwargs):
        fields = self.validate(UserSerializer, request.data)
        user = services.create_user(**fields)

        logger.info(f"User created. User ID: {user.id}, Username: {user.username}")

        return Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)


class UserDetailView(MarketplaceAPIView):
    """
    API endpoint for a single user.

    GET   /api/users/<id>
    PATCH /api/users/<id>
    """

    validation_error_message = 'Invalid user data'
    not_found_message = 'User not found'
    error_message = {
        'GET': 'Failed to fetch user',
        'PATCH': 'Failed to update user',
    }

    def get(self, request, user_id, *args, **kwargs):
        user = self.get_or_404(services.get_user, user_id)
        return Response(UserSerializer(user).data)

    def patch(self, request, user_id, *args, **kwargs):
        user = self.get_or_404(services.get_user, user_id)
        changes = self.validate(UserUpdateSerializer, request.data, instance=user)

        user = services.update_user(user_id, **changes)
        if user is None:
            raise NotFound()

        logger.info(f"User updated. User ID: {user.id}, Fields: {sorted(changes)}")
        return Response(UserSerializer(user).data)


# ============================================================================
# Projects
# ============================================================================

class ProjectListCreateView(MarketplaceAPIView):
    """
    API endpoint for listing and creating projects.

    GET  /api/projects?clientId=<id>&freelancerId=<id>
    POST /api/projects

    Filters are optional; when both are given only ``clientId`` applies.
    """

    validation_error_message = 'Invalid project data'
    error_message = {
        'GET': 'Failed to fetch projects',
        'POST': 'Failed to create project',
    }

    def get(self, request, *args, **kwargs):
        projects = services.list_projects(
            client_id=request.query_params.get('clientId'),
            freelancer_id=request.query_params.get('freelancerId'),
        )
        return Response(ProjectSerializer(projects, many=True).data)

    def post(self, request, *args, **kwargs):
        fields = self.validate(ProjectSerializer, request.data)
        project = services.create_project(**fields)

        logger.info(
            f"Project created. Project ID: {project.id}, Title: {project.title}, "
            f"Client ID: {project.client_id}"
        )

        return Response(ProjectSerializer(project).data, status=status.HTTP_201_CREATED)


class ProjectDetailView(MarketplaceAPIView):
    """
    API endpoint for a single project.

    GET   /api/projects/<id>
    PATCH /api/projects/<id>
    """

    validation_error_message = 'Invalid project data'
    not_found_message = 'Project not found'
    error_message = {
        'GET': 'Failed to fetch project',
        'PATCH': 'Failed to update project',
    }

    def get(self, request, project_id, *args, **kwargs):
        project = self.get_or_404(services.get_project, project_id)
        return Response(ProjectSerializer(project).data)

    def patch(self, request, project_id, *args, **kwargs):
        project = self.get_or_404(services.get_project, project_id)
        changes = self.validate(ProjectUpdateSerializer, request.data, instance=project)

        project = services.update_project(project_id, **changes)
        if project is None:
            raise NotFound()

        logger.info(f"Project updated. Project ID: {project.id}, Fields: {sorted(changes)}")
        return Response(ProjectSerializer(project).data)


# ============================================================================
# Project Modules
# ============================================================================

class ProjectModuleListCreateView(MarketplaceAPIView):
    """
    API endpoint for the modules of a project.

    GET  /api/projects/<id>/modules  (ascending ``order``)
    POST /api/projects/<id>/modules  (bound to the project in the path)
    """

    validation_error_message = 'Invalid module data'
    not_found_message = 'Project not found'
    error_message = {
        'GET': 'Failed to fetch project modules',
        'POST': 'Failed to create project module',
    }

    def get(self, request, project_id, *args, **kwargs):
        modules = services.list_project_modules(project_id)
        return Response(ProjectModuleSerializer(modules, many=True).data)

    def post(self, request, project_id, *args, **kwargs):
        project = self.get_or_404(services.get_project, project_id)
        fields = self.validate(ProjectModuleSerializer, request.data, project=project)
        module = services.create_project_module(project, **fields)

        logger.info(
            f"Module created. Module ID: {module.id}, Project ID: {project.id}, "
            f"Order: {module.order}"
        )

        return Response(ProjectModuleSerializer(module).data, status=status.HTTP_201_CREATED)


class ProjectModuleDetailView(MarketplaceAPIView):
    """
    API endpoint for updating a module.

    PATCH /api/modules/<id>

    Changing ``status`` without ``progress`` snaps progress to 0 (pending)
    or 100 (completed).
    """

    validation_error_message = 'Invalid module data'
    not_found_message = 'Module not found'
    error_message = 'Failed to update module'

    def patch(self, request, module_id, *args, **kwargs):
        module = self.get_or_404(services.get_project_module, module_id)
        changes = self.validate(ProjectModuleUpdateSerializer, request.data, instance=module)

        module = services.update_project_module(module_id, **changes)
        if module is None:
            raise NotFound()

        logger.info(f"Module updated. Module ID: {module.id}, Fields: {sorted(changes)}")
        return Response(ProjectModuleSerializer(module).data)


# ============================================================================
# Smart Contract Terms
# ============================================================================

class ProjectSmartContractView(MarketplaceAPIView):
    """
    API endpoint for the contract terms of a project.

    GET  /api/projects/<id>/smart-contract
    POST /api/projects/<id>/smart-contract

    A project has at most one active set of terms.
    """

    validation_error_message = 'Invalid contract data'
    not_found_message = {
        'GET': 'Smart contract not found',
        'POST': 'Project not found',
    }
    error_message = {
        'GET': 'Failed to fetch smart contract',
        'POST': 'Failed to create smart contract',
    }

    def get(self, request, project_id, *args, **kwargs):
        contract = self.get_or_404(services.get_smart_contract, project_id)
        return Response(SmartContractTermsSerializer(contract).data)

    def post(self, request, project_id, *args, **kwargs):
        project = self.get_or_404(services.get_project, project_id)
        fields = self.validate(SmartContractTermsSerializer, request.data, project=project)
        contract = services.create_smart_contract(project, **fields)

        logger.info(f"Contract terms created. Terms ID: {contract.id}, Project ID: {project.id}")

        return Response(SmartContractTermsSerializer(contract).data, status=status.HTTP_201_CREATED)


class SmartContractDetailView(MarketplaceAPIView):
    """
    API endpoint for updating contract terms.

    PATCH /api/smart-contracts/<id>
    """

    validation_error_message = 'Invalid contract data'
    not_found_message = 'Smart contract not found'
    error_message = 'Failed to update smart contract'

    def patch(self, request, contract_id, *args, **kwargs):
        contract = self.get_or_404(services.get_smart_contract_terms, contract_id)
        changes = self.validate(SmartContractTermsUpdateSerializer, request.data, instance=contract)

        contract = services.update_smart_contract(contract_id, **changes)
        if contract is None:
            raise NotFound()

        logger.info(f"Contract terms updated. Terms ID: {contract.id}, Fields: {sorted(changes)}")
        return Response(SmartContractTermsSerializer(contract).data)


# ============================================================================
# Proposals
# ============================================================================

class ProjectProposalListCreateView(MarketplaceAPIView):
    """
    API endpoint for the proposals of a project.

    GET  /api/projects/<id>/proposals
    POST /api/projects/<id>/proposals
    """

    validation_error_message = 'Invalid proposal data'
    not_found_message = 'Project not found'
    error_message = {
        'GET': 'Failed to fetch proposals',
        'POST': 'Failed to create proposal',
    }

    def get(self, request, project_id, *args, **kwargs):
        proposals = services.list_proposals(project_id)
        return Response(ProposalSerializer(proposals, many=True).data)

    def post(self, request, project_id, *args, **kwargs):
        project = self.get_or_404(services.get_project, project_id)
        fields = self.validate(ProposalSerializer, request.data, project=project)
        proposal = services.create_proposal(project, **fields)

        logger.info(
            f"Proposal created. Proposal ID: {proposal.id}, Project ID: {project.id}, "
            f"Freelancer ID: {proposal.freelancer_id}"
        )

        return Response(ProposalSerializer(proposal).data, status=status.HTTP_201_CREATED)


class ProposalDetailView(MarketplaceAPIView):
    """
    API endpoint for updating a proposal.

    PATCH /api/proposals/<id>
    """

    validation_error_message = 'Invalid proposal data'
    not_found_message = 'Proposal not found'
    error_message = 'Failed to update proposal'

    def patch(self, request, proposal_id, *args, **kwargs):
        proposal = self.get_or_404(services.get_proposal, proposal_id)
        changes = self.validate(ProposalUpdateSerializer, request.data, instance=proposal)

        proposal = services.update_proposal(proposal_id, **changes)
        if proposal is None:
            raise NotFound()

        logger.info(f"Proposal updated. Proposal ID: {proposal.id}, Status: {proposal.status}")
        return Response(ProposalSerializer(proposal).data)


# ============================================================================
# Messages
# ============================================================================

class MessageListCreateView(MarketplaceAPIView):
    """
    API endpoint for messages.

    GET  /api/messages?userId=<id>                    conversation list
    GET  /api/messages?senderId=<id>&receiverId=<id>  thread, oldest first
    POST /api/messages
    """

    validation_error_message = 'Invalid message data'
    error_message = {
        'GET': 'Failed to fetch messages',
        'POST': 'Failed to create message',
    }

    def get(self, request, *args, **kwargs):
        params = request.query_params
        user_id = params.get('userId')
        sender_id = params.get('senderId')
        receiver_id = params.get('receiverId')

        if user_id:
            conversations = get_conversations(user_id)
            return Response(ConversationSerializer(conversations, many=True).data)

        if sender_id and receiver_id:
            messages = services.list_messages(sender_id, receiver_id)
            return Response(MessageSerializer(messages, many=True).data)

        return Response(
            {'message': 'Missing required parameters'},
            status=status.HTTP_400_BAD_REQUEST
        )

    def post(self, request, *args, **kwargs):
        fields = self.validate(MessageSerializer, request.data)
        message = services.create_message(**fields)

        logger.info(
            f"Message sent. Message ID: {message.id}, Sender ID: {message.sender_id}, "
            f"Receiver ID: {message.receiver_id}"
        )

        return Response(MessageSerializer(message).data, status=status.HTTP_201_CREATED)


class MessageReadView(MarketplaceAPIView):
    """
    API endpoint marking a message as read.

    PATCH /api/messages/<id>/read

    Idempotent: marking an already read message succeeds again.
    """

    not_found_message = 'Message not found'
    error_message = 'Failed to mark message as read'

    def patch(self, request, message_id, *args, **kwargs):
        message = services.mark_message_read(message_id)
        if message is None:
            logger.warning(f"Mark-read of unknown message {message_id}")
            raise NotFound()
        return Response({'success': True})


# ============================================================================
# Milestones
# ============================================================================

class ProjectMilestoneListCreateView(MarketplaceAPIView):
    """
    API endpoint for the milestones of a project.

    GET  /api/projects/<id>/milestones
    POST /api/projects/<id>/milestones  (always created as pending)
    """

    validation_error_message = 'Invalid milestone data'
    not_found_message = 'Project not found'
    error_message = {
        'GET': 'Failed to fetch milestones',
        'POST': 'Failed to create milestone',
    }

    def get(self, request, project_id, *args, **kwargs):
        milestones = services.list_milestones(project_id)
        return Response(MilestoneSerializer(milestones, many=True).data)

    def post(self, request, project_id, *args, **kwargs):
        project = self.get_or_404(services.get_project, project_id)
        fields = self.validate(MilestoneSerializer, request.data, project=project)
        milestone = services.create_milestone(project, **fields)

        logger.info(f"Milestone created. Milestone ID: {milestone.id}, Project ID: {project.id}")

        return Response(MilestoneSerializer(milestone).data, status=status.HTTP_201_CREATED)


class MilestoneDetailView(MarketplaceAPIView):
    """
    API endpoint for updating a milestone.

    PATCH /api/milestones/<id>

    ``status`` may only move forward: pending -> completed -> paid.
    """

    validation_error_message = 'Invalid milestone data'
    not_found_message = 'Milestone not found'
    error_message = 'Failed to update milestone'

    def patch(self, request, milestone_id, *args, **kwargs):
        milestone = self.get_or_404(services.get_milestone, milestone_id)
        changes = self.validate(MilestoneUpdateSerializer, request.data, instance=milestone)

        milestone = services.update_milestone(milestone_id, **changes)
        if milestone is None:
            raise NotFound()

        logger.info(
            f"Milestone updated. Milestone ID: {milestone.id}, Status: {milestone.status}"
        )
        return Response(MilestoneSerializer(milestone).data)
