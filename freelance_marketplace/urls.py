"""
URL configuration for freelance_marketplace project.

API routes carry no trailing slash to match the JSON client contract.
"""
from django.contrib import admin
from django.urls import path
from core.views import (
    FreelancerListView,
    UserCreateView,
    UserDetailView,
    ProjectListCreateView,
    ProjectDetailView,
    ProjectModuleListCreateView,
    ProjectModuleDetailView,
    ProjectSmartContractView,
    SmartContractDetailView,
    ProjectProposalListCreateView,
    ProposalDetailView,
    MessageListCreateView,
    MessageReadView,
    ProjectMilestoneListCreateView,
    MilestoneDetailView,
)


urlpatterns = [
    path('admin/', admin.site.urls),

    # User endpoints
    path('api/users/freelancers', FreelancerListView.as_view(), name='freelancer_list'),
    path('api/users/<str:user_id>', UserDetailView.as_view(), name='user_detail'),
    path('api/users', UserCreateView.as_view(), name='user_create'),

    # Project endpoints
    path('api/projects', ProjectListCreateView.as_view(), name='project_list'),
    path('api/projects/<str:project_id>', ProjectDetailView.as_view(), name='project_detail'),
    path('api/projects/<str:project_id>/modules', ProjectModuleListCreateView.as_view(), name='project_modules'),
    path('api/projects/<str:project_id>/smart-contract', ProjectSmartContractView.as_view(), name='project_smart_contract'),
    path('api/projects/<str:project_id>/proposals', ProjectProposalListCreateView.as_view(), name='project_proposals'),
    path('api/projects/<str:project_id>/milestones', ProjectMilestoneListCreateView.as_view(), name='project_milestones'),

    # Module, contract, proposal and milestone updates
    path('api/modules/<str:module_id>', ProjectModuleDetailView.as_view(), name='module_detail'),
    path('api/smart-contracts/<str:contract_id>', SmartContractDetailView.as_view(), name='smart_contract_detail'),
    path('api/proposals/<str:proposal_id>', ProposalDetailView.as_view(), name='proposal_detail'),
    path('api/milestones/<str:milestone_id>', MilestoneDetailView.as_view(), name='milestone_detail'),

    # Message endpoints
    path('api/messages', MessageListCreateView.as_view(), name='message_list'),
    path('api/messages/<str:message_id>/read', MessageReadView.as_view(), name='message_read'),
]
