"""
Subscription Use Cases

Plan assignment and change, proration quotes and history.
"""

from .assign_plan_use_case import AssignPlanUseCase, ChangeTenantPlanUseCase
from .calculate_proration_use_case import CalculateProrationUseCase
from .dtos import (
    AssignPlanCommand,
    PlanAssignmentResponse,
    PlanChangesResponse,
    ProrationResponse,
    SubscriptionChangeInfo,
    SubscriptionHistoryResponse,
    SubscriptionInfo,
    UnassignPlanResponse,
)
from .get_subscription_history_use_case import (
    GetPlanChangesUseCase,
    GetSubscriptionHistoryUseCase,
)
from .unassign_plan_use_case import UnassignPlanUseCase

__all__ = [
    "AssignPlanUseCase",
    "ChangeTenantPlanUseCase",
    "UnassignPlanUseCase",
    "CalculateProrationUseCase",
    "GetSubscriptionHistoryUseCase",
    "GetPlanChangesUseCase",
    "AssignPlanCommand",
    "PlanAssignmentResponse",
    "UnassignPlanResponse",
    "ProrationResponse",
    "SubscriptionInfo",
    "SubscriptionChangeInfo",
    "SubscriptionHistoryResponse",
    "PlanChangesResponse",
]
