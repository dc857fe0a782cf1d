"""
Plan Catalogue Use Cases

Plan CRUD, entitlement cascade, ordering and analytics.
"""

from .create_plan_use_case import CreatePlanUseCase
from .delete_plan_use_case import DeletePlanUseCase
from .dtos import (
    CreatePlanCommand,
    DeletePlanResponse,
    PlanAnalyticsResponse,
    PlanInfo,
    PlanListResponse,
    PlanPosition,
    PlanUpdateResponse,
    ReorderPlansResponse,
    UpdatePlanCommand,
)
from .get_plan_analytics_use_case import GetPlanAnalyticsUseCase
from .list_plan_tenants_use_case import ListPlanTenantsUseCase
from .list_plans_use_case import GetPlanUseCase, ListPlansUseCase
from .reorder_plans_use_case import ReorderPlansUseCase
from .update_plan_entitlements_use_case import (
    UpdatePlanEntitlementsCommand,
    UpdatePlanEntitlementsUseCase,
)
from .update_plan_use_case import UpdatePlanUseCase

__all__ = [
    "CreatePlanUseCase",
    "UpdatePlanUseCase",
    "UpdatePlanEntitlementsUseCase",
    "DeletePlanUseCase",
    "ReorderPlansUseCase",
    "ListPlansUseCase",
    "GetPlanUseCase",
    "GetPlanAnalyticsUseCase",
    "ListPlanTenantsUseCase",
    "CreatePlanCommand",
    "UpdatePlanCommand",
    "UpdatePlanEntitlementsCommand",
    "PlanPosition",
    "PlanInfo",
    "PlanListResponse",
    "PlanUpdateResponse",
    "DeletePlanResponse",
    "ReorderPlansResponse",
    "PlanAnalyticsResponse",
]
