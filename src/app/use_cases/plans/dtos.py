"""
Plan Use Case DTOs (Data Transfer Objects)

All Command and Response classes for the plan catalogue.
"""

from decimal import Decimal
from typing import Dict, List, Optional

from pydantic import BaseModel

from src.domain.entities import Plan


# ============================================================================
# Command DTOs
# ============================================================================


class CreatePlanCommand(BaseModel):
    """Validated intent to create a plan"""

    name: str
    description: Optional[str] = None
    price: Decimal
    billing_cycle: str
    features: List[str] = []
    limits: Dict[str, int] = {}
    trial_days: int = 0
    is_active: bool = True
    sort_order: Optional[int] = None


class UpdatePlanCommand(BaseModel):
    """Partial update of a plan; None means unchanged"""

    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[Decimal] = None
    billing_cycle: Optional[str] = None
    features: Optional[List[str]] = None
    limits: Optional[Dict[str, int]] = None
    trial_days: Optional[int] = None
    is_active: Optional[bool] = None
    sort_order: Optional[int] = None


class PlanPosition(BaseModel):
    """One entry of a reorder request"""

    id: str
    sort_order: int


# ============================================================================
# Response DTOs
# ============================================================================


class PlanInfo(BaseModel):
    """Plan as returned to callers"""

    id: str
    name: str
    description: Optional[str]
    price: float
    billing_cycle: str
    features: List[str]
    limits: Dict[str, int]
    trial_days: int
    is_active: bool
    sort_order: int

    @classmethod
    def from_entity(cls, plan: Plan) -> "PlanInfo":
        return cls(
            id=str(plan.id),
            name=plan.name,
            description=plan.description,
            price=float(plan.price),
            billing_cycle=plan.billing_cycle.value,
            features=list(plan.features or []),
            limits=dict(plan.limits or {}),
            trial_days=plan.trial_days,
            is_active=plan.is_active,
            sort_order=plan.sort_order,
        )


class PlanListResponse(BaseModel):
    plans: List[PlanInfo]


class PlanUpdateResponse(BaseModel):
    """Response for plan updates that may cascade to tenants"""

    plan: PlanInfo
    tenants_updated: int
    notification_sent: bool


class DeletePlanResponse(BaseModel):
    """status is 'deleted', or 'deactivated' when subscriptions still reference the plan"""

    status: str


class ReorderPlansResponse(BaseModel):
    status: str
    updated: int


class PlanAnalyticsResponse(BaseModel):
    plan_id: str
    plan_name: str
    total_tenants: int
    active_tenants: int
    active_subscriptions: int
    total_revenue: float
    monthly_revenue: float
