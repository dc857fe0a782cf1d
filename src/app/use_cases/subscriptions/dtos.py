"""
Subscription Use Case DTOs (Data Transfer Objects)

Command and Response classes for plan assignment, plan changes,
proration quotes and subscription history.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from src.domain.billing import ProrationQuote
from src.domain.entities import Subscription, SubscriptionChange


# ============================================================================
# Command DTOs
# ============================================================================


class AssignPlanCommand(BaseModel):
    plan_id: str
    reason: Optional[str] = None


# ============================================================================
# Response DTOs
# ============================================================================


class SubscriptionInfo(BaseModel):
    id: str
    tenant_id: str
    plan_id: str
    status: str
    amount: float
    billing_cycle: str
    starts_at: datetime
    ends_at: Optional[datetime]
    created_at: datetime

    @classmethod
    def from_entity(cls, subscription: Subscription) -> "SubscriptionInfo":
        return cls(
            id=str(subscription.id),
            tenant_id=str(subscription.tenant_id),
            plan_id=str(subscription.plan_id),
            status=subscription.status.value,
            amount=float(subscription.amount),
            billing_cycle=subscription.billing_cycle.value,
            starts_at=subscription.starts_at,
            ends_at=subscription.ends_at,
            created_at=subscription.created_at,
        )


class SubscriptionChangeInfo(BaseModel):
    id: str
    tenant_id: str
    old_plan_id: Optional[str]
    new_plan_id: str
    reason: Optional[str]
    created_at: datetime

    @classmethod
    def from_entity(cls, change: SubscriptionChange) -> "SubscriptionChangeInfo":
        return cls(
            id=str(change.id),
            tenant_id=str(change.tenant_id),
            old_plan_id=str(change.old_plan_id) if change.old_plan_id else None,
            new_plan_id=str(change.new_plan_id),
            reason=change.reason,
            created_at=change.created_at,
        )


class PlanAssignmentResponse(BaseModel):
    """Response for assign and change plan"""

    tenant_id: str
    old_plan_id: Optional[str]
    new_plan_id: str
    subscription: SubscriptionInfo
    notification_sent: bool


class UnassignPlanResponse(BaseModel):
    tenant_id: str
    status: str
    subscription_cancelled: bool


class ProrationResponse(BaseModel):
    tenant_id: str
    plan_id: str
    proration_amount: float
    days_remaining: int
    unused_amount: float
    new_amount: float

    @classmethod
    def from_quote(cls, tenant_id, plan_id, quote: ProrationQuote) -> "ProrationResponse":
        return cls(
            tenant_id=str(tenant_id),
            plan_id=str(plan_id),
            proration_amount=float(quote.proration_amount),
            days_remaining=quote.days_remaining,
            unused_amount=float(quote.unused_amount),
            new_amount=float(quote.new_amount),
        )


class SubscriptionHistoryResponse(BaseModel):
    tenant_id: str
    subscriptions: List[SubscriptionInfo]


class PlanChangesResponse(BaseModel):
    tenant_id: str
    changes: List[SubscriptionChangeInfo]
