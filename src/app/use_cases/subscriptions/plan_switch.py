"""
Shared plan switch used by assignment, plan change and tenant creation.

The caller owns the transaction; ``switch_plan`` only stages writes.
"""

import logging
from datetime import datetime
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.entitlements import sync_tenant_entitlements
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import (
    Plan,
    Subscription,
    SubscriptionChange,
    SubscriptionStatus,
    Tenant,
    TenantStatus,
)

logger = logging.getLogger(__name__)


@dataclass
class PlanSwitch:
    subscription: Subscription
    old_plan_id: Optional[str] = None
    change: Optional[SubscriptionChange] = None


def check_assignable(tenant: Optional[Tenant], plan: Optional[Plan]) -> Optional[Error]:
    """Preconditions shared by every plan switch; None when the switch may proceed."""
    if tenant is None:
        return Error("TENANT_NOT_FOUND", "Tenant not found")
    if plan is None:
        return Error("PLAN_NOT_FOUND", "Plan not found")
    if not plan.is_active:
        return Error(
            "PLAN_INACTIVE",
            "Plan is not active",
            fields={"plan_id": "plan must be active to be assigned"},
        )
    if tenant.status == TenantStatus.archived:
        return Error(
            "INVALID_TRANSITION",
            "Cannot assign a plan to an archived tenant",
        )
    return None


async def switch_plan(
    uow: UnitOfWork,
    tenant: Tenant,
    plan: Plan,
    now: datetime,
    reason: Optional[str] = None,
    record_change: Optional[bool] = None,
) -> PlanSwitch:
    """
    Cancel the tenant's active subscription (if any), start a new one on
    ``plan`` and mirror the plan's entitlements into the tenant settings.

    ``record_change`` forces or suppresses the SubscriptionChange row; by
    default one is written only when an active subscription was replaced.

    Raises:
        SubscriptionConflictError: a concurrent writer created an active
            subscription for the same tenant
    """
    current = await uow.subscriptions.get_active_by_tenant(tenant.id)
    old_plan_id = current.plan_id if current else tenant.plan_id

    if current is not None:
        current.status = SubscriptionStatus.cancelled
        current.ends_at = now
        await uow.subscriptions.update(current)

    subscription = await uow.subscriptions.create(
        Subscription(
            tenant_id=tenant.id,
            plan_id=plan.id,
            status=SubscriptionStatus.active,
            amount=plan.price,
            billing_cycle=plan.billing_cycle,
            starts_at=now,
            ends_at=None,
        )
    )

    tenant.plan_id = plan.id
    tenant.subscription_status = SubscriptionStatus.active
    sync_tenant_entitlements(tenant, plan, now)
    await uow.tenants.update(tenant)

    if record_change is None:
        record_change = current is not None

    change = None
    if record_change:
        change = await uow.subscription_changes.create(
            SubscriptionChange(
                tenant_id=tenant.id,
                old_plan_id=old_plan_id,
                new_plan_id=plan.id,
                reason=reason,
            )
        )

    logger.info(
        f"Tenant {tenant.name} moved to plan {plan.name}",
        extra={
            "tenant_id": str(tenant.id),
            "old_plan_id": str(old_plan_id) if old_plan_id else None,
            "new_plan_id": str(plan.id),
        },
    )
    return PlanSwitch(
        subscription=subscription,
        old_plan_id=str(old_plan_id) if old_plan_id else None,
        change=change,
    )


def parse_plan_id(plan_id: str) -> Result:
    """Field-level validation of a plan id taken from a request body."""
    try:
        return Return.ok(UUID(str(plan_id)))
    except ValueError:
        return Return.err(
            Error(
                "VALIDATION_ERROR",
                "Invalid plan id",
                fields={"plan_id": "plan_id must be a valid UUID"},
            )
        )
