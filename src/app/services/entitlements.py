"""
Entitlement sync between plans and tenants.

A tenant's ``settings.features`` / ``settings.limits`` mirror its plan.
These helpers are the only writers of those two keys.
"""

import logging
from datetime import datetime
from typing import Optional

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Plan, Tenant
from src.domain.settings import TenantSettings

logger = logging.getLogger(__name__)


def sync_tenant_entitlements(tenant: Tenant, plan: Optional[Plan], now: datetime) -> None:
    """Copy the plan's features/limits into the tenant settings, keeping every other key."""
    settings = TenantSettings.from_blob(tenant.settings)
    if plan is None:
        settings = settings.with_entitlements(features=[], limits={})
    else:
        settings = settings.with_entitlements(
            features=plan.features or [], limits=plan.limits or {}
        )
    # Assign a new dict: in-place mutation of a JSON column is not tracked.
    tenant.settings = settings.to_blob()
    tenant.updated_at = now


async def cascade_plan_entitlements(uow: UnitOfWork, plan: Plan, now: datetime) -> int:
    """
    Push the plan's current features/limits to every tenant on the plan.

    Runs inside the caller's transaction with the tenant rows locked, so the
    cascade commits for all tenants or for none.

    Returns:
        Number of tenants updated
    """
    tenants = await uow.tenants.list_by_plan(plan.id, for_update=True)
    for tenant in tenants:
        sync_tenant_entitlements(tenant, plan, now)
        await uow.tenants.update(tenant)

    logger.info(
        f"Cascaded entitlements of plan {plan.name} to {len(tenants)} tenants",
        extra={"plan_id": str(plan.id), "tenants_updated": len(tenants)},
    )
    return len(tenants)
