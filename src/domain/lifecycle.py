"""
Tenant lifecycle transitions.

``apply_transition`` mutates the tenant's own fields and returns the side
effects the caller must run in the same unit of work, so a transition is
always committed as a whole.
"""

from datetime import datetime
from enum import Enum
from typing import List

from libs.result import Error, Result, Return

from .entities.enums import SubscriptionStatus, TenantStatus
from .entities.tenant import Tenant
from .settings import TenantSettings


class TenantAction(str, Enum):
    suspend = "suspend"
    restore_access = "restore_access"
    archive = "archive"
    unarchive = "unarchive"


class SideEffect(str, Enum):
    deactivate_users = "deactivate_users"
    reactivate_users = "reactivate_users"
    cancel_subscription = "cancel_subscription"
    resync_entitlements = "resync_entitlements"


def _invalid(tenant: Tenant, action: TenantAction) -> Result[List[SideEffect]]:
    return Return.err(
        Error(
            "INVALID_TRANSITION",
            f"Cannot {action.value} a tenant that is {tenant.status.value}",
        )
    )


def apply_transition(
    tenant: Tenant, action: TenantAction, now: datetime
) -> Result[List[SideEffect]]:
    settings = TenantSettings.from_blob(tenant.settings)
    effects: List[SideEffect] = []

    if action == TenantAction.suspend:
        if tenant.status not in (TenantStatus.active, TenantStatus.suspended):
            return _invalid(tenant, action)
        tenant.status = TenantStatus.suspended
        tenant.settings = settings.with_suspended(True).to_blob()

    elif action == TenantAction.restore_access:
        if tenant.status not in (TenantStatus.active, TenantStatus.suspended):
            return _invalid(tenant, action)
        tenant.status = TenantStatus.active
        tenant.settings = settings.with_suspended(False).to_blob()
        effects.append(SideEffect.resync_entitlements)

    elif action == TenantAction.archive:
        if tenant.status == TenantStatus.archived:
            return Return.err(
                Error("TENANT_ALREADY_ARCHIVED", "Tenant is already archived")
            )
        tenant.status = TenantStatus.archived
        tenant.deleted_at = now
        if tenant.subscription_status == SubscriptionStatus.active:
            tenant.subscription_status = SubscriptionStatus.cancelled
            effects.append(SideEffect.cancel_subscription)
        effects.append(SideEffect.deactivate_users)

    elif action == TenantAction.unarchive:
        if tenant.status != TenantStatus.archived:
            return Return.err(
                Error("TENANT_NOT_ARCHIVED", "Tenant is not archived")
            )
        tenant.status = TenantStatus.active
        tenant.deleted_at = None
        tenant.settings = settings.with_suspended(False).to_blob()
        effects.append(SideEffect.reactivate_users)

    tenant.updated_at = now
    return Return.ok(effects)
