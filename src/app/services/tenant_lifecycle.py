"""
Executes the side effects returned by ``apply_transition``.

Runs inside the caller's unit of work; nothing is committed here.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import List

from src.app.services.entitlements import sync_tenant_entitlements
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import SubscriptionStatus, Tenant
from src.domain.lifecycle import SideEffect


@dataclass
class LifecycleOutcome:
    users_deactivated: int = 0
    users_reactivated: int = 0
    subscription_cancelled: bool = False


async def run_side_effects(
    uow: UnitOfWork, tenant: Tenant, effects: List[SideEffect], now: datetime
) -> LifecycleOutcome:
    outcome = LifecycleOutcome()

    for effect in effects:
        if effect == SideEffect.cancel_subscription:
            subscription = await uow.subscriptions.get_active_by_tenant(tenant.id)
            if subscription is not None:
                subscription.status = SubscriptionStatus.cancelled
                subscription.ends_at = now
                await uow.subscriptions.update(subscription)
                outcome.subscription_cancelled = True

        elif effect in (SideEffect.deactivate_users, SideEffect.reactivate_users):
            target = effect == SideEffect.reactivate_users
            for user in await uow.users.list_by_tenant(tenant.id):
                if user.is_active != target:
                    user.is_active = target
                    await uow.users.update(user)
                    if target:
                        outcome.users_reactivated += 1
                    else:
                        outcome.users_deactivated += 1

        elif effect == SideEffect.resync_entitlements:
            plan = await uow.plans.get_by_id(tenant.plan_id) if tenant.plan_id else None
            sync_tenant_entitlements(tenant, plan, now)

    await uow.tenants.update(tenant)
    return outcome
