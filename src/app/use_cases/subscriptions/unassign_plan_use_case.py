"""
Use Case: Unassign Plan

Cancels the active subscription, clears plan_id and the plan-derived
entitlements. Tenant-custom settings keys are kept.
"""

from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.entitlements import sync_tenant_entitlements
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import AuditLog, SubscriptionStatus

from .dtos import UnassignPlanResponse


class UnassignPlanUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, tenant_id: UUID, actor_id: Optional[UUID] = None
    ) -> Result[UnassignPlanResponse]:
        async with self.uow:
            tenant = await self.uow.tenants.get_by_id(tenant_id, for_update=True)
            if not tenant:
                return Return.err(Error("TENANT_NOT_FOUND", "Tenant not found"))
            if tenant.plan_id is None:
                return Return.err(
                    Error("NO_ACTIVE_PLAN", "Tenant has no plan assigned")
                )

            now = utcnow()
            old_plan_id = tenant.plan_id

            subscription = await self.uow.subscriptions.get_active_by_tenant(tenant.id)
            if subscription is not None:
                subscription.status = SubscriptionStatus.cancelled
                subscription.ends_at = now
                await self.uow.subscriptions.update(subscription)

            tenant.plan_id = None
            if tenant.subscription_status == SubscriptionStatus.active:
                tenant.subscription_status = SubscriptionStatus.cancelled
            sync_tenant_entitlements(tenant, None, now)
            await self.uow.tenants.update(tenant)

            await self.uow.audit_logs.create(
                AuditLog(
                    user_id=actor_id,
                    tenant_id=tenant.id,
                    action="plan_unassigned",
                    resource_type="tenant",
                    resource_id=str(tenant.id),
                    request_data={"old_plan_id": str(old_plan_id)},
                )
            )
            await self.uow.commit()

            return Return.ok(
                UnassignPlanResponse(
                    tenant_id=str(tenant.id),
                    status="unassigned",
                    subscription_cancelled=subscription is not None,
                )
            )
