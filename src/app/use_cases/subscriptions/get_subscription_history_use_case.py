"""Use Cases: Subscription history and plan-change history of a tenant"""

from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork

from .dtos import (
    PlanChangesResponse,
    SubscriptionChangeInfo,
    SubscriptionHistoryResponse,
    SubscriptionInfo,
)


class GetSubscriptionHistoryUseCase:
    """All subscriptions of the tenant, newest created first, any status."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, tenant_id: UUID) -> Result[SubscriptionHistoryResponse]:
        async with self.uow:
            tenant = await self.uow.tenants.get_by_id(tenant_id)
            if not tenant:
                return Return.err(Error("TENANT_NOT_FOUND", "Tenant not found"))

            subscriptions = await self.uow.subscriptions.list_by_tenant(tenant_id)
            return Return.ok(
                SubscriptionHistoryResponse(
                    tenant_id=str(tenant_id),
                    subscriptions=[SubscriptionInfo.from_entity(s) for s in subscriptions],
                )
            )


class GetPlanChangesUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, tenant_id: UUID) -> Result[PlanChangesResponse]:
        async with self.uow:
            tenant = await self.uow.tenants.get_by_id(tenant_id)
            if not tenant:
                return Return.err(Error("TENANT_NOT_FOUND", "Tenant not found"))

            changes = await self.uow.subscription_changes.list_by_tenant(tenant_id)
            return Return.ok(
                PlanChangesResponse(
                    tenant_id=str(tenant_id),
                    changes=[SubscriptionChangeInfo.from_entity(c) for c in changes],
                )
            )
