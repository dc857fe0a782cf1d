"""
Use Case: Calculate Proration

Read-only quote for moving a tenant to another plan mid-cycle.
"""

from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.billing import calculate_proration

from .dtos import ProrationResponse


class CalculateProrationUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, tenant_id: UUID, plan_id: UUID) -> Result[ProrationResponse]:
        async with self.uow:
            tenant = await self.uow.tenants.get_by_id(tenant_id)
            if not tenant:
                return Return.err(Error("TENANT_NOT_FOUND", "Tenant not found"))
            plan = await self.uow.plans.get_by_id(plan_id)
            if not plan:
                return Return.err(Error("PLAN_NOT_FOUND", "Plan not found"))

            current = await self.uow.subscriptions.get_active_by_tenant(tenant.id)
            quote = calculate_proration(
                current_amount=current.amount if current else None,
                starts_at=current.starts_at if current else None,
                billing_cycle=current.billing_cycle if current else None,
                candidate_price=plan.price,
                now=utcnow(),
            )
            return Return.ok(ProrationResponse.from_quote(tenant.id, plan.id, quote))
