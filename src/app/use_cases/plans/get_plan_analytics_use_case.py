"""
Use Case: Plan Analytics

Tenant and revenue figures for a single plan. Revenue is the sum of the
amounts subscriptions were created with.
"""

from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import TenantStatus

from .dtos import PlanAnalyticsResponse


class GetPlanAnalyticsUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, plan_id: UUID) -> Result[PlanAnalyticsResponse]:
        async with self.uow:
            plan = await self.uow.plans.get_by_id(plan_id)
            if not plan:
                return Return.err(Error("PLAN_NOT_FOUND", "Plan not found"))

            month_start = utcnow().replace(day=1, hour=0, minute=0, second=0, microsecond=0)

            return Return.ok(
                PlanAnalyticsResponse(
                    plan_id=str(plan.id),
                    plan_name=plan.name,
                    total_tenants=await self.uow.plans.count_tenants(plan_id),
                    active_tenants=await self.uow.plans.count_tenants(
                        plan_id, status=TenantStatus.active
                    ),
                    active_subscriptions=await self.uow.plans.count_subscriptions(
                        plan_id, active_only=True
                    ),
                    total_revenue=float(await self.uow.plans.sum_revenue(plan_id)),
                    monthly_revenue=float(
                        await self.uow.plans.sum_revenue(plan_id, since=month_start)
                    ),
                )
            )
