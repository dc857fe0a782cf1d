"""Use Case: List the tenants assigned to a plan"""

from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.tenants.dtos import TenantInfo, TenantListResponse


class ListPlanTenantsUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, plan_id: UUID) -> Result[TenantListResponse]:
        async with self.uow:
            plan = await self.uow.plans.get_by_id(plan_id)
            if not plan:
                return Return.err(Error("PLAN_NOT_FOUND", "Plan not found"))

            tenants = await self.uow.tenants.list(plan_id=plan_id)
            return Return.ok(
                TenantListResponse(
                    tenants=[TenantInfo.from_entity(tenant) for tenant in tenants]
                )
            )
