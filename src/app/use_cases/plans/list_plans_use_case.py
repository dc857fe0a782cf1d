"""Use Cases: List Plans / Get Plan"""

from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork

from .dtos import PlanInfo, PlanListResponse


class ListPlansUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, is_active: Optional[bool] = None, search: Optional[str] = None
    ) -> Result[PlanListResponse]:
        async with self.uow:
            plans = await self.uow.plans.list(is_active=is_active, search=search)
            return Return.ok(
                PlanListResponse(plans=[PlanInfo.from_entity(plan) for plan in plans])
            )


class GetPlanUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, plan_id: UUID) -> Result[PlanInfo]:
        async with self.uow:
            plan = await self.uow.plans.get_by_id(plan_id)
            if not plan:
                return Return.err(Error("PLAN_NOT_FOUND", "Plan not found"))
            return Return.ok(PlanInfo.from_entity(plan))
