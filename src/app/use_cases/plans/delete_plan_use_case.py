"""
Use Case: Delete Plan

A plan referenced by tenants cannot be removed. A plan that only has
historical subscriptions is deactivated instead so the history stays
readable.
"""

from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import AuditLog

from .dtos import DeletePlanResponse


class DeletePlanUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, plan_id: UUID, actor_id: Optional[UUID] = None
    ) -> Result[DeletePlanResponse]:
        async with self.uow:
            plan = await self.uow.plans.get_by_id(plan_id, for_update=True)
            if not plan:
                return Return.err(Error("PLAN_NOT_FOUND", "Plan not found"))

            tenant_count = await self.uow.plans.count_tenants(plan_id)
            if tenant_count > 0:
                return Return.err(
                    Error(
                        "PLAN_IN_USE",
                        "Cannot delete a plan that is assigned to tenants",
                        reason=f"{tenant_count} tenants are on this plan",
                    )
                )

            if await self.uow.plans.count_subscriptions(plan_id) > 0:
                plan.is_active = False
                plan.updated_at = utcnow()
                await self.uow.plans.update(plan)
                status = "deactivated"
            else:
                await self.uow.plans.delete(plan)
                status = "deleted"

            await self.uow.audit_logs.create(
                AuditLog(
                    user_id=actor_id,
                    action=f"plan_{status}",
                    resource_type="plan",
                    resource_id=str(plan_id),
                    request_data={"name": plan.name},
                )
            )
            await self.uow.commit()

            return Return.ok(DeletePlanResponse(status=status))
