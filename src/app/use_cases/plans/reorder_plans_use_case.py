"""
Use Case: Reorder Plans

Applies a batch of sort positions. Unknown plan ids reject the whole batch.
"""

from typing import List, Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import AuditLog

from .dtos import PlanPosition, ReorderPlansResponse


class ReorderPlansUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, positions: List[PlanPosition], actor_id: Optional[UUID] = None
    ) -> Result[ReorderPlansResponse]:
        if not positions:
            return Return.err(
                Error(
                    "VALIDATION_ERROR",
                    "Invalid plan ordering",
                    fields={"plans": "at least one plan is required"},
                )
            )

        plan_ids = []
        for position in positions:
            try:
                plan_ids.append(UUID(position.id))
            except ValueError:
                return Return.err(
                    Error(
                        "VALIDATION_ERROR",
                        "Invalid plan ordering",
                        fields={"plans": f"'{position.id}' is not a valid plan id"},
                    )
                )

        async with self.uow:
            plans = {plan.id: plan for plan in await self.uow.plans.get_by_ids(plan_ids)}
            missing = [str(plan_id) for plan_id in plan_ids if plan_id not in plans]
            if missing:
                return Return.err(
                    Error(
                        "VALIDATION_ERROR",
                        "Invalid plan ordering",
                        fields={"plans": f"unknown plan ids: {', '.join(missing)}"},
                    )
                )

            now = utcnow()
            for plan_id, position in zip(plan_ids, positions):
                plan = plans[plan_id]
                plan.sort_order = position.sort_order
                plan.updated_at = now
                await self.uow.plans.update(plan)

            await self.uow.audit_logs.create(
                AuditLog(
                    user_id=actor_id,
                    action="plans_reordered",
                    resource_type="plan",
                    request_data={
                        "plans": [position.model_dump() for position in positions]
                    },
                )
            )
            await self.uow.commit()

            return Return.ok(ReorderPlansResponse(status="reordered", updated=len(positions)))
