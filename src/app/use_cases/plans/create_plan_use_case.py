"""
Use Case: Create Plan

Adds a plan to the catalogue. New plans go to the end of the ordering
unless an explicit sort_order is given.
"""

import logging
from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.billing import to_money
from src.domain.entities import AuditLog, BillingCycle, Plan
from src.domain.settings import normalize_features
from src.domain.validation import (
    validate_billing_cycle,
    validate_features,
    validate_limits,
    validate_name,
    validate_price,
    validate_trial_days,
)

from .dtos import CreatePlanCommand, PlanInfo

logger = logging.getLogger(__name__)


class CreatePlanUseCase:
    """
    Create a plan (super admin).

    Business Logic:
    1. Validate every field, collecting all field errors
    2. Default sort_order to current max + 1
    3. Persist plan and audit entry in one transaction
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, command: CreatePlanCommand, actor_id: Optional[UUID] = None
    ) -> Result[PlanInfo]:
        fields = {}
        fields.update(validate_name(command.name))
        fields.update(validate_price(command.price))
        fields.update(validate_billing_cycle(command.billing_cycle))
        fields.update(validate_features(command.features))
        fields.update(validate_limits(command.limits))
        fields.update(validate_trial_days(command.trial_days))
        if fields:
            return Return.err(
                Error("VALIDATION_ERROR", "Invalid plan data", fields=fields)
            )

        async with self.uow:
            sort_order = command.sort_order
            if sort_order is None:
                sort_order = await self.uow.plans.get_max_sort_order() + 1

            plan = Plan(
                name=command.name.strip(),
                description=command.description,
                price=to_money(command.price),
                billing_cycle=BillingCycle(command.billing_cycle),
                features=normalize_features(command.features),
                limits=dict(command.limits),
                trial_days=command.trial_days,
                is_active=command.is_active,
                sort_order=sort_order,
            )
            plan = await self.uow.plans.create(plan)

            await self.uow.audit_logs.create(
                AuditLog(
                    user_id=actor_id,
                    action="plan_created",
                    resource_type="plan",
                    resource_id=str(plan.id),
                    request_data={
                        "name": plan.name,
                        "price": str(plan.price),
                        "billing_cycle": plan.billing_cycle.value,
                    },
                )
            )
            await self.uow.commit()

            logger.info(f"Plan created: {plan.name}", extra={"plan_id": str(plan.id)})
            return Return.ok(PlanInfo.from_entity(plan))
