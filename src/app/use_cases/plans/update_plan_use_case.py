"""
Use Case: Update Plan

Partial update of a plan. Feature or limit edits cascade to every tenant
on the plan inside the same transaction; subscriptions keep the amount
they were created with.
"""

import logging
from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.entitlements import cascade_plan_entitlements
from src.app.services.notification_service import (
    INotificationService,
    deliver_notification,
)
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.billing import to_money
from src.domain.entities import AuditLog, BillingCycle
from src.domain.settings import normalize_features
from src.domain.validation import (
    validate_billing_cycle,
    validate_features,
    validate_limits,
    validate_name,
    validate_price,
    validate_trial_days,
)

from .dtos import PlanInfo, PlanUpdateResponse, UpdatePlanCommand

logger = logging.getLogger(__name__)


def _validate(command: UpdatePlanCommand) -> dict:
    fields = {}
    if command.name is not None:
        fields.update(validate_name(command.name))
    if command.price is not None:
        fields.update(validate_price(command.price))
    if command.billing_cycle is not None:
        fields.update(validate_billing_cycle(command.billing_cycle))
    fields.update(validate_features(command.features))
    fields.update(validate_limits(command.limits))
    fields.update(validate_trial_days(command.trial_days))
    return fields


class UpdatePlanUseCase:
    """
    Update plan fields (super admin).

    Business Logic:
    1. Validate the provided fields
    2. Apply changes to the plan
    3. If features or limits changed, cascade to tenants on the plan
    4. Audit with old and new values, commit
    5. Notify about the cascade after commit (best effort)
    """

    def __init__(self, uow: UnitOfWork, notifier: Optional[INotificationService] = None):
        self.uow = uow
        self.notifier = notifier

    async def execute(
        self,
        plan_id: UUID,
        command: UpdatePlanCommand,
        actor_id: Optional[UUID] = None,
    ) -> Result[PlanUpdateResponse]:
        fields = _validate(command)
        if fields:
            return Return.err(
                Error("VALIDATION_ERROR", "Invalid plan data", fields=fields)
            )

        async with self.uow:
            plan = await self.uow.plans.get_by_id(plan_id, for_update=True)
            if not plan:
                return Return.err(Error("PLAN_NOT_FOUND", "Plan not found"))

            old_values = PlanInfo.from_entity(plan).model_dump()
            now = utcnow()

            if command.name is not None:
                plan.name = command.name.strip()
            if command.description is not None:
                plan.description = command.description
            if command.price is not None:
                plan.price = to_money(command.price)
            if command.billing_cycle is not None:
                plan.billing_cycle = BillingCycle(command.billing_cycle)
            if command.trial_days is not None:
                plan.trial_days = command.trial_days
            if command.is_active is not None:
                plan.is_active = command.is_active
            if command.sort_order is not None:
                plan.sort_order = command.sort_order

            entitlements_changed = False
            if command.features is not None:
                features = normalize_features(command.features)
                entitlements_changed |= features != list(plan.features or [])
                plan.features = features
            if command.limits is not None:
                entitlements_changed |= dict(command.limits) != dict(plan.limits or {})
                plan.limits = dict(command.limits)

            plan.updated_at = now
            plan = await self.uow.plans.update(plan)

            tenants_updated = 0
            if entitlements_changed:
                tenants_updated = await cascade_plan_entitlements(self.uow, plan, now)

            new_values = PlanInfo.from_entity(plan).model_dump()
            await self.uow.audit_logs.create(
                AuditLog(
                    user_id=actor_id,
                    action="plan_updated",
                    resource_type="plan",
                    resource_id=str(plan.id),
                    request_data={
                        "old": old_values,
                        "new": new_values,
                        "tenants_updated": tenants_updated,
                    },
                )
            )
            await self.uow.commit()

            notification_sent = True
            if entitlements_changed:
                notification_sent = await deliver_notification(
                    self.uow,
                    self.notifier,
                    "plan_entitlements_updated",
                    {
                        "plan_id": str(plan.id),
                        "features": new_values["features"],
                        "limits": new_values["limits"],
                        "tenants_updated": tenants_updated,
                    },
                    actor_id=actor_id,
                )

            return Return.ok(
                PlanUpdateResponse(
                    plan=PlanInfo(**new_values),
                    tenants_updated=tenants_updated,
                    notification_sent=notification_sent,
                )
            )
