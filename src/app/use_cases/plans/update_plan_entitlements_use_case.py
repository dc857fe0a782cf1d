"""
Use Case: Update Plan Features

Replaces a plan's feature list (and optionally its limits) and pushes the
new entitlements to every tenant on the plan. All or nothing: either the
plan and every tenant are updated, or none are.
"""

from typing import Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel

from libs.result import Error, Result, Return
from src.app.services.entitlements import cascade_plan_entitlements
from src.app.services.notification_service import (
    INotificationService,
    deliver_notification,
)
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import AuditLog
from src.domain.settings import normalize_features
from src.domain.validation import validate_features, validate_limits

from .dtos import PlanInfo, PlanUpdateResponse


class UpdatePlanEntitlementsCommand(BaseModel):
    features: List[str]
    limits: Optional[Dict[str, int]] = None


class UpdatePlanEntitlementsUseCase:
    def __init__(self, uow: UnitOfWork, notifier: Optional[INotificationService] = None):
        self.uow = uow
        self.notifier = notifier

    async def execute(
        self,
        plan_id: UUID,
        command: UpdatePlanEntitlementsCommand,
        actor_id: Optional[UUID] = None,
    ) -> Result[PlanUpdateResponse]:
        """
        Returns:
            Result[PlanUpdateResponse] with the number of tenants updated

        Errors:
            - VALIDATION_ERROR: features or limits malformed
            - PLAN_NOT_FOUND: Plan does not exist
        """
        fields = {}
        fields.update(validate_features(command.features))
        fields.update(validate_limits(command.limits))
        if fields:
            return Return.err(
                Error("VALIDATION_ERROR", "Invalid entitlements", fields=fields)
            )

        async with self.uow:
            plan = await self.uow.plans.get_by_id(plan_id, for_update=True)
            if not plan:
                return Return.err(Error("PLAN_NOT_FOUND", "Plan not found"))

            now = utcnow()
            old_features = list(plan.features or [])
            old_limits = dict(plan.limits or {})

            plan.features = normalize_features(command.features)
            if command.limits is not None:
                plan.limits = dict(command.limits)
            plan.updated_at = now
            plan = await self.uow.plans.update(plan)

            tenants_updated = await cascade_plan_entitlements(self.uow, plan, now)

            await self.uow.audit_logs.create(
                AuditLog(
                    user_id=actor_id,
                    action="plan_features_updated",
                    resource_type="plan",
                    resource_id=str(plan.id),
                    request_data={
                        "old": {"features": old_features, "limits": old_limits},
                        "new": {"features": list(plan.features), "limits": dict(plan.limits or {})},
                        "tenants_updated": tenants_updated,
                    },
                )
            )
            await self.uow.commit()

            info = PlanInfo.from_entity(plan)
            notification_sent = await deliver_notification(
                self.uow,
                self.notifier,
                "plan_entitlements_updated",
                {
                    "plan_id": info.id,
                    "features": info.features,
                    "limits": info.limits,
                    "tenants_updated": tenants_updated,
                },
                actor_id=actor_id,
            )

            return Return.ok(
                PlanUpdateResponse(
                    plan=info,
                    tenants_updated=tenants_updated,
                    notification_sent=notification_sent,
                )
            )
