"""
Use Cases: Assign Plan / Change Tenant Plan

Both run in one transaction with the plan and tenant rows locked: cancel the current
active subscription, start a new one on the target plan, mirror the plan's
features/limits into the tenant settings, and audit. The partial unique
index on active subscriptions turns a lost race into a conflict with
nothing written.
"""

from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.repositories.subscription_repository import SubscriptionConflictError
from src.app.services.notification_service import (
    INotificationService,
    deliver_notification,
)
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import AuditLog

from .dtos import AssignPlanCommand, PlanAssignmentResponse, SubscriptionInfo
from .plan_switch import check_assignable, parse_plan_id, switch_plan


class AssignPlanUseCase:
    """
    Assign a plan to a tenant (super admin).

    A tenant that already has an active subscription goes through the
    change path, so the switch is recorded as a SubscriptionChange.
    """

    action = "plan_assigned"
    record_change: Optional[bool] = None

    def __init__(self, uow: UnitOfWork, notifier: Optional[INotificationService] = None):
        self.uow = uow
        self.notifier = notifier

    async def execute(
        self,
        tenant_id: UUID,
        command: AssignPlanCommand,
        actor_id: Optional[UUID] = None,
    ) -> Result[PlanAssignmentResponse]:
        """
        Errors:
            - VALIDATION_ERROR: plan_id is not a UUID
            - TENANT_NOT_FOUND / PLAN_NOT_FOUND
            - PLAN_INACTIVE: target plan is deactivated
            - INVALID_TRANSITION: tenant is archived
            - SUBSCRIPTION_CONFLICT: concurrent switch won the race
        """
        parsed = parse_plan_id(command.plan_id)
        if parsed.is_err():
            return parsed
        plan_id = parsed.value

        async with self.uow:
            # plan before tenant, the order an entitlement cascade takes its locks
            plan = await self.uow.plans.get_by_id(plan_id, for_update=True)
            tenant = await self.uow.tenants.get_by_id(tenant_id, for_update=True)
            error = check_assignable(tenant, plan)
            if error:
                return Return.err(error)

            now = utcnow()
            try:
                switch = await switch_plan(
                    self.uow,
                    tenant,
                    plan,
                    now,
                    reason=command.reason,
                    record_change=self.record_change,
                )
            except SubscriptionConflictError:
                return Return.err(
                    Error(
                        "SUBSCRIPTION_CONFLICT",
                        "Another plan change for this tenant is in progress",
                    )
                )

            await self.uow.audit_logs.create(
                AuditLog(
                    user_id=actor_id,
                    tenant_id=tenant.id,
                    action=self.action,
                    resource_type="tenant",
                    resource_id=str(tenant.id),
                    request_data={
                        "old_plan_id": switch.old_plan_id,
                        "new_plan_id": str(plan.id),
                        "amount": str(switch.subscription.amount),
                        "reason": command.reason,
                    },
                )
            )
            await self.uow.commit()

            notification_sent = await deliver_notification(
                self.uow,
                self.notifier,
                self.action,
                {
                    "tenant_id": str(tenant.id),
                    "old_plan_id": switch.old_plan_id,
                    "new_plan_id": str(plan.id),
                },
                tenant_id=tenant.id,
                actor_id=actor_id,
            )

            return Return.ok(
                PlanAssignmentResponse(
                    tenant_id=str(tenant.id),
                    old_plan_id=switch.old_plan_id,
                    new_plan_id=str(plan.id),
                    subscription=SubscriptionInfo.from_entity(switch.subscription),
                    notification_sent=notification_sent,
                )
            )


class ChangeTenantPlanUseCase(AssignPlanUseCase):
    """Upgrade or downgrade; always appends a SubscriptionChange."""

    action = "plan_changed"
    record_change = True
