"""
Use Case: Update Tenant

Edits a tenant's name, domain, status, plan and custom settings in one
transaction. Status changes go through the lifecycle transitions, plan
changes through the shared plan switch and settings changes are stored as
a new settings version, so each path keeps the same guarantees it has on
its own endpoint.
"""

import logging
from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.repositories.subscription_repository import SubscriptionConflictError
from src.app.repositories.tenant_repository import DomainTakenError
from src.app.services.notification_service import (
    INotificationService,
    deliver_notification,
)
from src.app.services.tenant_lifecycle import run_side_effects
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.subscriptions.plan_switch import check_assignable, switch_plan
from src.domain.base import utcnow
from src.domain.entities import AuditLog, TenantStatus
from src.domain.lifecycle import TenantAction, apply_transition
from src.domain.settings import RESERVED_KEYS
from src.domain.validation import validate_domain, validate_name

from .create_tenant_use_case import domain_taken
from .dtos import TenantInfo, TenantUpdateResponse, UpdateTenantCommand
from .tenant_settings_use_case import write_settings_version

logger = logging.getLogger(__name__)

# Archiving has its own endpoint; cancelled is only reached through billing.
STATUS_ACTIONS = {
    TenantStatus.active.value: TenantAction.restore_access,
    TenantStatus.suspended.value: TenantAction.suspend,
}


class UpdateTenantUseCase:
    """
    Update a tenant (super admin).

    Business Logic:
    1. Validate the fields that were sent
    2. Lock the target plan (when changing plan) and the tenant
    3. Reject archived tenants, taken domains and unassignable plans
       before anything is written
    4. Apply status transition, name/domain, plan switch and settings
    5. Audit and commit; notify when the plan changed
    """

    def __init__(self, uow: UnitOfWork, notifier: Optional[INotificationService] = None):
        self.uow = uow
        self.notifier = notifier

    async def execute(
        self,
        tenant_id: UUID,
        command: UpdateTenantCommand,
        actor_id: Optional[UUID] = None,
    ) -> Result[TenantUpdateResponse]:
        """
        Errors:
            - VALIDATION_ERROR: field map for malformed fields
            - TENANT_NOT_FOUND / PLAN_NOT_FOUND
            - PLAN_INACTIVE: target plan is deactivated
            - DOMAIN_TAKEN: another tenant owns the domain
            - INVALID_TRANSITION: tenant is archived or cannot take the status
            - SUBSCRIPTION_CONFLICT: concurrent plan switch won the race
        """
        fields = {}
        if command.name is not None:
            fields.update(validate_name(command.name))
        if command.domain is not None:
            fields.update(validate_domain(command.domain))
        if command.status is not None and command.status not in STATUS_ACTIONS:
            allowed = ", ".join(STATUS_ACTIONS)
            fields["status"] = f"status must be one of: {allowed}"
        if command.settings is not None:
            reserved = sorted(set(command.settings) & set(RESERVED_KEYS))
            if reserved:
                fields["settings"] = f"reserved keys cannot be set: {', '.join(reserved)}"

        plan_id = None
        if command.plan_id is not None:
            try:
                plan_id = UUID(command.plan_id)
            except ValueError:
                fields["plan_id"] = "plan_id must be a valid UUID"

        if fields:
            return Return.err(
                Error("VALIDATION_ERROR", "Invalid tenant data", fields=fields)
            )

        async with self.uow:
            plan = None
            if plan_id is not None:
                plan = await self.uow.plans.get_by_id(plan_id, for_update=True)

            tenant = await self.uow.tenants.get_by_id(tenant_id, for_update=True)
            if not tenant:
                return Return.err(Error("TENANT_NOT_FOUND", "Tenant not found"))
            if tenant.status == TenantStatus.archived:
                return Return.err(
                    Error("INVALID_TRANSITION", "Cannot update an archived tenant")
                )

            change_plan = plan_id is not None and plan_id != tenant.plan_id
            if change_plan:
                error = check_assignable(tenant, plan)
                if error:
                    return Return.err(error)

            change_domain = command.domain is not None and command.domain != tenant.domain
            if change_domain:
                existing = await self.uow.tenants.get_by_domain(command.domain)
                if existing is not None and existing.id != tenant.id:
                    return Return.err(domain_taken())

            now = utcnow()
            changed = []
            audit_data = {}

            effects = None
            if command.status is not None and command.status != tenant.status.value:
                old_status = tenant.status.value
                transition = apply_transition(tenant, STATUS_ACTIONS[command.status], now)
                if transition.is_err():
                    return transition
                effects = transition.value
                changed.append("status")
                audit_data["status"] = {"old": old_status, "new": tenant.status.value}

            if command.name is not None and command.name.strip() != tenant.name:
                audit_data["name"] = {"old": tenant.name, "new": command.name.strip()}
                tenant.name = command.name.strip()
                changed.append("name")

            if change_domain:
                audit_data["domain"] = {"old": tenant.domain, "new": command.domain}
                tenant.domain = command.domain
                changed.append("domain")

            tenant.updated_at = now
            switch = None
            try:
                # must run before any query that could autoflush the new domain
                await self.uow.tenants.update(tenant)

                if change_plan:
                    switch = await switch_plan(
                        self.uow,
                        tenant,
                        plan,
                        now,
                        reason=command.reason or "tenant_updated",
                    )
                    changed.append("plan_id")
                    audit_data["plan_id"] = {"old": switch.old_plan_id, "new": str(plan.id)}

                if effects is not None:
                    await run_side_effects(self.uow, tenant, effects, now)

                if command.settings is not None:
                    version = await write_settings_version(
                        self.uow,
                        tenant,
                        command.settings,
                        actor_id,
                        command.reason,
                        "tenant_settings_updated",
                    )
                    changed.append("settings")
                    audit_data["settings_version"] = version
            except DomainTakenError:
                return Return.err(domain_taken())
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
                    action="tenant_updated",
                    resource_type="tenant",
                    resource_id=str(tenant.id),
                    request_data={"changed": changed, **audit_data},
                )
            )
            await self.uow.commit()

            logger.info(
                f"Tenant updated: {tenant.name}",
                extra={"tenant_id": str(tenant.id), "changed": changed},
            )

            notification_sent = True
            if switch is not None:
                notification_sent = await deliver_notification(
                    self.uow,
                    self.notifier,
                    "plan_changed",
                    {
                        "tenant_id": str(tenant.id),
                        "old_plan_id": switch.old_plan_id,
                        "new_plan_id": str(plan.id),
                    },
                    tenant_id=tenant.id,
                    actor_id=actor_id,
                )

            return Return.ok(
                TenantUpdateResponse(
                    tenant=TenantInfo.from_entity(tenant),
                    changed=changed,
                    notification_sent=notification_sent,
                )
            )
