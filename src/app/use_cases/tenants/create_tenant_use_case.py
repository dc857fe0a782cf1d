"""
Use Case: Create Tenant

Creates a tenant, optionally on a plan (with a trial) and with a first
tenant admin user, in one transaction.
"""

import logging
from datetime import timedelta
from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.repositories.subscription_repository import SubscriptionConflictError
from src.app.repositories.tenant_repository import DomainTakenError
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.subscriptions.plan_switch import switch_plan
from src.domain.base import utcnow
from src.domain.entities import AuditLog, Tenant, TenantStatus, User, UserRole
from src.domain.settings import RESERVED_KEYS, TenantSettings
from src.domain.validation import validate_domain, validate_name, validate_trial_days

from .dtos import CreateTenantCommand, TenantInfo

logger = logging.getLogger(__name__)


def domain_taken() -> Error:
    return Error(
        "DOMAIN_TAKEN",
        "Domain is already in use",
        fields={"domain": "domain is already in use"},
    )


class CreateTenantUseCase:
    """
    Create a tenant (super admin).

    Business Logic:
    1. Validate name, domain format, trial_days, custom settings keys
    2. Domain must be unused (DOMAIN_TAKEN)
    3. plan_id, when given, must name an existing active plan
    4. Create tenant; assign the plan with trial_ends_at from
       trial_days (defaulting to the plan's trial)
    5. Optionally create the tenant admin user
    6. Audit and commit
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, command: CreateTenantCommand, actor_id: Optional[UUID] = None
    ) -> Result[TenantInfo]:
        fields = {}
        fields.update(validate_name(command.name))
        fields.update(validate_domain(command.domain))
        fields.update(validate_trial_days(command.trial_days))
        reserved = sorted(set(command.settings) & set(RESERVED_KEYS))
        if reserved:
            fields["settings"] = f"reserved keys cannot be set: {', '.join(reserved)}"

        plan_id = None
        if command.plan_id:
            try:
                plan_id = UUID(command.plan_id)
            except ValueError:
                fields["plan_id"] = "plan_id must be a valid UUID"

        if fields:
            return Return.err(
                Error("VALIDATION_ERROR", "Invalid tenant data", fields=fields)
            )

        async with self.uow:
            if await self.uow.tenants.get_by_domain(command.domain):
                return Return.err(domain_taken())

            plan = None
            if plan_id is not None:
                plan = await self.uow.plans.get_by_id(plan_id, for_update=True)
                if plan is None or not plan.is_active:
                    return Return.err(
                        Error(
                            "VALIDATION_ERROR",
                            "Invalid tenant data",
                            fields={"plan_id": "plan_id must name an existing active plan"},
                        )
                    )

            if command.admin and await self.uow.users.get_by_email(command.admin.email):
                return Return.err(
                    Error(
                        "VALIDATION_ERROR",
                        "Invalid tenant data",
                        fields={"admin.email": "email is already registered"},
                    )
                )

            now = utcnow()
            trial_days = command.trial_days
            if trial_days is None:
                trial_days = plan.trial_days if plan else 0

            tenant = Tenant(
                name=command.name.strip(),
                domain=command.domain,
                status=TenantStatus.active,
                settings=TenantSettings().with_extensions(command.settings).to_blob(),
                trial_ends_at=now + timedelta(days=trial_days) if trial_days else None,
                created_at=now,
                updated_at=now,
            )
            try:
                tenant = await self.uow.tenants.create(tenant)
            except DomainTakenError:
                # lost a race with a concurrent create after the lookup above
                return Return.err(domain_taken())

            if plan is not None:
                try:
                    await switch_plan(self.uow, tenant, plan, now, reason="tenant_created")
                except SubscriptionConflictError:
                    return Return.err(
                        Error("SUBSCRIPTION_CONFLICT", "Tenant already has an active subscription")
                    )

            admin_user = None
            if command.admin:
                admin_user = await self.uow.users.create(
                    User(
                        tenant_id=tenant.id,
                        name=command.admin.name,
                        email=command.admin.email,
                        role=UserRole.tenant_admin,
                    )
                )

            await self.uow.audit_logs.create(
                AuditLog(
                    user_id=actor_id,
                    tenant_id=tenant.id,
                    action="tenant_created",
                    resource_type="tenant",
                    resource_id=str(tenant.id),
                    request_data={
                        "name": tenant.name,
                        "domain": tenant.domain,
                        "plan_id": str(plan.id) if plan else None,
                        "trial_days": trial_days,
                        "admin_user_id": str(admin_user.id) if admin_user else None,
                    },
                )
            )
            await self.uow.commit()

            logger.info(f"Tenant created: {tenant.name}", extra={"tenant_id": str(tenant.id)})
            return Return.ok(TenantInfo.from_entity(tenant))
