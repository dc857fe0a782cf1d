"""
Use Case: Suspend Tenant Access

Blocks a tenant without touching its entitlements: status becomes
suspended and ``settings.suspended`` is set, features and limits stay as
they are so a later restore puts the tenant back exactly where it was.
"""

import logging
from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.tenant_lifecycle import run_side_effects
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.tenants.dtos import TenantStatusResponse
from src.domain.base import utcnow
from src.domain.entities import AuditLog, TenantStatus
from src.domain.lifecycle import TenantAction, apply_transition

logger = logging.getLogger(__name__)


class SuspendTenantUseCase:
    """
    Suspend a tenant (super admin).

    Business Logic:
    1. Validate tenant exists and is active or already suspended
    2. Update status and the suspended flag
    3. Create audit log entry

    Idempotent: suspending an already-suspended tenant succeeds and
    writes nothing
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, tenant_id: UUID, actor_id: Optional[UUID] = None
    ) -> Result[TenantStatusResponse]:
        async with self.uow:
            tenant = await self.uow.tenants.get_by_id(tenant_id, for_update=True)
            if not tenant:
                return Return.err(Error("TENANT_NOT_FOUND", "Tenant not found"))

            if tenant.status == TenantStatus.suspended:
                return Return.ok(
                    TenantStatusResponse(tenant_id=str(tenant.id), status=tenant.status.value)
                )

            now = utcnow()
            transition = apply_transition(tenant, TenantAction.suspend, now)
            if transition.is_err():
                return transition
            await run_side_effects(self.uow, tenant, transition.value, now)

            await self.uow.audit_logs.create(
                AuditLog(
                    user_id=actor_id,
                    tenant_id=tenant.id,
                    action="tenant_suspended",
                    resource_type="tenant",
                    resource_id=str(tenant.id),
                    request_data={"suspended_at": now.isoformat()},
                )
            )
            await self.uow.commit()

            logger.info(f"Suspended access for tenant {tenant.name}", extra={"tenant_id": str(tenant.id)})
            return Return.ok(
                TenantStatusResponse(tenant_id=str(tenant.id), status=tenant.status.value)
            )
