"""
Use Case: Restore Tenant Access

Lifts a suspension: status back to active, the ``suspended`` key removed
and features/limits re-synced from the tenant's current plan.
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


class RestoreTenantUseCase:
    """
    Restore a suspended tenant (super admin).

    Idempotent: restoring an already-active tenant re-syncs its
    entitlements and succeeds.
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

            was_suspended = tenant.status == TenantStatus.suspended
            now = utcnow()
            transition = apply_transition(tenant, TenantAction.restore_access, now)
            if transition.is_err():
                return transition
            await run_side_effects(self.uow, tenant, transition.value, now)

            if was_suspended:
                await self.uow.audit_logs.create(
                    AuditLog(
                        user_id=actor_id,
                        tenant_id=tenant.id,
                        action="tenant_access_restored",
                        resource_type="tenant",
                        resource_id=str(tenant.id),
                        request_data={"restored_at": now.isoformat()},
                    )
                )
            await self.uow.commit()

            if was_suspended:
                logger.info(f"Restored access for tenant {tenant.name}", extra={"tenant_id": str(tenant.id)})
            return Return.ok(
                TenantStatusResponse(tenant_id=str(tenant.id), status=tenant.status.value)
            )
