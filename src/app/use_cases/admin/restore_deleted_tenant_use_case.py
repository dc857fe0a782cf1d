"""
Use Case: Restore Archived Tenant

Undoes an archive: clears deleted_at, reactivates the tenant and its
users. The subscription cancelled by the archive stays cancelled; a plan
has to be assigned again.
"""

import logging
from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.authorization import require_super_admin
from src.app.services.tenant_lifecycle import run_side_effects
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.tenants.dtos import RestoreDeletedTenantResponse
from src.domain.base import utcnow
from src.domain.entities import AuditLog
from src.domain.lifecycle import TenantAction, apply_transition

logger = logging.getLogger(__name__)


class RestoreDeletedTenantUseCase:
    """
    Restore an archived tenant (super admin only).

    Business Logic:
    1. Verify the caller is an active super admin
    2. Validate tenant exists and is archived
    3. Clear deleted_at, status back to active
    4. Reactivate the tenant's users
    5. Create audit log entry
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, tenant_id: UUID, actor_id: Optional[UUID]
    ) -> Result[RestoreDeletedTenantResponse]:
        """
        Errors:
            - INSUFFICIENT_ROLE: caller is not a super admin
            - TENANT_NOT_FOUND: Tenant does not exist
            - TENANT_NOT_ARCHIVED: Tenant is not archived
        """
        async with self.uow:
            actor = await require_super_admin(self.uow, actor_id)
            if actor.is_err():
                return actor

            tenant = await self.uow.tenants.get_by_id(tenant_id, for_update=True)
            if not tenant:
                return Return.err(Error("TENANT_NOT_FOUND", "Tenant not found"))

            now = utcnow()
            transition = apply_transition(tenant, TenantAction.unarchive, now)
            if transition.is_err():
                return transition
            outcome = await run_side_effects(self.uow, tenant, transition.value, now)

            await self.uow.audit_logs.create(
                AuditLog(
                    user_id=actor.value.id,
                    tenant_id=tenant.id,
                    action="tenant_restored",
                    resource_type="tenant",
                    resource_id=str(tenant.id),
                    request_data={
                        "tenant_name": tenant.name,
                        "users_reactivated": outcome.users_reactivated,
                    },
                )
            )
            await self.uow.commit()

            logger.info(f"Restored archived tenant {tenant.name}", extra={"tenant_id": str(tenant.id)})
            return Return.ok(
                RestoreDeletedTenantResponse(
                    status=tenant.status.value,
                    tenant_id=str(tenant.id),
                    users_reactivated=outcome.users_reactivated,
                )
            )
