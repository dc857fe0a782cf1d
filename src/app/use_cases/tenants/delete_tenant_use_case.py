"""
Use Case: Delete (Archive) Tenant

Soft delete restricted to super admins. The tenant is archived, its
active subscription cancelled and its users deactivated; products,
customers and users stay in place so the tenant can be restored.
"""

import logging
from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.authorization import require_super_admin
from src.app.services.tenant_lifecycle import run_side_effects
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import AuditLog
from src.domain.lifecycle import TenantAction, apply_transition

from .dtos import DeleteTenantResponse

logger = logging.getLogger(__name__)


class DeleteTenantUseCase:
    """
    Archive a tenant (super admin only).

    Business Logic:
    1. Verify the caller is an active super admin
    2. Validate tenant exists and is not archived yet
    3. Set deleted_at and status archived
    4. Cancel the active subscription (subscription_status -> cancelled)
    5. Deactivate every user of the tenant
    6. Create audit log entry (tenant_deleted)
    7. Report what was retained

    All of it commits together; an authorization failure writes nothing.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, tenant_id: UUID, actor_id: Optional[UUID]
    ) -> Result[DeleteTenantResponse]:
        """
        Execute delete tenant use case.

        Args:
            tenant_id: UUID of tenant to archive
            actor_id: UUID of the calling user (from JWT)

        Returns:
            Result[DeleteTenantResponse] with archive details

        Errors:
            - INSUFFICIENT_ROLE: caller is not a super admin
            - TENANT_NOT_FOUND: Tenant does not exist
            - TENANT_ALREADY_ARCHIVED: Tenant is already archived
        """
        async with self.uow:
            # 1. Authorize against the stored user, not the token claim
            actor = await require_super_admin(self.uow, actor_id)
            if actor.is_err():
                return actor

            # 2. Get tenant (locked)
            tenant = await self.uow.tenants.get_by_id(tenant_id, for_update=True)
            if not tenant:
                return Return.err(Error("TENANT_NOT_FOUND", "Tenant not found"))

            # 3-5. Transition and its side effects
            now = utcnow()
            transition = apply_transition(tenant, TenantAction.archive, now)
            if transition.is_err():
                return transition
            outcome = await run_side_effects(self.uow, tenant, transition.value, now)

            retained = {
                "users": len(await self.uow.users.list_by_tenant(tenant.id)),
                "products": await self.uow.business_data.count_products(tenant.id),
                "customers": await self.uow.business_data.count_customers(tenant.id),
            }

            # 6. Audit
            await self.uow.audit_logs.create(
                AuditLog(
                    user_id=actor.value.id,
                    tenant_id=tenant.id,
                    action="tenant_deleted",
                    resource_type="tenant",
                    resource_id=str(tenant.id),
                    request_data={
                        "tenant_name": tenant.name,
                        "deleted_at": now.isoformat(),
                        "users_deactivated": outcome.users_deactivated,
                        "subscription_cancelled": outcome.subscription_cancelled,
                        "retained": retained,
                    },
                )
            )

            # 7. Commit transaction
            await self.uow.commit()

            logger.info(
                f"Archived tenant {tenant.name}",
                extra={"tenant_id": str(tenant.id), "actor_id": str(actor.value.id)},
            )
            return Return.ok(
                DeleteTenantResponse(
                    status=tenant.status.value,
                    tenant_id=str(tenant.id),
                    deleted_at=now,
                    users_deactivated=outcome.users_deactivated,
                    subscription_cancelled=outcome.subscription_cancelled,
                    retained=retained,
                )
            )
