"""
Use Case: Bulk Tenant Action

Applies suspend, restore, delete or restore_deleted to many tenants. Each
tenant runs through the single-tenant use case in its own transaction, so
one failure never undoes the others.
"""

import logging
from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.authorization import require_super_admin
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.tenants.delete_tenant_use_case import DeleteTenantUseCase
from src.app.use_cases.tenants.dtos import (
    BulkFailure,
    BulkTenantActionCommand,
    BulkTenantActionResponse,
)

from .restore_deleted_tenant_use_case import RestoreDeletedTenantUseCase
from .restore_tenant_use_case import RestoreTenantUseCase
from .suspend_tenant_use_case import SuspendTenantUseCase

logger = logging.getLogger(__name__)

ACTIONS = {
    "suspend": SuspendTenantUseCase,
    "restore": RestoreTenantUseCase,
    "delete": DeleteTenantUseCase,
    "restore_deleted": RestoreDeletedTenantUseCase,
}
SUPER_ADMIN_ACTIONS = ("delete", "restore_deleted")
MAX_BULK_SIZE = 100


class BulkTenantActionUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, command: BulkTenantActionCommand, actor_id: Optional[UUID] = None
    ) -> Result[BulkTenantActionResponse]:
        """
        Returns:
            Result[BulkTenantActionResponse] listing succeeded ids and
            per-id failures

        Errors:
            - VALIDATION_ERROR: unknown action, empty or oversized id list
            - INSUFFICIENT_ROLE: delete/restore_deleted by a non super admin
        """
        fields = {}
        if command.action not in ACTIONS:
            fields["action"] = f"action must be one of: {', '.join(ACTIONS)}"
        if not command.tenant_ids:
            fields["tenant_ids"] = "at least one tenant id is required"
        elif len(command.tenant_ids) > MAX_BULK_SIZE:
            fields["tenant_ids"] = f"at most {MAX_BULK_SIZE} tenants per request"
        if fields:
            return Return.err(
                Error("VALIDATION_ERROR", "Invalid bulk action", fields=fields)
            )

        if command.action in SUPER_ADMIN_ACTIONS:
            async with self.uow:
                actor = await require_super_admin(self.uow, actor_id)
            if actor.is_err():
                return actor

        use_case = ACTIONS[command.action](self.uow)
        succeeded = []
        failed = []

        for raw_id in dict.fromkeys(command.tenant_ids):
            try:
                tenant_id = UUID(raw_id)
            except ValueError:
                failed.append(
                    BulkFailure(
                        tenant_id=raw_id,
                        code="VALIDATION_ERROR",
                        message="tenant id must be a valid UUID",
                    )
                )
                continue

            result = await use_case.execute(tenant_id, actor_id)
            if result.is_ok():
                succeeded.append(raw_id)
            else:
                failed.append(
                    BulkFailure(
                        tenant_id=raw_id,
                        code=result.error.code,
                        message=result.error.message,
                    )
                )

        logger.info(
            f"Bulk {command.action}: {len(succeeded)} succeeded, {len(failed)} failed",
            extra={"action": command.action},
        )
        return Return.ok(
            BulkTenantActionResponse(action=command.action, succeeded=succeeded, failed=failed)
        )
