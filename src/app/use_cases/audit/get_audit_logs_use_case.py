"""
Get Audit Logs Use Case

Retrieves the administrative audit trail with cursor pagination.
"""

from typing import Any, Dict, Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork

MAX_PAGE_SIZE = 200


class GetAuditLogsUseCase:
    """
    Use case for retrieving audit logs.

    Business Rules:
    - Caller authorization happens at the route (super admin only)
    - Optional filters: tenant_id, action
    - Results ordered by newest first
    - Supports cursor-based pagination
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        tenant_id: Optional[UUID] = None,
        action: Optional[str] = None,
        limit: int = 50,
        cursor: Optional[str] = None,
    ) -> Result[Dict[str, Any]]:
        """
        Execute get audit logs use case.

        Args:
            tenant_id: Only entries for this tenant (optional)
            action: Only entries with this action (optional)
            limit: Maximum number of entries to return
            cursor: Pagination cursor (optional)

        Returns:
            Result with logs list and next_cursor, or Error
        """
        if not 1 <= limit <= MAX_PAGE_SIZE:
            return Return.err(
                Error(
                    "VALIDATION_ERROR",
                    "Invalid page size",
                    fields={"limit": f"limit must be between 1 and {MAX_PAGE_SIZE}"},
                )
            )

        async with self.uow:
            entries, next_cursor = await self.uow.audit_logs.list_paginated(
                tenant_id=tenant_id, action=action, limit=limit, cursor=cursor
            )

            logs = [
                {
                    "id": str(entry.id),
                    "action": entry.action,
                    "user_id": str(entry.user_id) if entry.user_id else None,
                    "tenant_id": str(entry.tenant_id) if entry.tenant_id else None,
                    "resource_type": entry.resource_type,
                    "resource_id": entry.resource_id,
                    "request_data": entry.request_data or {},
                    "timestamp": entry.performed_at.isoformat() + "Z",
                }
                for entry in entries
            ]
            return Return.ok({"logs": logs, "next_cursor": next_cursor})
