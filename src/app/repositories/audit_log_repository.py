from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
from uuid import UUID

from src.domain.entities import AuditLog


class IAuditLogRepository(ABC):
    """AuditLog repository interface - application layer"""

    @abstractmethod
    async def create(self, audit_log: AuditLog) -> AuditLog:
        """Create a new audit log entry (immutable)"""
        pass

    @abstractmethod
    async def list_paginated(
        self,
        tenant_id: Optional[UUID] = None,
        action: Optional[str] = None,
        limit: int = 50,
        cursor: Optional[str] = None,
    ) -> Tuple[List[AuditLog], Optional[str]]:
        """
        Get audit logs with cursor-based pagination.

        Returns:
            Tuple of (entries list, next_cursor)
            - entries: List of audit logs ordered by performed_at DESC
            - next_cursor: Cursor for next page, None if no more entries
        """
        pass
