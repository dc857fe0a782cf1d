from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict, List, Optional
from uuid import UUID

from src.domain.entities import Tenant


class DomainTakenError(Exception):
    """Another tenant already owns the domain being written"""


class ITenantRepository(ABC):
    """Tenant repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, tenant_id: UUID, for_update: bool = False) -> Optional[Tenant]:
        """Get tenant by ID; for_update takes a row lock until the transaction ends"""
        pass

    @abstractmethod
    async def get_by_domain(self, domain: str) -> Optional[Tenant]:
        """Get tenant by its unique domain"""
        pass

    @abstractmethod
    async def list_by_plan(self, plan_id: UUID, for_update: bool = False) -> List[Tenant]:
        """All tenants assigned to a plan"""
        pass

    @abstractmethod
    async def list(
        self,
        status: Optional[str] = None,
        plan_id: Optional[UUID] = None,
        search: Optional[str] = None,
        include_archived: bool = False,
    ) -> List[Tenant]:
        """List tenants newest first"""
        pass

    @abstractmethod
    async def count_by_status(self) -> Dict[str, int]:
        """Number of tenants per status"""
        pass

    @abstractmethod
    async def count_trialing(self, now: datetime) -> int:
        """Tenants whose trial has not ended yet"""
        pass

    @abstractmethod
    async def count_created_since(self, since: datetime) -> int:
        """Tenants created at or after a timestamp"""
        pass

    @abstractmethod
    async def create(self, tenant: Tenant) -> Tenant:
        """Create a new tenant

        Raises:
            DomainTakenError: the domain is already in use
        """
        pass

    @abstractmethod
    async def update(self, tenant: Tenant) -> Tenant:
        """Update existing tenant

        Raises:
            DomainTakenError: the new domain is already in use
        """
        pass
