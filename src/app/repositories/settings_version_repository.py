from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import TenantSettingsVersion


class ISettingsVersionRepository(ABC):
    """TenantSettingsVersion repository interface - application layer"""

    @abstractmethod
    async def get_latest_version_number(self, tenant_id: UUID) -> int:
        """Highest version recorded for the tenant (0 when none)"""
        pass

    @abstractmethod
    async def get_by_version(
        self, tenant_id: UUID, version: int
    ) -> Optional[TenantSettingsVersion]:
        """A specific version of the tenant's settings"""
        pass

    @abstractmethod
    async def list_by_tenant(self, tenant_id: UUID) -> List[TenantSettingsVersion]:
        """All versions of the tenant's settings, newest first"""
        pass

    @abstractmethod
    async def create(self, version: TenantSettingsVersion) -> TenantSettingsVersion:
        """Record a new version"""
        pass
