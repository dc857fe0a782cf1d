from abc import ABC, abstractmethod
from typing import List
from uuid import UUID

from src.domain.entities import SubscriptionChange


class ISubscriptionChangeRepository(ABC):
    """SubscriptionChange repository interface - application layer"""

    @abstractmethod
    async def create(self, change: SubscriptionChange) -> SubscriptionChange:
        """Append a plan change (immutable)"""
        pass

    @abstractmethod
    async def list_by_tenant(self, tenant_id: UUID) -> List[SubscriptionChange]:
        """Plan changes of a tenant, newest first"""
        pass
