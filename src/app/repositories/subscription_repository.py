from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import Subscription


class SubscriptionConflictError(Exception):
    """A second active subscription was about to be written for a tenant"""


class ISubscriptionRepository(ABC):
    """Subscription repository interface - application layer"""

    @abstractmethod
    async def get_active_by_tenant(self, tenant_id: UUID) -> Optional[Subscription]:
        """The tenant's active subscription, if any"""
        pass

    @abstractmethod
    async def list_by_tenant(self, tenant_id: UUID) -> List[Subscription]:
        """All subscriptions of a tenant, newest created first"""
        pass

    @abstractmethod
    async def create(self, subscription: Subscription) -> Subscription:
        """Create a new subscription

        Raises:
            SubscriptionConflictError: the tenant already has an active subscription
        """
        pass

    @abstractmethod
    async def update(self, subscription: Subscription) -> Subscription:
        """Update existing subscription (status transitions only)"""
        pass
