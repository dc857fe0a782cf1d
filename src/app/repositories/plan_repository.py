from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from src.domain.entities import Plan


class IPlanRepository(ABC):
    """Plan repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, plan_id: UUID, for_update: bool = False) -> Optional[Plan]:
        """Get plan by ID; for_update takes a row lock until the transaction ends"""
        pass

    @abstractmethod
    async def get_by_ids(self, plan_ids: List[UUID]) -> List[Plan]:
        """Get all plans whose ID is in the list"""
        pass

    @abstractmethod
    async def list(
        self, is_active: Optional[bool] = None, search: Optional[str] = None
    ) -> List[Plan]:
        """List plans ordered by sort_order, newest first within a position"""
        pass

    @abstractmethod
    async def get_max_sort_order(self) -> int:
        """Highest sort_order in use (0 when there are no plans)"""
        pass

    @abstractmethod
    async def create(self, plan: Plan) -> Plan:
        """Create a new plan"""
        pass

    @abstractmethod
    async def update(self, plan: Plan) -> Plan:
        """Update existing plan"""
        pass

    @abstractmethod
    async def delete(self, plan: Plan) -> None:
        """Hard-delete a plan nothing references"""
        pass

    @abstractmethod
    async def count_tenants(self, plan_id: UUID, status: Optional[str] = None) -> int:
        """Count tenants assigned to the plan, optionally filtered by status"""
        pass

    @abstractmethod
    async def count_subscriptions(self, plan_id: UUID, active_only: bool = False) -> int:
        """Count subscriptions that reference the plan"""
        pass

    @abstractmethod
    async def sum_revenue(self, plan_id: UUID, since: Optional[datetime] = None) -> Decimal:
        """Sum of subscription amounts for the plan, optionally since a timestamp"""
        pass
