from abc import ABC, abstractmethod
from uuid import UUID


class IBusinessDataRepository(ABC):
    """Read-only access to tenant-owned business rows (products, customers)"""

    @abstractmethod
    async def count_products(self, tenant_id: UUID) -> int:
        """Number of products tagged with the tenant"""
        pass

    @abstractmethod
    async def count_customers(self, tenant_id: UUID) -> int:
        """Number of customers tagged with the tenant"""
        pass
