from uuid import UUID

from sqlalchemy import func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.business_data_repository import IBusinessDataRepository
from src.domain.entities import Customer, Product


class BusinessDataRepository(IBusinessDataRepository):
    """Read-only tenant business data queries using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def count_products(self, tenant_id: UUID) -> int:
        stmt = select(func.count()).select_from(Product).where(Product.tenant_id == tenant_id)
        result = await self.session.exec(stmt)
        return result.one()

    async def count_customers(self, tenant_id: UUID) -> int:
        stmt = select(func.count()).select_from(Customer).where(Customer.tenant_id == tenant_id)
        result = await self.session.exec(stmt)
        return result.one()
