from typing import List
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.subscription_change_repository import ISubscriptionChangeRepository
from src.domain.entities import SubscriptionChange


class SubscriptionChangeRepository(ISubscriptionChangeRepository):
    """SubscriptionChange repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, change: SubscriptionChange) -> SubscriptionChange:
        """Append a plan change (immutable)"""
        self.session.add(change)
        await self.session.flush()
        await self.session.refresh(change)
        return change

    async def list_by_tenant(self, tenant_id: UUID) -> List[SubscriptionChange]:
        """Plan changes of a tenant, newest first"""
        stmt = (
            select(SubscriptionChange)
            .where(SubscriptionChange.tenant_id == tenant_id)
            .order_by(SubscriptionChange.created_at.desc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())
