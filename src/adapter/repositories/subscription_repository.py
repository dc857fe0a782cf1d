from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.subscription_repository import (
    ISubscriptionRepository,
    SubscriptionConflictError,
)
from src.domain.entities import Subscription, SubscriptionStatus


class SubscriptionRepository(ISubscriptionRepository):
    """Subscription repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_active_by_tenant(self, tenant_id: UUID) -> Optional[Subscription]:
        """The tenant's active subscription, if any"""
        stmt = (
            select(Subscription)
            .where(Subscription.tenant_id == tenant_id)
            .where(Subscription.status == SubscriptionStatus.active)
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list_by_tenant(self, tenant_id: UUID) -> List[Subscription]:
        """All subscriptions of a tenant, newest created first"""
        stmt = (
            select(Subscription)
            .where(Subscription.tenant_id == tenant_id)
            .order_by(Subscription.created_at.desc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, subscription: Subscription) -> Subscription:
        """Create a new subscription"""
        self.session.add(subscription)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise SubscriptionConflictError(str(subscription.tenant_id)) from exc
        await self.session.refresh(subscription)
        return subscription

    async def update(self, subscription: Subscription) -> Subscription:
        """Update existing subscription"""
        self.session.add(subscription)
        await self.session.flush()
        await self.session.refresh(subscription)
        return subscription
