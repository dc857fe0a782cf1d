from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from sqlalchemy import func, or_
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.plan_repository import IPlanRepository
from src.domain.entities import Plan, Subscription, SubscriptionStatus, Tenant


class PlanRepository(IPlanRepository):
    """Plan repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, plan_id: UUID, for_update: bool = False) -> Optional[Plan]:
        """Get plan by ID"""
        stmt = select(Plan).where(Plan.id == plan_id)
        if for_update:
            stmt = stmt.with_for_update()
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_ids(self, plan_ids: List[UUID]) -> List[Plan]:
        """Get all plans whose ID is in the list"""
        if not plan_ids:
            return []
        stmt = select(Plan).where(Plan.id.in_(plan_ids))
        result = await self.session.exec(stmt)
        return list(result.all())

    async def list(
        self, is_active: Optional[bool] = None, search: Optional[str] = None
    ) -> List[Plan]:
        """List plans ordered by sort_order, newest first within a position"""
        stmt = select(Plan)
        if is_active is not None:
            stmt = stmt.where(Plan.is_active == is_active)
        if search:
            pattern = f"%{search}%"
            stmt = stmt.where(or_(Plan.name.ilike(pattern), Plan.description.ilike(pattern)))
        stmt = stmt.order_by(Plan.sort_order, Plan.created_at.desc())
        result = await self.session.exec(stmt)
        return list(result.all())

    async def get_max_sort_order(self) -> int:
        """Highest sort_order in use (0 when there are no plans)"""
        result = await self.session.exec(select(func.max(Plan.sort_order)))
        return result.one() or 0

    async def create(self, plan: Plan) -> Plan:
        """Create a new plan"""
        self.session.add(plan)
        await self.session.flush()
        await self.session.refresh(plan)
        return plan

    async def update(self, plan: Plan) -> Plan:
        """Update existing plan"""
        self.session.add(plan)
        await self.session.flush()
        await self.session.refresh(plan)
        return plan

    async def delete(self, plan: Plan) -> None:
        """Hard-delete a plan nothing references"""
        await self.session.delete(plan)
        await self.session.flush()

    async def count_tenants(self, plan_id: UUID, status: Optional[str] = None) -> int:
        """Count tenants assigned to the plan, optionally filtered by status"""
        stmt = select(func.count()).select_from(Tenant).where(Tenant.plan_id == plan_id)
        if status is not None:
            stmt = stmt.where(Tenant.status == status)
        result = await self.session.exec(stmt)
        return result.one()

    async def count_subscriptions(self, plan_id: UUID, active_only: bool = False) -> int:
        """Count subscriptions that reference the plan"""
        stmt = (
            select(func.count())
            .select_from(Subscription)
            .where(Subscription.plan_id == plan_id)
        )
        if active_only:
            stmt = stmt.where(Subscription.status == SubscriptionStatus.active)
        result = await self.session.exec(stmt)
        return result.one()

    async def sum_revenue(self, plan_id: UUID, since: Optional[datetime] = None) -> Decimal:
        """Sum of subscription amounts for the plan, optionally since a timestamp"""
        stmt = select(func.coalesce(func.sum(Subscription.amount), 0)).where(
            Subscription.plan_id == plan_id
        )
        if since is not None:
            stmt = stmt.where(Subscription.created_at >= since)
        result = await self.session.exec(stmt)
        return Decimal(str(result.one()))
