from datetime import datetime
from typing import Dict, List, Optional
from uuid import UUID

from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.tenant_repository import DomainTakenError, ITenantRepository
from src.domain.entities import Tenant, TenantStatus


class TenantRepository(ITenantRepository):
    """Tenant repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, tenant_id: UUID, for_update: bool = False) -> Optional[Tenant]:
        """Get tenant by ID"""
        stmt = select(Tenant).where(Tenant.id == tenant_id)
        if for_update:
            stmt = stmt.with_for_update()
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_domain(self, domain: str) -> Optional[Tenant]:
        """Get tenant by its unique domain"""
        stmt = select(Tenant).where(Tenant.domain == domain)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list_by_plan(self, plan_id: UUID, for_update: bool = False) -> List[Tenant]:
        """All tenants assigned to a plan"""
        stmt = select(Tenant).where(Tenant.plan_id == plan_id).order_by(Tenant.created_at)
        if for_update:
            stmt = stmt.with_for_update()
        result = await self.session.exec(stmt)
        return list(result.all())

    async def list(
        self,
        status: Optional[str] = None,
        plan_id: Optional[UUID] = None,
        search: Optional[str] = None,
        include_archived: bool = False,
    ) -> List[Tenant]:
        """List tenants newest first"""
        stmt = select(Tenant)
        if not include_archived:
            stmt = stmt.where(Tenant.deleted_at.is_(None))
        if status:
            stmt = stmt.where(Tenant.status == status)
        if plan_id:
            stmt = stmt.where(Tenant.plan_id == plan_id)
        if search:
            pattern = f"%{search}%"
            stmt = stmt.where(or_(Tenant.name.ilike(pattern), Tenant.domain.ilike(pattern)))
        stmt = stmt.order_by(Tenant.created_at.desc())
        result = await self.session.exec(stmt)
        return list(result.all())

    async def count_by_status(self) -> Dict[str, int]:
        """Number of tenants per status"""
        stmt = select(Tenant.status, func.count()).group_by(Tenant.status)
        result = await self.session.exec(stmt)
        counts = {status.value: 0 for status in TenantStatus}
        for status, count in result.all():
            counts[TenantStatus(status).value] = count
        return counts

    async def count_trialing(self, now: datetime) -> int:
        """Tenants whose trial has not ended yet"""
        stmt = (
            select(func.count())
            .select_from(Tenant)
            .where(Tenant.trial_ends_at.is_not(None))
            .where(Tenant.trial_ends_at > now)
        )
        result = await self.session.exec(stmt)
        return result.one()

    async def count_created_since(self, since: datetime) -> int:
        """Tenants created at or after a timestamp"""
        stmt = select(func.count()).select_from(Tenant).where(Tenant.created_at >= since)
        result = await self.session.exec(stmt)
        return result.one()

    async def create(self, tenant: Tenant) -> Tenant:
        """Create a new tenant"""
        self.session.add(tenant)
        await self._flush(tenant)
        await self.session.refresh(tenant)
        return tenant

    async def update(self, tenant: Tenant) -> Tenant:
        """Update existing tenant"""
        self.session.add(tenant)
        await self._flush(tenant)
        await self.session.refresh(tenant)
        return tenant

    async def _flush(self, tenant: Tenant) -> None:
        # domain is the only unique column besides the primary key
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise DomainTakenError(tenant.domain) from exc
