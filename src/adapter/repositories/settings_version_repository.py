from typing import List, Optional
from uuid import UUID

from sqlalchemy import func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.settings_version_repository import ISettingsVersionRepository
from src.domain.entities import TenantSettingsVersion


class SettingsVersionRepository(ISettingsVersionRepository):
    """TenantSettingsVersion repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_latest_version_number(self, tenant_id: UUID) -> int:
        stmt = select(func.max(TenantSettingsVersion.version)).where(
            TenantSettingsVersion.tenant_id == tenant_id
        )
        result = await self.session.exec(stmt)
        return result.one() or 0

    async def get_by_version(
        self, tenant_id: UUID, version: int
    ) -> Optional[TenantSettingsVersion]:
        stmt = (
            select(TenantSettingsVersion)
            .where(TenantSettingsVersion.tenant_id == tenant_id)
            .where(TenantSettingsVersion.version == version)
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list_by_tenant(self, tenant_id: UUID) -> List[TenantSettingsVersion]:
        stmt = (
            select(TenantSettingsVersion)
            .where(TenantSettingsVersion.tenant_id == tenant_id)
            .order_by(TenantSettingsVersion.version.desc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, version: TenantSettingsVersion) -> TenantSettingsVersion:
        self.session.add(version)
        await self.session.flush()
        await self.session.refresh(version)
        return version
