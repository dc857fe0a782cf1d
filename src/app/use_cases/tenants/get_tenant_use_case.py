"""Use Cases: Get Tenant / List Tenants / Tenant Stats"""

from datetime import timedelta
from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow

from .dtos import TenantInfo, TenantListResponse, TenantStatsResponse


class GetTenantUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, tenant_id: UUID) -> Result[TenantInfo]:
        async with self.uow:
            tenant = await self.uow.tenants.get_by_id(tenant_id)
            if not tenant:
                return Return.err(Error("TENANT_NOT_FOUND", "Tenant not found"))
            return Return.ok(TenantInfo.from_entity(tenant))


class ListTenantsUseCase:
    """Archived tenants are hidden unless include_archived is set."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        status: Optional[str] = None,
        plan_id: Optional[UUID] = None,
        search: Optional[str] = None,
        include_archived: bool = False,
    ) -> Result[TenantListResponse]:
        async with self.uow:
            tenants = await self.uow.tenants.list(
                status=status,
                plan_id=plan_id,
                search=search,
                include_archived=include_archived or status == "archived",
            )
            return Return.ok(
                TenantListResponse(tenants=[TenantInfo.from_entity(t) for t in tenants])
            )


class GetTenantStatsUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self) -> Result[TenantStatsResponse]:
        async with self.uow:
            now = utcnow()
            counts = await self.uow.tenants.count_by_status()
            return Return.ok(
                TenantStatsResponse(
                    total=sum(counts.values()),
                    active=counts.get("active", 0),
                    suspended=counts.get("suspended", 0),
                    cancelled=counts.get("cancelled", 0),
                    archived=counts.get("archived", 0),
                    trialing=await self.uow.tenants.count_trialing(now),
                    created_last_30_days=await self.uow.tenants.count_created_since(
                        now - timedelta(days=30)
                    ),
                )
            )
