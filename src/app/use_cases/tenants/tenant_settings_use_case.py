"""
Use Cases: Tenant Custom Settings

Tenant-custom settings are every settings key except ``features``,
``limits`` and ``suspended``. Each change is stored as a new version so it
can be inspected and rolled back; plan-derived entitlements are never part
of a version.
"""

from typing import Any, Dict, Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import AuditLog, Tenant, TenantSettingsVersion
from src.domain.settings import RESERVED_KEYS, TenantSettings

from .dtos import (
    SettingsHistoryResponse,
    SettingsVersionInfo,
    TenantSettingsResponse,
    UpdateTenantSettingsCommand,
)


async def write_settings_version(
    uow: UnitOfWork,
    tenant: Tenant,
    new_extensions: Dict[str, Any],
    actor_id: Optional[UUID],
    reason: Optional[str],
    action: str,
) -> int:
    now = utcnow()
    settings = TenantSettings.from_blob(tenant.settings)
    old_extensions = dict(settings.extensions)

    version = await uow.settings_versions.get_latest_version_number(tenant.id) + 1
    await uow.settings_versions.create(
        TenantSettingsVersion(
            tenant_id=tenant.id,
            version=version,
            old_value=old_extensions,
            new_value=dict(new_extensions),
            changed_by=actor_id,
            reason=reason,
        )
    )

    tenant.settings = settings.with_extensions(new_extensions).to_blob()
    tenant.updated_at = now
    await uow.tenants.update(tenant)

    await uow.audit_logs.create(
        AuditLog(
            user_id=actor_id,
            tenant_id=tenant.id,
            action=action,
            resource_type="tenant_settings",
            resource_id=str(tenant.id),
            request_data={
                "version": version,
                "old": old_extensions,
                "new": dict(new_extensions),
            },
        )
    )
    return version


class UpdateTenantSettingsUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        tenant_id: UUID,
        command: UpdateTenantSettingsCommand,
        actor_id: Optional[UUID] = None,
    ) -> Result[TenantSettingsResponse]:
        """
        Replace the tenant's custom settings.

        Errors:
            - VALIDATION_ERROR: a reserved key was supplied
            - TENANT_NOT_FOUND: Tenant does not exist
        """
        reserved = sorted(set(command.settings) & set(RESERVED_KEYS))
        if reserved:
            return Return.err(
                Error(
                    "VALIDATION_ERROR",
                    "Reserved settings keys cannot be changed",
                    fields={key: "managed by the plan" for key in reserved},
                )
            )

        async with self.uow:
            tenant = await self.uow.tenants.get_by_id(tenant_id, for_update=True)
            if not tenant:
                return Return.err(Error("TENANT_NOT_FOUND", "Tenant not found"))

            version = await write_settings_version(
                self.uow,
                tenant,
                command.settings,
                actor_id,
                command.reason,
                "tenant_settings_updated",
            )
            await self.uow.commit()

            return Return.ok(
                TenantSettingsResponse(
                    tenant_id=str(tenant.id),
                    version=version,
                    settings=dict(tenant.settings),
                )
            )


class RollbackTenantSettingsUseCase:
    """Restores the custom settings stored by ``version`` as a new version."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, tenant_id: UUID, version: int, actor_id: Optional[UUID] = None
    ) -> Result[TenantSettingsResponse]:
        async with self.uow:
            tenant = await self.uow.tenants.get_by_id(tenant_id, for_update=True)
            if not tenant:
                return Return.err(Error("TENANT_NOT_FOUND", "Tenant not found"))

            target = await self.uow.settings_versions.get_by_version(tenant_id, version)
            if not target:
                return Return.err(
                    Error(
                        "SETTINGS_VERSION_NOT_FOUND",
                        f"Settings version {version} does not exist for this tenant",
                    )
                )

            new_version = await write_settings_version(
                self.uow,
                tenant,
                target.new_value or {},
                actor_id,
                f"rollback to version {version}",
                "tenant_settings_rolled_back",
            )
            await self.uow.commit()

            return Return.ok(
                TenantSettingsResponse(
                    tenant_id=str(tenant.id),
                    version=new_version,
                    settings=dict(tenant.settings),
                )
            )


class GetSettingsHistoryUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, tenant_id: UUID) -> Result[SettingsHistoryResponse]:
        async with self.uow:
            tenant = await self.uow.tenants.get_by_id(tenant_id)
            if not tenant:
                return Return.err(Error("TENANT_NOT_FOUND", "Tenant not found"))

            versions = await self.uow.settings_versions.list_by_tenant(tenant_id)
            return Return.ok(
                SettingsHistoryResponse(
                    tenant_id=str(tenant_id),
                    versions=[SettingsVersionInfo.from_entity(v) for v in versions],
                )
            )
