"""
Tenant Management Use Cases

All tenant-related business logic.
"""

from .create_tenant_use_case import CreateTenantUseCase
from .delete_tenant_use_case import DeleteTenantUseCase
from .dtos import (
    BulkTenantActionCommand,
    BulkTenantActionResponse,
    CreateTenantCommand,
    DeleteTenantResponse,
    RestoreDeletedTenantResponse,
    SettingsHistoryResponse,
    TenantInfo,
    TenantListResponse,
    TenantSettingsResponse,
    TenantStatsResponse,
    TenantStatusResponse,
    TenantUpdateResponse,
    UpdateTenantCommand,
    UpdateTenantSettingsCommand,
)
from .get_tenant_use_case import GetTenantStatsUseCase, GetTenantUseCase, ListTenantsUseCase
from .tenant_settings_use_case import (
    GetSettingsHistoryUseCase,
    RollbackTenantSettingsUseCase,
    UpdateTenantSettingsUseCase,
)
from .update_tenant_use_case import UpdateTenantUseCase

__all__ = [
    "CreateTenantUseCase",
    "UpdateTenantUseCase",
    "GetTenantUseCase",
    "ListTenantsUseCase",
    "GetTenantStatsUseCase",
    "DeleteTenantUseCase",
    "UpdateTenantSettingsUseCase",
    "RollbackTenantSettingsUseCase",
    "GetSettingsHistoryUseCase",
    "CreateTenantCommand",
    "UpdateTenantCommand",
    "UpdateTenantSettingsCommand",
    "BulkTenantActionCommand",
    "BulkTenantActionResponse",
    "TenantInfo",
    "TenantUpdateResponse",
    "TenantListResponse",
    "TenantStatsResponse",
    "TenantStatusResponse",
    "DeleteTenantResponse",
    "RestoreDeletedTenantResponse",
    "TenantSettingsResponse",
    "SettingsHistoryResponse",
]
