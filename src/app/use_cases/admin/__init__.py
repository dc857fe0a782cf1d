"""Admin use cases for tenant access and lifecycle operations."""

from .bulk_tenant_action_use_case import BulkTenantActionUseCase
from .restore_deleted_tenant_use_case import RestoreDeletedTenantUseCase
from .restore_tenant_use_case import RestoreTenantUseCase
from .suspend_tenant_use_case import SuspendTenantUseCase

__all__ = [
    "SuspendTenantUseCase",
    "RestoreTenantUseCase",
    "RestoreDeletedTenantUseCase",
    "BulkTenantActionUseCase",
]
