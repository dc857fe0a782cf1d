"""
Use Cases

Organized into domain folders:
- plans/: Plan catalogue and entitlement cascade
- subscriptions/: Plan assignment, plan changes, proration, history
- tenants/: Tenant management, archive, custom settings
- admin/: Suspend/restore access, restore archived, bulk actions
- audit/: Audit logs

Import from subdirectories for better organization.
"""

from .admin import (
    BulkTenantActionUseCase,
    RestoreDeletedTenantUseCase,
    RestoreTenantUseCase,
    SuspendTenantUseCase,
)
from .audit import GetAuditLogsUseCase
from .plans import (
    CreatePlanUseCase,
    DeletePlanUseCase,
    GetPlanAnalyticsUseCase,
    GetPlanUseCase,
    ListPlanTenantsUseCase,
    ListPlansUseCase,
    ReorderPlansUseCase,
    UpdatePlanEntitlementsUseCase,
    UpdatePlanUseCase,
)
from .subscriptions import (
    AssignPlanUseCase,
    CalculateProrationUseCase,
    ChangeTenantPlanUseCase,
    GetPlanChangesUseCase,
    GetSubscriptionHistoryUseCase,
    UnassignPlanUseCase,
)
from .tenants import (
    CreateTenantUseCase,
    DeleteTenantUseCase,
    GetSettingsHistoryUseCase,
    GetTenantStatsUseCase,
    GetTenantUseCase,
    ListTenantsUseCase,
    RollbackTenantSettingsUseCase,
    UpdateTenantSettingsUseCase,
    UpdateTenantUseCase,
)

__all__ = [
    # Plans
    "CreatePlanUseCase",
    "UpdatePlanUseCase",
    "UpdatePlanEntitlementsUseCase",
    "DeletePlanUseCase",
    "ReorderPlansUseCase",
    "ListPlansUseCase",
    "GetPlanUseCase",
    "GetPlanAnalyticsUseCase",
    "ListPlanTenantsUseCase",
    # Subscriptions
    "AssignPlanUseCase",
    "ChangeTenantPlanUseCase",
    "UnassignPlanUseCase",
    "CalculateProrationUseCase",
    "GetSubscriptionHistoryUseCase",
    "GetPlanChangesUseCase",
    # Tenants
    "CreateTenantUseCase",
    "UpdateTenantUseCase",
    "GetTenantUseCase",
    "ListTenantsUseCase",
    "GetTenantStatsUseCase",
    "DeleteTenantUseCase",
    "UpdateTenantSettingsUseCase",
    "RollbackTenantSettingsUseCase",
    "GetSettingsHistoryUseCase",
    # Admin
    "SuspendTenantUseCase",
    "RestoreTenantUseCase",
    "RestoreDeletedTenantUseCase",
    "BulkTenantActionUseCase",
    # Audit
    "GetAuditLogsUseCase",
]
