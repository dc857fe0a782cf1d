"""
Tenant Use Case DTOs (Data Transfer Objects)

All Command and Response classes for tenant domain.
Provides type safety and clear contracts between layers.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, EmailStr

from src.domain.entities import Tenant, TenantSettingsVersion


# ============================================================================
# Command DTOs
# ============================================================================


class TenantAdminInfo(BaseModel):
    """Optional first tenant admin created with the tenant"""

    name: str
    email: EmailStr


class CreateTenantCommand(BaseModel):
    name: str
    domain: str
    plan_id: Optional[str] = None
    trial_days: Optional[int] = None
    settings: Dict[str, Any] = {}
    admin: Optional[TenantAdminInfo] = None


class UpdateTenantCommand(BaseModel):
    """Partial update; fields left out keep their current value"""

    name: Optional[str] = None
    domain: Optional[str] = None
    status: Optional[str] = None
    plan_id: Optional[str] = None
    settings: Optional[Dict[str, Any]] = None
    reason: Optional[str] = None


class UpdateTenantSettingsCommand(BaseModel):
    """Replacement for the tenant's custom settings"""

    settings: Dict[str, Any]
    reason: Optional[str] = None


class BulkTenantActionCommand(BaseModel):
    action: str
    tenant_ids: List[str]


# ============================================================================
# Response DTOs
# ============================================================================


class TenantInfo(BaseModel):
    """Tenant as returned to callers"""

    id: str
    name: str
    domain: str
    status: str
    plan_id: Optional[str]
    subscription_status: Optional[str]
    settings: Dict[str, Any]
    trial_ends_at: Optional[datetime]
    deleted_at: Optional[datetime]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, tenant: Tenant) -> "TenantInfo":
        return cls(
            id=str(tenant.id),
            name=tenant.name,
            domain=tenant.domain,
            status=tenant.status.value,
            plan_id=str(tenant.plan_id) if tenant.plan_id else None,
            subscription_status=(
                tenant.subscription_status.value if tenant.subscription_status else None
            ),
            settings=dict(tenant.settings or {}),
            trial_ends_at=tenant.trial_ends_at,
            deleted_at=tenant.deleted_at,
            created_at=tenant.created_at,
            updated_at=tenant.updated_at,
        )


class TenantUpdateResponse(BaseModel):
    tenant: TenantInfo
    changed: List[str]
    notification_sent: bool


class TenantListResponse(BaseModel):
    tenants: List[TenantInfo]


class TenantStatsResponse(BaseModel):
    total: int
    active: int
    suspended: int
    cancelled: int
    archived: int
    trialing: int
    created_last_30_days: int


class TenantStatusResponse(BaseModel):
    """Response for suspend / restore access"""

    tenant_id: str
    status: str


class DeleteTenantResponse(BaseModel):
    """Archive result; dependent rows are kept, only counted"""

    status: str
    tenant_id: str
    deleted_at: datetime
    users_deactivated: int
    subscription_cancelled: bool
    retained: Dict[str, int]


class RestoreDeletedTenantResponse(BaseModel):
    status: str
    tenant_id: str
    users_reactivated: int


class BulkFailure(BaseModel):
    tenant_id: str
    code: str
    message: str


class BulkTenantActionResponse(BaseModel):
    action: str
    succeeded: List[str]
    failed: List[BulkFailure]


class SettingsVersionInfo(BaseModel):
    version: int
    old_value: Dict[str, Any]
    new_value: Dict[str, Any]
    changed_by: Optional[str]
    reason: Optional[str]
    created_at: datetime

    @classmethod
    def from_entity(cls, version: TenantSettingsVersion) -> "SettingsVersionInfo":
        return cls(
            version=version.version,
            old_value=dict(version.old_value or {}),
            new_value=dict(version.new_value or {}),
            changed_by=str(version.changed_by) if version.changed_by else None,
            reason=version.reason,
            created_at=version.created_at,
        )


class TenantSettingsResponse(BaseModel):
    tenant_id: str
    version: int
    settings: Dict[str, Any]


class SettingsHistoryResponse(BaseModel):
    tenant_id: str
    versions: List[SettingsVersionInfo]
