"""
Tenant API Routes

Tenant management for super admins: creation, update, listing, suspend/restore
access, archive (soft delete) and restore, bulk actions and versioned
custom settings.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel

from src.api.error import raise_for_error
from src.api.utils.admin_auth import actor_id, require_super_admin
from src.app.services.notification_service import INotificationService
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.admin import (
    BulkTenantActionUseCase,
    RestoreDeletedTenantUseCase,
    RestoreTenantUseCase,
    SuspendTenantUseCase,
)
from src.app.use_cases.tenants import (
    BulkTenantActionCommand,
    BulkTenantActionResponse,
    CreateTenantCommand,
    CreateTenantUseCase,
    DeleteTenantResponse,
    DeleteTenantUseCase,
    GetSettingsHistoryUseCase,
    GetTenantStatsUseCase,
    GetTenantUseCase,
    ListTenantsUseCase,
    RestoreDeletedTenantResponse,
    RollbackTenantSettingsUseCase,
    SettingsHistoryResponse,
    TenantInfo,
    TenantListResponse,
    TenantSettingsResponse,
    TenantStatsResponse,
    TenantStatusResponse,
    TenantUpdateResponse,
    UpdateTenantCommand,
    UpdateTenantSettingsCommand,
    UpdateTenantSettingsUseCase,
    UpdateTenantUseCase,
)
from src.depends import get_notification_service, get_unit_of_work

router = APIRouter(prefix="/admin/tenants", tags=["Tenants"])


class RollbackSettingsRequest(BaseModel):
    version: int


@router.get("", status_code=status.HTTP_200_OK, response_model=TenantListResponse)
async def list_tenants(
    status_filter: Optional[str] = Query(None, alias="status"),
    plan_id: Optional[UUID] = Query(None),
    search: Optional[str] = Query(None, max_length=255),
    include_archived: bool = Query(False),
    current_user: dict = Depends(require_super_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """List tenants newest first; archived tenants only on request"""
    result = await ListTenantsUseCase(uow).execute(
        status=status_filter,
        plan_id=plan_id,
        search=search,
        include_archived=include_archived,
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("/stats", status_code=status.HTTP_200_OK, response_model=TenantStatsResponse)
async def get_tenant_stats(
    current_user: dict = Depends(require_super_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await GetTenantStatsUseCase(uow).execute()
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post("", status_code=status.HTTP_201_CREATED, response_model=TenantInfo)
async def create_tenant(
    request: CreateTenantCommand,
    current_user: dict = Depends(require_super_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create Tenant

    Raises:
        - 403 Forbidden: INSUFFICIENT_ROLE
        - 422 Unprocessable Entity: VALIDATION_ERROR (field map), DOMAIN_TAKEN
    """
    result = await CreateTenantUseCase(uow).execute(request, actor_id(current_user))
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post("/bulk", status_code=status.HTTP_200_OK, response_model=BulkTenantActionResponse)
async def bulk_tenant_action(
    request: BulkTenantActionCommand,
    current_user: dict = Depends(require_super_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Bulk Tenant Action

    action is one of suspend, restore, delete, restore_deleted. Each
    tenant is processed in its own transaction; the response lists the
    ids that succeeded and the failures with their error code.
    """
    result = await BulkTenantActionUseCase(uow).execute(request, actor_id(current_user))
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("/{tenant_id}", status_code=status.HTTP_200_OK, response_model=TenantInfo)
async def get_tenant(
    tenant_id: UUID,
    current_user: dict = Depends(require_super_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await GetTenantUseCase(uow).execute(tenant_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.put("/{tenant_id}", status_code=status.HTTP_200_OK, response_model=TenantUpdateResponse)
async def update_tenant(
    tenant_id: UUID,
    request: UpdateTenantCommand,
    current_user: dict = Depends(require_super_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
    notifier: INotificationService = Depends(get_notification_service),
):
    """
    Update Tenant

    Partial update of name, domain, status (active or suspended), plan_id
    and custom settings, applied in one transaction.

    Raises:
        - 404 Not Found: TENANT_NOT_FOUND, PLAN_NOT_FOUND
        - 422 Unprocessable Entity: VALIDATION_ERROR, DOMAIN_TAKEN,
          INVALID_TRANSITION, PLAN_INACTIVE, SUBSCRIPTION_CONFLICT
    """
    result = await UpdateTenantUseCase(uow, notifier).execute(
        tenant_id, request, actor_id(current_user)
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.delete(
    "/{tenant_id}", status_code=status.HTTP_200_OK, response_model=DeleteTenantResponse
)
async def delete_tenant(
    tenant_id: UUID,
    current_user: dict = Depends(require_super_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Delete (Archive) Tenant

    Soft delete: the tenant is archived, its subscription cancelled and
    its users deactivated. Business data is kept.

    Raises:
        - 403 Forbidden: INSUFFICIENT_ROLE
        - 404 Not Found: TENANT_NOT_FOUND
        - 422 Unprocessable Entity: TENANT_ALREADY_ARCHIVED
    """
    result = await DeleteTenantUseCase(uow).execute(tenant_id, actor_id(current_user))
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post(
    "/{tenant_id}/restore-deleted",
    status_code=status.HTTP_200_OK,
    response_model=RestoreDeletedTenantResponse,
)
async def restore_deleted_tenant(
    tenant_id: UUID,
    current_user: dict = Depends(require_super_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Restore Archived Tenant

    Raises:
        - 403 Forbidden: INSUFFICIENT_ROLE
        - 404 Not Found: TENANT_NOT_FOUND
        - 422 Unprocessable Entity: TENANT_NOT_ARCHIVED
    """
    result = await RestoreDeletedTenantUseCase(uow).execute(tenant_id, actor_id(current_user))
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post(
    "/{tenant_id}/suspend", status_code=status.HTTP_200_OK, response_model=TenantStatusResponse
)
async def suspend_tenant(
    tenant_id: UUID,
    current_user: dict = Depends(require_super_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Suspend Tenant Access

    Raises:
        - 404 Not Found: TENANT_NOT_FOUND
        - 422 Unprocessable Entity: INVALID_TRANSITION (archived or cancelled tenant)
    """
    result = await SuspendTenantUseCase(uow).execute(tenant_id, actor_id(current_user))
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post(
    "/{tenant_id}/restore", status_code=status.HTTP_200_OK, response_model=TenantStatusResponse
)
async def restore_tenant(
    tenant_id: UUID,
    current_user: dict = Depends(require_super_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Restore Tenant Access, re-syncing features/limits from the plan"""
    result = await RestoreTenantUseCase(uow).execute(tenant_id, actor_id(current_user))
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.put(
    "/{tenant_id}/settings",
    status_code=status.HTTP_200_OK,
    response_model=TenantSettingsResponse,
)
async def update_tenant_settings(
    tenant_id: UUID,
    request: UpdateTenantSettingsCommand,
    current_user: dict = Depends(require_super_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await UpdateTenantSettingsUseCase(uow).execute(
        tenant_id, request, actor_id(current_user)
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get(
    "/{tenant_id}/settings/history",
    status_code=status.HTTP_200_OK,
    response_model=SettingsHistoryResponse,
)
async def get_settings_history(
    tenant_id: UUID,
    current_user: dict = Depends(require_super_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await GetSettingsHistoryUseCase(uow).execute(tenant_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post(
    "/{tenant_id}/settings/rollback",
    status_code=status.HTTP_200_OK,
    response_model=TenantSettingsResponse,
)
async def rollback_tenant_settings(
    tenant_id: UUID,
    request: RollbackSettingsRequest,
    current_user: dict = Depends(require_super_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Roll custom settings back to a stored version

    Raises:
        - 404 Not Found: TENANT_NOT_FOUND
        - 422 Unprocessable Entity: SETTINGS_VERSION_NOT_FOUND
    """
    result = await RollbackTenantSettingsUseCase(uow).execute(
        tenant_id, request.version, actor_id(current_user)
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value
