"""
Plan API Routes

Plan catalogue management for super admins. Feature and limit edits
cascade to every tenant on the plan.
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from src.api.error import raise_for_error
from src.api.utils.admin_auth import actor_id, require_super_admin
from src.app.services.notification_service import INotificationService
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.plans import (
    CreatePlanCommand,
    CreatePlanUseCase,
    DeletePlanResponse,
    DeletePlanUseCase,
    GetPlanAnalyticsUseCase,
    GetPlanUseCase,
    ListPlanTenantsUseCase,
    ListPlansUseCase,
    PlanAnalyticsResponse,
    PlanInfo,
    PlanListResponse,
    PlanPosition,
    PlanUpdateResponse,
    ReorderPlansResponse,
    ReorderPlansUseCase,
    UpdatePlanCommand,
    UpdatePlanEntitlementsCommand,
    UpdatePlanEntitlementsUseCase,
    UpdatePlanUseCase,
)
from src.app.use_cases.tenants import TenantListResponse
from src.depends import get_notification_service, get_unit_of_work

router = APIRouter(prefix="/admin/plans", tags=["Plans"])


@router.get("", status_code=status.HTTP_200_OK, response_model=PlanListResponse)
async def list_plans(
    is_active: Optional[bool] = Query(None),
    search: Optional[str] = Query(None, max_length=255),
    current_user: dict = Depends(require_super_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """List plans ordered by sort_order"""
    result = await ListPlansUseCase(uow).execute(is_active=is_active, search=search)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post("", status_code=status.HTTP_201_CREATED, response_model=PlanInfo)
async def create_plan(
    request: CreatePlanCommand,
    current_user: dict = Depends(require_super_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create Plan

    Raises:
        - 401 Unauthorized: missing or invalid token
        - 403 Forbidden: INSUFFICIENT_ROLE
        - 422 Unprocessable Entity: VALIDATION_ERROR with field map
    """
    result = await CreatePlanUseCase(uow).execute(request, actor_id(current_user))
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post("/reorder", status_code=status.HTTP_200_OK, response_model=ReorderPlansResponse)
async def reorder_plans(
    request: List[PlanPosition],
    current_user: dict = Depends(require_super_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ReorderPlansUseCase(uow).execute(request, actor_id(current_user))
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("/{plan_id}", status_code=status.HTTP_200_OK, response_model=PlanInfo)
async def get_plan(
    plan_id: UUID,
    current_user: dict = Depends(require_super_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await GetPlanUseCase(uow).execute(plan_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.put("/{plan_id}", status_code=status.HTTP_200_OK, response_model=PlanUpdateResponse)
async def update_plan(
    plan_id: UUID,
    request: UpdatePlanCommand,
    current_user: dict = Depends(require_super_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
    notifier: INotificationService = Depends(get_notification_service),
):
    """
    Update Plan

    Feature/limit changes are pushed to every tenant on the plan in the
    same transaction. tenants_updated reports how many were touched.

    Raises:
        - 404 Not Found: PLAN_NOT_FOUND
        - 422 Unprocessable Entity: VALIDATION_ERROR
    """
    result = await UpdatePlanUseCase(uow, notifier).execute(
        plan_id, request, actor_id(current_user)
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.put(
    "/{plan_id}/features", status_code=status.HTTP_200_OK, response_model=PlanUpdateResponse
)
async def update_plan_features(
    plan_id: UUID,
    request: UpdatePlanEntitlementsCommand,
    current_user: dict = Depends(require_super_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
    notifier: INotificationService = Depends(get_notification_service),
):
    """Replace the plan's features (and optionally limits) and cascade to tenants"""
    result = await UpdatePlanEntitlementsUseCase(uow, notifier).execute(
        plan_id, request, actor_id(current_user)
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.delete("/{plan_id}", status_code=status.HTTP_200_OK, response_model=DeletePlanResponse)
async def delete_plan(
    plan_id: UUID,
    current_user: dict = Depends(require_super_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Delete Plan

    Raises:
        - 404 Not Found: PLAN_NOT_FOUND
        - 422 Unprocessable Entity: PLAN_IN_USE while tenants are on the plan
    """
    result = await DeletePlanUseCase(uow).execute(plan_id, actor_id(current_user))
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get(
    "/{plan_id}/analytics", status_code=status.HTTP_200_OK, response_model=PlanAnalyticsResponse
)
async def get_plan_analytics(
    plan_id: UUID,
    current_user: dict = Depends(require_super_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await GetPlanAnalyticsUseCase(uow).execute(plan_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get(
    "/{plan_id}/tenants", status_code=status.HTTP_200_OK, response_model=TenantListResponse
)
async def list_plan_tenants(
    plan_id: UUID,
    current_user: dict = Depends(require_super_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ListPlanTenantsUseCase(uow).execute(plan_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value
