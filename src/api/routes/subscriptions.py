"""
Subscription API Routes

Plan assignment and plan changes for a tenant, proration quotes and
subscription history.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from src.api.error import raise_for_error
from src.api.utils.admin_auth import actor_id, require_super_admin
from src.app.services.notification_service import INotificationService
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.subscriptions import (
    AssignPlanCommand,
    AssignPlanUseCase,
    CalculateProrationUseCase,
    ChangeTenantPlanUseCase,
    GetPlanChangesUseCase,
    GetSubscriptionHistoryUseCase,
    PlanAssignmentResponse,
    PlanChangesResponse,
    ProrationResponse,
    SubscriptionHistoryResponse,
    UnassignPlanResponse,
    UnassignPlanUseCase,
)
from src.depends import get_notification_service, get_unit_of_work

router = APIRouter(prefix="/admin/tenants/{tenant_id}", tags=["Subscriptions"])


@router.post("/plan", status_code=status.HTTP_200_OK, response_model=PlanAssignmentResponse)
async def assign_plan(
    tenant_id: UUID,
    request: AssignPlanCommand,
    current_user: dict = Depends(require_super_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
    notifier: INotificationService = Depends(get_notification_service),
):
    """
    Assign Plan

    Starts an active subscription at the plan's price and mirrors the
    plan's features/limits into the tenant settings. A tenant that is
    already subscribed is switched as in a plan change.

    Raises:
        - 404 Not Found: TENANT_NOT_FOUND, PLAN_NOT_FOUND
        - 422 Unprocessable Entity: PLAN_INACTIVE, INVALID_TRANSITION,
          SUBSCRIPTION_CONFLICT
    """
    result = await AssignPlanUseCase(uow, notifier).execute(
        tenant_id, request, actor_id(current_user)
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.put("/plan", status_code=status.HTTP_200_OK, response_model=PlanAssignmentResponse)
async def change_plan(
    tenant_id: UUID,
    request: AssignPlanCommand,
    current_user: dict = Depends(require_super_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
    notifier: INotificationService = Depends(get_notification_service),
):
    """
    Change Tenant Plan (upgrade / downgrade)

    Cancels the current subscription, starts the new one and records the
    change, all in one transaction.
    """
    result = await ChangeTenantPlanUseCase(uow, notifier).execute(
        tenant_id, request, actor_id(current_user)
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.delete("/plan", status_code=status.HTTP_200_OK, response_model=UnassignPlanResponse)
async def unassign_plan(
    tenant_id: UUID,
    current_user: dict = Depends(require_super_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await UnassignPlanUseCase(uow).execute(tenant_id, actor_id(current_user))
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("/proration", status_code=status.HTTP_200_OK, response_model=ProrationResponse)
async def calculate_proration(
    tenant_id: UUID,
    plan_id: UUID = Query(..., description="Candidate plan"),
    current_user: dict = Depends(require_super_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Quote a switch to plan_id; nothing is written"""
    result = await CalculateProrationUseCase(uow).execute(tenant_id, plan_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get(
    "/subscriptions", status_code=status.HTTP_200_OK, response_model=SubscriptionHistoryResponse
)
async def get_subscription_history(
    tenant_id: UUID,
    current_user: dict = Depends(require_super_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await GetSubscriptionHistoryUseCase(uow).execute(tenant_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("/plan-changes", status_code=status.HTTP_200_OK, response_model=PlanChangesResponse)
async def get_plan_changes(
    tenant_id: UUID,
    current_user: dict = Depends(require_super_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await GetPlanChangesUseCase(uow).execute(tenant_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value
