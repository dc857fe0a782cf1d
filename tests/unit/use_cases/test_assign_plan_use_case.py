"""
Unit tests for AssignPlanUseCase / ChangeTenantPlanUseCase
"""

import pytest
from decimal import Decimal
from unittest.mock import AsyncMock
from uuid import uuid4

from src.app.repositories.subscription_repository import SubscriptionConflictError
from src.app.services.notification_service import INotificationService, NotificationError
from src.app.use_cases.subscriptions import (
    AssignPlanCommand,
    AssignPlanUseCase,
    ChangeTenantPlanUseCase,
)
from src.domain.entities import (
    BillingCycle,
    Plan,
    Subscription,
    SubscriptionStatus,
    Tenant,
    TenantStatus,
)


def make_plan(**overrides):
    data = {
        "id": uuid4(),
        "name": "Pro",
        "price": Decimal("60.00"),
        "billing_cycle": BillingCycle.monthly,
        "features": ["products", "reports"],
        "limits": {"max_users": 25},
        "is_active": True,
    }
    data.update(overrides)
    return Plan(**data)


@pytest.fixture
def tenant():
    return Tenant(
        id=uuid4(),
        name="Acme Corp",
        domain="acme",
        status=TenantStatus.active,
        settings={"theme": "dark"},
    )


@pytest.fixture
def uow(mock_uow, tenant):
    mock_uow.tenants.get_by_id = AsyncMock(return_value=tenant)
    mock_uow.tenants.update = AsyncMock(return_value=tenant)
    mock_uow.subscriptions.get_active_by_tenant = AsyncMock(return_value=None)
    mock_uow.subscriptions.create = AsyncMock(side_effect=lambda subscription: subscription)
    mock_uow.subscriptions.update = AsyncMock()
    mock_uow.subscription_changes.create = AsyncMock(side_effect=lambda change: change)
    mock_uow.audit_logs.create = AsyncMock()
    return mock_uow


@pytest.mark.asyncio
async def test_assign_plan_to_tenant_without_plan(uow, tenant):
    """First assignment creates a subscription and mirrors entitlements"""
    # Arrange
    plan = make_plan()
    uow.plans.get_by_id = AsyncMock(return_value=plan)

    # Act
    use_case = AssignPlanUseCase(uow)
    result = await use_case.execute(tenant.id, AssignPlanCommand(plan_id=str(plan.id)))

    # Assert
    assert result.is_ok()
    response = result.value
    assert response.old_plan_id is None
    assert response.new_plan_id == str(plan.id)
    assert response.subscription.amount == 60.0
    assert response.subscription.status == "active"
    assert response.notification_sent is True

    assert tenant.plan_id == plan.id
    assert tenant.subscription_status == SubscriptionStatus.active
    assert tenant.settings == {
        "theme": "dark",
        "features": ["products", "reports"],
        "limits": {"max_users": 25},
    }

    uow.plans.get_by_id.assert_called_once_with(plan.id, for_update=True)
    uow.tenants.get_by_id.assert_called_once_with(tenant.id, for_update=True)
    uow.subscriptions.update.assert_not_called()
    uow.subscription_changes.create.assert_not_called()
    assert uow.audit_logs.create.call_args[0][0].action == "plan_assigned"
    uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_change_plan_cancels_current_and_records_change(uow, tenant):
    """Changing plan cancels the active subscription and keeps history"""
    old_plan = make_plan(name="Starter", price=Decimal("30.00"))
    new_plan = make_plan()
    tenant.plan_id = old_plan.id
    current = Subscription(
        tenant_id=tenant.id,
        plan_id=old_plan.id,
        status=SubscriptionStatus.active,
        amount=Decimal("30.00"),
    )
    uow.plans.get_by_id = AsyncMock(return_value=new_plan)
    uow.subscriptions.get_active_by_tenant = AsyncMock(return_value=current)

    use_case = ChangeTenantPlanUseCase(uow)
    result = await use_case.execute(
        tenant.id, AssignPlanCommand(plan_id=str(new_plan.id), reason="upgrade")
    )

    assert result.is_ok()
    assert result.value.old_plan_id == str(old_plan.id)
    assert current.status == SubscriptionStatus.cancelled
    assert current.ends_at is not None
    uow.subscriptions.update.assert_called_once_with(current)

    change = uow.subscription_changes.create.call_args[0][0]
    assert change.old_plan_id == old_plan.id
    assert change.new_plan_id == new_plan.id
    assert change.reason == "upgrade"
    assert uow.audit_logs.create.call_args[0][0].action == "plan_changed"


@pytest.mark.asyncio
async def test_assign_over_existing_subscription_records_change(uow, tenant):
    old_plan_id = uuid4()
    plan = make_plan()
    uow.plans.get_by_id = AsyncMock(return_value=plan)
    uow.subscriptions.get_active_by_tenant = AsyncMock(
        return_value=Subscription(tenant_id=tenant.id, plan_id=old_plan_id)
    )

    result = await AssignPlanUseCase(uow).execute(tenant.id, AssignPlanCommand(plan_id=str(plan.id)))

    assert result.is_ok()
    uow.subscription_changes.create.assert_called_once()


@pytest.mark.asyncio
async def test_assign_inactive_plan_fails(uow, tenant):
    plan = make_plan(is_active=False)
    uow.plans.get_by_id = AsyncMock(return_value=plan)

    result = await AssignPlanUseCase(uow).execute(tenant.id, AssignPlanCommand(plan_id=str(plan.id)))

    assert result.is_err()
    assert result.error.code == "PLAN_INACTIVE"
    assert "plan_id" in result.error.fields
    uow.subscriptions.create.assert_not_called()
    uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_assign_to_archived_tenant_fails(uow, tenant):
    tenant.status = TenantStatus.archived
    uow.plans.get_by_id = AsyncMock(return_value=make_plan())

    result = await AssignPlanUseCase(uow).execute(tenant.id, AssignPlanCommand(plan_id=str(uuid4())))

    assert result.error.code == "INVALID_TRANSITION"
    uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_assign_unknown_plan(uow, tenant):
    uow.plans.get_by_id = AsyncMock(return_value=None)

    result = await AssignPlanUseCase(uow).execute(tenant.id, AssignPlanCommand(plan_id=str(uuid4())))

    assert result.error.code == "PLAN_NOT_FOUND"


@pytest.mark.asyncio
async def test_assign_malformed_plan_id(uow, tenant):
    result = await AssignPlanUseCase(uow).execute(tenant.id, AssignPlanCommand(plan_id="not-a-uuid"))

    assert result.error.code == "VALIDATION_ERROR"
    assert "plan_id" in result.error.fields
    uow.tenants.get_by_id.assert_not_called()


@pytest.mark.asyncio
async def test_concurrent_assignment_is_a_conflict(uow, tenant):
    """Losing the race on the active-subscription index writes nothing"""
    plan = make_plan()
    uow.plans.get_by_id = AsyncMock(return_value=plan)
    uow.subscriptions.create = AsyncMock(side_effect=SubscriptionConflictError())

    result = await AssignPlanUseCase(uow).execute(tenant.id, AssignPlanCommand(plan_id=str(plan.id)))

    assert result.is_err()
    assert result.error.code == "SUBSCRIPTION_CONFLICT"
    uow.audit_logs.create.assert_not_called()
    uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_notification_failure_keeps_assignment(uow, tenant):
    """A failing notifier is audited and reported, the change stays committed"""
    plan = make_plan()
    uow.plans.get_by_id = AsyncMock(return_value=plan)
    notifier = AsyncMock(spec=INotificationService)
    notifier.send.side_effect = NotificationError("webhook down")

    result = await AssignPlanUseCase(uow, notifier).execute(
        tenant.id, AssignPlanCommand(plan_id=str(plan.id))
    )

    assert result.is_ok()
    assert result.value.notification_sent is False
    assert tenant.plan_id == plan.id

    actions = [call[0][0].action for call in uow.audit_logs.create.call_args_list]
    assert actions == ["plan_assigned", "notification_failed"]
    assert uow.commit.call_count == 2
    notifier.send.assert_called_once()
    assert notifier.send.call_args[0][0] == "plan_assigned"
