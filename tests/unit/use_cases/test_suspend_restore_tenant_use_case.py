"""
Unit tests for Suspend/Restore Tenant Use Cases
Tests business logic in isolation with mocked dependencies.
"""

import pytest
from unittest.mock import AsyncMock
from uuid import uuid4

from src.app.use_cases.admin import (
    SuspendTenantUseCase,
    RestoreTenantUseCase,
)
from src.domain.entities import Plan, Tenant
from src.domain.entities.enums import TenantStatus


def make_tenant(**overrides):
    data = {
        "id": uuid4(),
        "name": "Test Corp",
        "domain": "test-corp",
        "status": TenantStatus.active,
        "settings": {"features": ["products"], "limits": {"max_users": 5}, "theme": "dark"},
    }
    data.update(overrides)
    return Tenant(**data)


@pytest.mark.asyncio
async def test_suspend_tenant_success(mock_uow):
    """Test successful tenant suspension"""
    # Arrange
    tenant = make_tenant()
    actor_id = uuid4()

    mock_uow.tenants.get_by_id = AsyncMock(return_value=tenant)
    mock_uow.tenants.update = AsyncMock(return_value=tenant)
    mock_uow.audit_logs.create = AsyncMock()

    # Act
    use_case = SuspendTenantUseCase(mock_uow)
    result = await use_case.execute(tenant.id, actor_id)

    # Assert
    assert result.is_ok()
    assert result.value.status == "suspended"

    # Verify status and flag set, entitlements untouched
    assert tenant.status == TenantStatus.suspended
    assert tenant.settings["suspended"] is True
    assert tenant.settings["features"] == ["products"]
    assert tenant.settings["theme"] == "dark"
    mock_uow.tenants.get_by_id.assert_called_once_with(tenant.id, for_update=True)
    mock_uow.tenants.update.assert_called_once_with(tenant)

    # Verify audit log created
    mock_uow.audit_logs.create.assert_called_once()
    audit_call = mock_uow.audit_logs.create.call_args[0][0]
    assert audit_call.action == "tenant_suspended"
    assert audit_call.user_id == actor_id

    # Verify transaction committed
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_suspend_tenant_not_found(mock_uow):
    """Test suspending non-existent tenant"""
    mock_uow.tenants.get_by_id = AsyncMock(return_value=None)

    use_case = SuspendTenantUseCase(mock_uow)
    result = await use_case.execute(uuid4())

    assert result.is_err()
    assert result.error.code == "TENANT_NOT_FOUND"
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_suspend_already_suspended_is_noop(mock_uow):
    """Suspending twice succeeds without writing anything"""
    tenant = make_tenant(status=TenantStatus.suspended)
    mock_uow.tenants.get_by_id = AsyncMock(return_value=tenant)
    mock_uow.tenants.update = AsyncMock()
    mock_uow.audit_logs.create = AsyncMock()

    use_case = SuspendTenantUseCase(mock_uow)
    result = await use_case.execute(tenant.id)

    assert result.is_ok()
    assert result.value.status == "suspended"
    mock_uow.tenants.update.assert_not_called()
    mock_uow.audit_logs.create.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_suspend_archived_tenant_fails(mock_uow):
    """Archived tenants cannot be suspended"""
    tenant = make_tenant(status=TenantStatus.archived)
    mock_uow.tenants.get_by_id = AsyncMock(return_value=tenant)

    use_case = SuspendTenantUseCase(mock_uow)
    result = await use_case.execute(tenant.id)

    assert result.is_err()
    assert result.error.code == "INVALID_TRANSITION"
    assert tenant.status == TenantStatus.archived
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_restore_tenant_success(mock_uow):
    """Restore clears the flag and re-syncs entitlements from the plan"""
    # Arrange
    plan = Plan(
        id=uuid4(),
        name="Pro",
        features=["products", "reports"],
        limits={"max_users": 25},
    )
    tenant = make_tenant(
        status=TenantStatus.suspended,
        plan_id=plan.id,
        settings={"features": ["products"], "limits": {}, "suspended": True, "theme": "dark"},
    )

    mock_uow.tenants.get_by_id = AsyncMock(return_value=tenant)
    mock_uow.tenants.update = AsyncMock(return_value=tenant)
    mock_uow.plans.get_by_id = AsyncMock(return_value=plan)
    mock_uow.audit_logs.create = AsyncMock()

    # Act
    use_case = RestoreTenantUseCase(mock_uow)
    result = await use_case.execute(tenant.id)

    # Assert
    assert result.is_ok()
    assert result.value.status == "active"
    assert tenant.status == TenantStatus.active
    assert tenant.settings == {
        "theme": "dark",
        "features": ["products", "reports"],
        "limits": {"max_users": 25},
    }

    audit_call = mock_uow.audit_logs.create.call_args[0][0]
    assert audit_call.action == "tenant_access_restored"
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_restore_active_tenant_skips_audit(mock_uow):
    """Restoring an active tenant only re-syncs entitlements"""
    tenant = make_tenant()
    mock_uow.tenants.get_by_id = AsyncMock(return_value=tenant)
    mock_uow.tenants.update = AsyncMock(return_value=tenant)
    mock_uow.audit_logs.create = AsyncMock()

    use_case = RestoreTenantUseCase(mock_uow)
    result = await use_case.execute(tenant.id)

    assert result.is_ok()
    # No plan assigned: entitlements are cleared
    assert tenant.settings == {"theme": "dark", "features": [], "limits": {}}
    mock_uow.audit_logs.create.assert_not_called()
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_restore_tenant_not_found(mock_uow):
    """Test restoring non-existent tenant"""
    mock_uow.tenants.get_by_id = AsyncMock(return_value=None)

    use_case = RestoreTenantUseCase(mock_uow)
    result = await use_case.execute(uuid4())

    assert result.is_err()
    assert result.error.code == "TENANT_NOT_FOUND"
    mock_uow.commit.assert_not_called()
