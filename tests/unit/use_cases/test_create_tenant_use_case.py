"""
Unit tests for CreateTenantUseCase
"""

import pytest
from unittest.mock import AsyncMock

from src.app.repositories.tenant_repository import DomainTakenError
from src.app.use_cases.tenants import CreateTenantCommand, CreateTenantUseCase


@pytest.fixture
def uow(mock_uow):
    mock_uow.tenants.get_by_domain = AsyncMock(return_value=None)
    mock_uow.tenants.create = AsyncMock(side_effect=lambda tenant: tenant)
    mock_uow.users.get_by_email = AsyncMock(return_value=None)
    mock_uow.audit_logs.create = AsyncMock()
    return mock_uow


@pytest.mark.asyncio
async def test_create_tenant_without_plan(uow):
    result = await CreateTenantUseCase(uow).execute(
        CreateTenantCommand(name="Acme", domain="acme", settings={"theme": "dark"})
    )

    assert result.is_ok()
    assert result.value.plan_id is None
    assert result.value.settings == {"theme": "dark", "features": [], "limits": {}}
    assert uow.audit_logs.create.call_args[0][0].action == "tenant_created"
    uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_domain_claimed_between_lookup_and_insert(uow):
    """The unique index on domain backs up the lookup"""
    uow.tenants.create = AsyncMock(side_effect=DomainTakenError("acme"))

    result = await CreateTenantUseCase(uow).execute(
        CreateTenantCommand(name="Acme", domain="acme")
    )

    assert result.is_err()
    assert result.error.code == "DOMAIN_TAKEN"
    assert result.error.fields == {"domain": "domain is already in use"}
    uow.audit_logs.create.assert_not_called()
    uow.commit.assert_not_called()
