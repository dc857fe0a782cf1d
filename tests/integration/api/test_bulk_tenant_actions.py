"""
Integration tests for bulk tenant actions
"""

import pytest
from httpx import AsyncClient
from sqlmodel.ext.asyncio.session import AsyncSession

from src.api.utils.jwt import generate_jwt
from src.domain.entities import Tenant, TenantStatus, UserRole


@pytest.mark.asyncio
async def test_bulk_delete_reports_partial_failures(
    client: AsyncClient, db_session: AsyncSession, admin_headers, make_tenant
):
    """
    Given two active tenants and one already archived
    When all three plus a malformed id are bulk deleted
    Then the two active tenants are archived
    And the archived tenant and malformed id are reported as failures
    """
    first = await make_tenant()
    second = await make_tenant()
    archived = await make_tenant()
    first_id, second_id, archived_id = first.id, second.id, archived.id
    await client.delete(f"/api/admin/tenants/{archived_id}", headers=admin_headers)

    response = await client.post(
        "/api/admin/tenants/bulk",
        json={
            "action": "delete",
            "tenant_ids": [str(first_id), str(second_id), str(archived_id), "nope"],
        },
        headers=admin_headers,
    )

    assert response.status_code == 200
    data = response.json()
    assert data["action"] == "delete"
    assert data["succeeded"] == [str(first_id), str(second_id)]
    assert {(f["tenant_id"], f["code"]) for f in data["failed"]} == {
        (str(archived_id), "TENANT_ALREADY_ARCHIVED"),
        ("nope", "VALIDATION_ERROR"),
    }

    for tenant_id in (first_id, second_id):
        tenant = await db_session.get(Tenant, tenant_id)
        await db_session.refresh(tenant)
        assert tenant.status == TenantStatus.archived


@pytest.mark.asyncio
async def test_bulk_suspend_and_restore(
    client: AsyncClient, db_session: AsyncSession, admin_headers, make_tenant
):
    tenants = [await make_tenant() for _ in range(3)]
    ids = [str(tenant.id) for tenant in tenants]

    suspended = await client.post(
        "/api/admin/tenants/bulk",
        json={"action": "suspend", "tenant_ids": ids},
        headers=admin_headers,
    )
    assert suspended.json()["succeeded"] == ids

    restored = await client.post(
        "/api/admin/tenants/bulk",
        json={"action": "restore", "tenant_ids": ids},
        headers=admin_headers,
    )
    assert restored.json()["succeeded"] == ids
    assert restored.json()["failed"] == []


@pytest.mark.asyncio
async def test_bulk_unknown_action(client: AsyncClient, admin_headers, make_tenant):
    tenant = await make_tenant()

    response = await client.post(
        "/api/admin/tenants/bulk",
        json={"action": "purge", "tenant_ids": [str(tenant.id)]},
        headers=admin_headers,
    )

    assert response.status_code == 422
    assert "action" in response.json()["error"]["fields"]


@pytest.mark.asyncio
async def test_bulk_requires_super_admin(client: AsyncClient, make_tenant):
    tenant = await make_tenant()
    token = generate_jwt(tenant.id, tenant.id, UserRole.user.value)

    response = await client.post(
        "/api/admin/tenants/bulk",
        json={"action": "delete", "tenant_ids": [str(tenant.id)]},
        headers={"Authorization": f"Bearer {token}"},
    )

    assert response.status_code == 403
