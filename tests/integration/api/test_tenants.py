"""
Integration tests for tenant creation, listing, stats and custom settings
"""

import pytest
from uuid import UUID
from httpx import AsyncClient
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.domain.entities import Subscription, Tenant, User, UserRole


@pytest.mark.asyncio
async def test_create_tenant_on_plan_with_admin(
    client: AsyncClient, db_session: AsyncSession, admin_headers, make_plan, test_data
):
    """
    Given an active Starter plan with a 14-day trial
    When a tenant is created on it with a tenant admin
    Then the tenant has an active subscription and the plan's entitlements
    And the trial ends 14 days after creation
    And the admin user belongs to the tenant
    """
    plan = await make_plan("starter")
    plan_id = plan.id
    payload = test_data.get_copy("create_tenant_request")
    payload["plan_id"] = str(plan_id)

    response = await client.post("/api/admin/tenants", json=payload, headers=admin_headers)

    assert response.status_code == 201
    data = response.json()
    assert data["domain"] == "acme"
    assert data["status"] == "active"
    assert data["plan_id"] == str(plan_id)
    assert data["subscription_status"] == "active"
    assert data["settings"] == {
        "theme": "dark",
        "locale": "en",
        "features": ["products", "customers"],
        "limits": {"max_users": 5, "max_products": 100},
    }
    assert data["trial_ends_at"] is not None

    tenant = await db_session.get(Tenant, UUID(data["id"]))
    assert (tenant.trial_ends_at - tenant.created_at).days == 14

    admin = (await db_session.exec(select(User).where(User.email == "alice@acme.example.com"))).one()
    assert admin.role == UserRole.tenant_admin
    assert admin.tenant_id == tenant.id

    subscriptions = (await db_session.exec(select(Subscription))).all()
    assert len(subscriptions) == 1


@pytest.mark.asyncio
async def test_create_tenant_validation(client: AsyncClient, admin_headers, test_data):
    payload = test_data.get_copy("create_tenant_request")
    payload.update(
        {
            "domain": "Not A Domain!",
            "trial_days": 500,
            "plan_id": "00000000-0000-0000-0000-000000000000",
        }
    )

    response = await client.post("/api/admin/tenants", json=payload, headers=admin_headers)

    assert response.status_code == 422
    error = response.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert {"domain", "trial_days"} <= set(error["fields"])


@pytest.mark.asyncio
async def test_create_tenant_unknown_plan(client: AsyncClient, admin_headers, test_data):
    payload = test_data.get_copy("create_tenant_request")
    payload["plan_id"] = "00000000-0000-0000-0000-000000000000"

    response = await client.post("/api/admin/tenants", json=payload, headers=admin_headers)

    assert response.status_code == 422
    error = response.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert "plan_id" in error["fields"]


@pytest.mark.asyncio
async def test_create_tenant_hostname_domain(client: AsyncClient, admin_headers):
    response = await client.post(
        "/api/admin/tenants",
        json={"name": "Hosted", "domain": "shop.example.com"},
        headers=admin_headers,
    )

    assert response.status_code == 201
    assert response.json()["plan_id"] is None
    assert response.json()["trial_ends_at"] is None


@pytest.mark.asyncio
async def test_create_tenant_domain_taken(client: AsyncClient, admin_headers, make_tenant):
    await make_tenant(domain="acme")

    response = await client.post(
        "/api/admin/tenants",
        json={"name": "Acme Two", "domain": "acme"},
        headers=admin_headers,
    )

    assert response.status_code == 422
    assert response.json()["error"]["code"] == "DOMAIN_TAKEN"


@pytest.mark.asyncio
async def test_list_tenants_hides_archived(client: AsyncClient, admin_headers, make_tenant):
    kept = await make_tenant(name="Kept")
    archived = await make_tenant(name="Gone")
    kept_id, archived_id = kept.id, archived.id
    await client.delete(f"/api/admin/tenants/{archived_id}", headers=admin_headers)

    response = await client.get("/api/admin/tenants", headers=admin_headers)
    assert [t["id"] for t in response.json()["tenants"]] == [str(kept_id)]

    response = await client.get(
        "/api/admin/tenants", params={"include_archived": "true"}, headers=admin_headers
    )
    assert {t["id"] for t in response.json()["tenants"]} == {str(kept_id), str(archived_id)}

    response = await client.get(
        "/api/admin/tenants", params={"search": "kep"}, headers=admin_headers
    )
    assert [t["name"] for t in response.json()["tenants"]] == ["Kept"]


@pytest.mark.asyncio
async def test_tenant_stats(client: AsyncClient, admin_headers, make_tenant):
    await make_tenant()
    suspended = await make_tenant()
    archived = await make_tenant()
    suspended_id, archived_id = suspended.id, archived.id
    await client.post(f"/api/admin/tenants/{suspended_id}/suspend", headers=admin_headers)
    await client.delete(f"/api/admin/tenants/{archived_id}", headers=admin_headers)

    response = await client.get("/api/admin/tenants/stats", headers=admin_headers)

    assert response.status_code == 200
    assert response.json() == {
        "total": 3,
        "active": 1,
        "suspended": 1,
        "cancelled": 0,
        "archived": 1,
        "trialing": 0,
        "created_last_30_days": 3,
    }


@pytest.mark.asyncio
async def test_settings_versioning_and_rollback(
    client: AsyncClient, db_session: AsyncSession, admin_headers, make_plan, make_tenant
):
    """
    Given a tenant on a plan
    When custom settings are changed twice and rolled back to version 1
    Then the custom keys equal version 1's value
    And the plan entitlements are untouched throughout
    And history lists three versions, newest first
    """
    plan = await make_plan("starter")
    tenant = await make_tenant()
    tenant_id = tenant.id
    await client.post(
        f"/api/admin/tenants/{tenant_id}/plan",
        json={"plan_id": str(plan.id)},
        headers=admin_headers,
    )

    first = await client.put(
        f"/api/admin/tenants/{tenant_id}/settings",
        json={"settings": {"theme": "dark"}},
        headers=admin_headers,
    )
    assert first.json()["version"] == 1
    second = await client.put(
        f"/api/admin/tenants/{tenant_id}/settings",
        json={"settings": {"theme": "light", "locale": "ar"}, "reason": "rebrand"},
        headers=admin_headers,
    )
    assert second.json()["version"] == 2

    response = await client.post(
        f"/api/admin/tenants/{tenant_id}/settings/rollback",
        json={"version": 1},
        headers=admin_headers,
    )

    assert response.status_code == 200
    data = response.json()
    assert data["version"] == 3
    assert data["settings"] == {
        "theme": "dark",
        "features": ["products", "customers"],
        "limits": {"max_users": 5, "max_products": 100},
    }

    history = await client.get(
        f"/api/admin/tenants/{tenant_id}/settings/history", headers=admin_headers
    )
    assert [v["version"] for v in history.json()["versions"]] == [3, 2, 1]


@pytest.mark.asyncio
async def test_settings_reject_reserved_keys(client: AsyncClient, admin_headers, make_tenant):
    tenant = await make_tenant()

    response = await client.put(
        f"/api/admin/tenants/{tenant.id}/settings",
        json={"settings": {"features": ["everything"]}},
        headers=admin_headers,
    )

    assert response.status_code == 422
    error = response.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert "features" in error["fields"]


@pytest.mark.asyncio
async def test_rollback_unknown_version(client: AsyncClient, admin_headers, make_tenant):
    tenant = await make_tenant()

    response = await client.post(
        f"/api/admin/tenants/{tenant.id}/settings/rollback",
        json={"version": 7},
        headers=admin_headers,
    )

    assert response.status_code == 422
    assert response.json()["error"]["code"] == "SETTINGS_VERSION_NOT_FOUND"


@pytest.mark.asyncio
async def test_update_tenant_fields_in_one_request(
    client: AsyncClient, db_session: AsyncSession, admin_headers, make_plan, make_tenant
):
    """
    Given a tenant on Starter with custom settings
    When name, domain, status, plan and settings are updated together
    Then the tenant is suspended on Pro with Pro's entitlements
    And the Starter subscription is cancelled in favour of a Pro one
    And the settings change is stored as a version
    """
    starter = await make_plan("starter")
    pro = await make_plan("pro")
    tenant = await make_tenant(domain="acme", settings={"theme": "dark"})
    tenant_id, starter_id, pro_id = tenant.id, starter.id, pro.id
    await client.post(
        f"/api/admin/tenants/{tenant_id}/plan",
        json={"plan_id": str(starter_id)},
        headers=admin_headers,
    )

    response = await client.put(
        f"/api/admin/tenants/{tenant_id}",
        json={
            "name": "Acme Holdings",
            "domain": "acme-holdings",
            "status": "suspended",
            "plan_id": str(pro_id),
            "settings": {"theme": "light"},
            "reason": "upsell",
        },
        headers=admin_headers,
    )

    assert response.status_code == 200
    data = response.json()
    assert data["changed"] == ["status", "name", "domain", "plan_id", "settings"]
    assert data["notification_sent"] is True
    tenant_data = data["tenant"]
    assert tenant_data["name"] == "Acme Holdings"
    assert tenant_data["domain"] == "acme-holdings"
    assert tenant_data["status"] == "suspended"
    assert tenant_data["plan_id"] == str(pro_id)
    assert tenant_data["settings"] == {
        "theme": "light",
        "features": ["products", "customers", "reports"],
        "limits": {"max_users": 25, "max_products": 1000},
        "suspended": True,
    }

    subscriptions = (
        await db_session.exec(select(Subscription).where(Subscription.tenant_id == tenant_id))
    ).all()
    assert sorted((s.plan_id, s.status.value) for s in subscriptions) == sorted(
        [(starter_id, "cancelled"), (pro_id, "active")]
    )

    history = await client.get(
        f"/api/admin/tenants/{tenant_id}/settings/history", headers=admin_headers
    )
    versions = history.json()["versions"]
    assert len(versions) == 1
    assert versions[0]["new_value"] == {"theme": "light"}


@pytest.mark.asyncio
async def test_update_tenant_domain_taken(client: AsyncClient, admin_headers, make_tenant):
    tenant = await make_tenant(domain="acme")
    await make_tenant(domain="globex")
    tenant_id = tenant.id

    response = await client.put(
        f"/api/admin/tenants/{tenant_id}",
        json={"name": "Renamed", "domain": "globex"},
        headers=admin_headers,
    )

    assert response.status_code == 422
    error = response.json()["error"]
    assert error["code"] == "DOMAIN_TAKEN"
    assert "domain" in error["fields"]

    current = await client.get(f"/api/admin/tenants/{tenant_id}", headers=admin_headers)
    assert current.json()["domain"] == "acme"
    assert current.json()["name"] != "Renamed"


@pytest.mark.asyncio
async def test_update_tenant_may_resend_its_own_domain(
    client: AsyncClient, admin_headers, make_tenant
):
    tenant = await make_tenant(domain="acme")

    response = await client.put(
        f"/api/admin/tenants/{tenant.id}",
        json={"domain": "acme", "name": "Acme Again"},
        headers=admin_headers,
    )

    assert response.status_code == 200
    assert response.json()["changed"] == ["name"]


@pytest.mark.asyncio
async def test_update_tenant_rejects_inactive_plan_without_partial_write(
    client: AsyncClient, admin_headers, make_plan, make_tenant
):
    retired = await make_plan("pro", is_active=False)
    tenant = await make_tenant(name="Original")
    tenant_id, retired_id = tenant.id, retired.id

    response = await client.put(
        f"/api/admin/tenants/{tenant_id}",
        json={"name": "Renamed", "plan_id": str(retired_id)},
        headers=admin_headers,
    )

    assert response.status_code == 422
    assert response.json()["error"]["code"] == "PLAN_INACTIVE"
    current = await client.get(f"/api/admin/tenants/{tenant_id}", headers=admin_headers)
    assert current.json()["name"] == "Original"
    assert current.json()["plan_id"] is None


@pytest.mark.asyncio
async def test_update_tenant_rejects_unsupported_status(
    client: AsyncClient, admin_headers, make_tenant
):
    tenant = await make_tenant()

    response = await client.put(
        f"/api/admin/tenants/{tenant.id}",
        json={"status": "archived"},
        headers=admin_headers,
    )

    assert response.status_code == 422
    error = response.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert "status" in error["fields"]


@pytest.mark.asyncio
async def test_duplicate_domain_caught_by_unique_index(
    client: AsyncClient, admin_headers, make_tenant, monkeypatch
):
    """
    Given the domain lookup misses a tenant created concurrently
    When a second tenant is created or moved onto that domain
    Then the unique index turns the write into DOMAIN_TAKEN
    """
    from src.adapter.repositories.tenant_repository import TenantRepository

    await make_tenant(domain="acme")
    other = await make_tenant(domain="globex")
    other_id = other.id

    async def lookup_misses(self, domain):
        return None

    monkeypatch.setattr(TenantRepository, "get_by_domain", lookup_misses)

    created = await client.post(
        "/api/admin/tenants",
        json={"name": "Acme Two", "domain": "acme"},
        headers=admin_headers,
    )
    assert created.status_code == 422
    assert created.json()["error"]["code"] == "DOMAIN_TAKEN"

    moved = await client.put(
        f"/api/admin/tenants/{other_id}",
        json={"domain": "acme"},
        headers=admin_headers,
    )
    assert moved.status_code == 422
    assert moved.json()["error"]["code"] == "DOMAIN_TAKEN"
