from datetime import datetime

from src.domain.entities import SubscriptionStatus, Tenant, TenantStatus
from src.domain.lifecycle import SideEffect, TenantAction, apply_transition

NOW = datetime(2026, 4, 11, 12, 0)


def make_tenant(**overrides):
    data = {
        "name": "Acme",
        "domain": "acme",
        "status": TenantStatus.active,
        "settings": {"features": ["a"], "limits": {"max_users": 1}, "theme": "dark"},
    }
    data.update(overrides)
    return Tenant(**data)


def test_suspend_sets_flag_and_keeps_features():
    tenant = make_tenant()

    result = apply_transition(tenant, TenantAction.suspend, NOW)

    assert result.is_ok()
    assert result.value == []
    assert tenant.status == TenantStatus.suspended
    assert tenant.settings["suspended"] is True
    assert tenant.settings["features"] == ["a"]
    assert tenant.updated_at == NOW


def test_suspend_then_restore_round_trip():
    tenant = make_tenant()
    before = dict(tenant.settings)

    apply_transition(tenant, TenantAction.suspend, NOW)
    result = apply_transition(tenant, TenantAction.restore_access, NOW)

    assert result.value == [SideEffect.resync_entitlements]
    assert tenant.status == TenantStatus.active
    assert tenant.settings == before


def test_suspend_archived_tenant_is_invalid():
    tenant = make_tenant(status=TenantStatus.archived)

    result = apply_transition(tenant, TenantAction.suspend, NOW)

    assert result.is_err()
    assert result.error.code == "INVALID_TRANSITION"
    assert tenant.status == TenantStatus.archived


def test_archive_with_active_subscription():
    tenant = make_tenant(subscription_status=SubscriptionStatus.active)

    result = apply_transition(tenant, TenantAction.archive, NOW)

    assert result.value == [SideEffect.cancel_subscription, SideEffect.deactivate_users]
    assert tenant.status == TenantStatus.archived
    assert tenant.deleted_at == NOW
    assert tenant.subscription_status == SubscriptionStatus.cancelled


def test_archive_without_subscription_only_deactivates_users():
    tenant = make_tenant()

    result = apply_transition(tenant, TenantAction.archive, NOW)

    assert result.value == [SideEffect.deactivate_users]


def test_archive_twice_is_conflict():
    tenant = make_tenant(status=TenantStatus.archived, deleted_at=NOW)

    result = apply_transition(tenant, TenantAction.archive, NOW)

    assert result.error.code == "TENANT_ALREADY_ARCHIVED"


def test_unarchive():
    tenant = make_tenant(status=TenantStatus.archived, deleted_at=NOW)

    result = apply_transition(tenant, TenantAction.unarchive, NOW)

    assert result.value == [SideEffect.reactivate_users]
    assert tenant.status == TenantStatus.active
    assert tenant.deleted_at is None


def test_unarchive_active_tenant_is_conflict():
    result = apply_transition(make_tenant(), TenantAction.unarchive, NOW)

    assert result.error.code == "TENANT_NOT_ARCHIVED"
