"""
Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class TenantStatus(str, Enum):
    """Tenant lifecycle status"""

    active = "active"
    suspended = "suspended"
    cancelled = "cancelled"
    archived = "archived"


class SubscriptionStatus(str, Enum):
    """Subscription status"""

    active = "active"
    cancelled = "cancelled"


class BillingCycle(str, Enum):
    """How often a plan is billed"""

    monthly = "monthly"
    yearly = "yearly"
    lifetime = "lifetime"


class UserRole(str, Enum):
    """Platform role of a user"""

    super_admin = "super_admin"
    tenant_admin = "tenant_admin"
    user = "user"
