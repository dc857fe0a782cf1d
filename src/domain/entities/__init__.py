"""
Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    BillingCycle,
    SubscriptionStatus,
    TenantStatus,
    UserRole,
)

# Export all entities
from .plan import Plan
from .tenant import Tenant
from .subscription import Subscription
from .subscription_change import SubscriptionChange
from .user import User
from .product import Product
from .customer import Customer
from .audit_log import AuditLog
from .tenant_settings_version import TenantSettingsVersion

__all__ = [
    # Enums
    "BillingCycle",
    "SubscriptionStatus",
    "TenantStatus",
    "UserRole",
    # Entities
    "Plan",
    "Tenant",
    "Subscription",
    "SubscriptionChange",
    "User",
    "Product",
    "Customer",
    "AuditLog",
    "TenantSettingsVersion",
]
