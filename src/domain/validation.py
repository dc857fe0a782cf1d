"""
Field-level validation shared by use cases.

Each helper returns a ``{field: message}`` map; an empty map means valid.
"""

import re
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable, Optional

from .entities.enums import BillingCycle

SUBDOMAIN_PATTERN = re.compile(r"^[a-z0-9-]+$")
HOSTNAME_PATTERN = re.compile(r"^[a-zA-Z0-9][a-zA-Z0-9.-]*[a-zA-Z0-9]\.[a-zA-Z]{2,}$")

MAX_TRIAL_DAYS = 365
MAX_NAME_LENGTH = 255


def validate_trial_days(trial_days: Optional[int]) -> Dict[str, str]:
    if trial_days is None:
        return {}
    if not isinstance(trial_days, int) or not 0 <= trial_days <= MAX_TRIAL_DAYS:
        return {"trial_days": f"trial_days must be an integer between 0 and {MAX_TRIAL_DAYS}"}
    return {}


def validate_domain(domain: Optional[str]) -> Dict[str, str]:
    if not domain:
        return {"domain": "domain is required"}
    if len(domain) > MAX_NAME_LENGTH:
        return {"domain": f"domain must be at most {MAX_NAME_LENGTH} characters"}
    if not (SUBDOMAIN_PATTERN.match(domain) or HOSTNAME_PATTERN.match(domain)):
        return {"domain": "domain must be a lowercase subdomain or a valid hostname"}
    return {}


def validate_name(name: Optional[str], field: str = "name") -> Dict[str, str]:
    if name is None or not name.strip():
        return {field: f"{field} is required"}
    if len(name) > MAX_NAME_LENGTH:
        return {field: f"{field} must be at most {MAX_NAME_LENGTH} characters"}
    return {}


def validate_price(price: Any) -> Dict[str, str]:
    try:
        value = Decimal(str(price))
    except (InvalidOperation, ValueError, TypeError):
        return {"price": "price must be a number"}
    if not value.is_finite() or value < 0:
        return {"price": "price must be zero or greater"}
    return {}


def validate_billing_cycle(billing_cycle: Any) -> Dict[str, str]:
    try:
        BillingCycle(billing_cycle)
    except ValueError:
        allowed = ", ".join(cycle.value for cycle in BillingCycle)
        return {"billing_cycle": f"billing_cycle must be one of: {allowed}"}
    return {}


def validate_features(features: Optional[Iterable[Any]]) -> Dict[str, str]:
    if features is None:
        return {}
    if isinstance(features, (str, bytes)) or not all(
        isinstance(feature, str) and feature for feature in features
    ):
        return {"features": "features must be a list of non-empty strings"}
    return {}


def validate_limits(limits: Optional[Dict[str, Any]]) -> Dict[str, str]:
    if limits is None:
        return {}
    if not isinstance(limits, dict):
        return {"limits": "limits must be a map of names to integers"}
    for key, value in limits.items():
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            return {"limits": f"limit '{key}' must be a non-negative integer"}
    return {}
