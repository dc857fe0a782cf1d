"""
Super Admin Authorization

Route-level guard for platform administration endpoints.
"""

from uuid import UUID

from fastapi import Depends, status
from libs.result import Error
from src.api.error import ClientError
from src.depends import get_current_user
from src.domain.entities import UserRole


async def require_super_admin(current_user: dict = Depends(get_current_user)) -> dict:
    """
    Verify the bearer token carries the super_admin role.

    Archive and restore of tenants additionally re-check the stored user
    inside the use case.

    Raises:
        ClientError: 403 if the caller is not a super admin

    Returns:
        The decoded token payload
    """
    if current_user.get("role") != UserRole.super_admin.value:
        raise ClientError(
            Error("INSUFFICIENT_ROLE", "Only super admins can perform this action"),
            status_code=status.HTTP_403_FORBIDDEN,
        )
    return current_user


def actor_id(current_user: dict) -> UUID:
    """User id of the caller, taken from the token payload."""
    try:
        return UUID(current_user["user_id"])
    except (KeyError, ValueError):
        raise ClientError(
            Error("UNAUTHORIZED", "Invalid or expired token"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )
