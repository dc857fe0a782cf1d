from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import User, UserRole


async def require_super_admin(uow: UnitOfWork, actor_id: Optional[UUID]) -> Result[User]:
    """Load the calling user and make sure it is an active super admin."""
    actor = await uow.users.get_by_id(actor_id) if actor_id else None
    if actor is None or not actor.is_active or actor.role != UserRole.super_admin:
        return Return.err(
            Error("INSUFFICIENT_ROLE", "Only super admins can perform this action")
        )
    return Return.ok(actor)
