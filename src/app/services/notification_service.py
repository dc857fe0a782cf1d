"""
Notification delivery for plan changes.

Delivery is best effort: a failed notification never undoes the change that
triggered it. ``deliver_notification`` records the failure as a
``notification_failed`` audit entry and reports it to the caller instead.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditLog

logger = logging.getLogger(__name__)


class NotificationError(Exception):
    """Raised by a notification service when delivery fails"""


class INotificationService(ABC):
    """Notification service interface - application layer"""

    @abstractmethod
    async def send(self, event: str, payload: Dict[str, Any]) -> None:
        """Deliver one event; raises NotificationError on failure"""
        pass


async def deliver_notification(
    uow: UnitOfWork,
    notifier: Optional[INotificationService],
    event: str,
    payload: Dict[str, Any],
    tenant_id: Optional[UUID] = None,
    actor_id: Optional[UUID] = None,
) -> bool:
    """
    Send a notification after the primary change has been committed.

    Returns:
        True when delivered (or no notifier is configured), False otherwise
    """
    if notifier is None:
        return True

    try:
        await notifier.send(event, payload)
        return True
    except NotificationError as exc:
        logger.warning(f"Notification {event} failed: {exc}")

    await uow.audit_logs.create(
        AuditLog(
            user_id=actor_id,
            tenant_id=tenant_id,
            action="notification_failed",
            resource_type="notification",
            resource_id=event,
            request_data={"event": event, "payload": payload},
        )
    )
    await uow.commit()
    return False
