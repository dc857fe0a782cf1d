import logging
from typing import Any, Dict

import httpx

from src.app.services.notification_service import INotificationService, NotificationError

logger = logging.getLogger(__name__)


class WebhookNotificationService(INotificationService):
    """Posts events as JSON to a configured webhook URL"""

    def __init__(self, url: str, timeout: float = 5.0):
        self.url = url
        self.timeout = timeout

    async def send(self, event: str, payload: Dict[str, Any]) -> None:
        body = {"event": event, "data": payload}
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(self.url, json=body)
                response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise NotificationError(f"Webhook delivery failed: {exc}") from exc
        logger.info(f"Delivered {event} notification to webhook")


class LoggingNotificationService(INotificationService):
    """Fallback when no webhook is configured: events only go to the log"""

    async def send(self, event: str, payload: Dict[str, Any]) -> None:
        logger.info(f"Notification {event}: {payload}")
