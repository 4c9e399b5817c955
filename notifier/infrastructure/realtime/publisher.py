"""Utility helpers to push notifications to websocket subscribers."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from typing import Any

from anyio import from_thread

from notifier.domain.entities import Notification

from .manager import NotificationConnectionManager, notification_manager

logger = logging.getLogger(__name__)


class NotificationPublisher:
    """Serialize notifications and schedule their delivery."""

    def __init__(self, manager: NotificationConnectionManager) -> None:
        self._manager = manager

    def dispatch(self, notification: Notification) -> None:
        """Schedule ``notification`` to be delivered to its user."""

        if not self._manager.is_connected(notification.tenant_id, notification.user_id):
            return

        message = {"type": "notification", "data": serialize_notification(notification)}
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            try:
                from_thread.run(
                    self._manager.send_to_user, notification.tenant_id, notification.user_id, message
                )
            except RuntimeError as exc:
                # Not running inside an AnyIO worker thread: nothing to push to.
                logger.debug("Realtime push skipped for notification %s: %s", notification.id, exc)
        else:
            loop.create_task(
                self._manager.send_to_user(notification.tenant_id, notification.user_id, message)
            )

    def dispatch_many(self, notifications: Iterable[Notification]) -> None:
        for notification in notifications:
            self.dispatch(notification)


def serialize_notification(notification: Notification) -> dict[str, Any]:
    """Return the websocket payload representation for ``notification``."""

    return {
        "id": notification.id,
        "userId": notification.user_id,
        "type": notification.type,
        "severity": notification.severity.value,
        "title": notification.title,
        "messageBody": notification.message_body,
        "linkUrl": notification.link_url,
        "isRead": notification.is_read,
        "relatedModule": notification.related_module,
        "relatedEntityId": notification.related_entity_id,
        "createdAt": notification.created_at.isoformat() if notification.created_at else None,
    }


notification_publisher = NotificationPublisher(notification_manager)


__all__ = [
    "NotificationPublisher",
    "notification_publisher",
    "serialize_notification",
]
