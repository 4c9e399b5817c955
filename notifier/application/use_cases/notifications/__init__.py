"""Use cases for notification inboxes, dispatch and events."""

from .analytics import clear_notification_cache, get_notification_analytics
from .create_notification import create_notification
from .list_notifications import NotificationPage, list_notifications
from .publish_event import publish_event
from .read_state import (
    count_unread_notifications,
    mark_all_notifications_as_read,
    mark_notification_as_read,
    mark_notifications_as_read,
)

__all__ = [
    "NotificationPage",
    "clear_notification_cache",
    "count_unread_notifications",
    "create_notification",
    "get_notification_analytics",
    "list_notifications",
    "mark_all_notifications_as_read",
    "mark_notification_as_read",
    "mark_notifications_as_read",
    "publish_event",
]
