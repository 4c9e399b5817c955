"""Domain entities exposed by the application."""

from .email_delivery import (
    TIMEOUT_ERROR_MESSAGE,
    DeliveryOutcome,
    DeliveryStatus,
    EmailDeliveryLog,
    EmailMessage,
)
from .email_provider import SECRET_MASK, EmailProvider, EmailProviderSetting
from .notification import (
    NOTIFICATION_TYPE_MENTION,
    NOTIFICATION_TYPE_SYSTEM_MESSAGE,
    NOTIFICATION_TYPES,
    DeliveryChannel,
    Notification,
    NotificationSeverity,
)
from .notification_preference import DIGEST_FREQUENCIES, NotificationPreference
from .notification_trigger import NotificationTrigger, RecipientType
from .role import Role
from .scheduled_dispatch import ScheduledDispatch
from .user import ADMIN_ROLE_ALIAS, User

__all__ = [
    "ADMIN_ROLE_ALIAS",
    "DIGEST_FREQUENCIES",
    "DeliveryChannel",
    "DeliveryOutcome",
    "DeliveryStatus",
    "EmailDeliveryLog",
    "EmailMessage",
    "EmailProvider",
    "EmailProviderSetting",
    "NOTIFICATION_TYPES",
    "NOTIFICATION_TYPE_MENTION",
    "NOTIFICATION_TYPE_SYSTEM_MESSAGE",
    "Notification",
    "NotificationPreference",
    "NotificationSeverity",
    "NotificationTrigger",
    "RecipientType",
    "Role",
    "SECRET_MASK",
    "ScheduledDispatch",
    "TIMEOUT_ERROR_MESSAGE",
    "User",
]
