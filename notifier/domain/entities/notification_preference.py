"""Domain entity describing a user's channel choices for a notification type."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time

DEFAULT_IN_APP_ENABLED = True
DEFAULT_EMAIL_ENABLED = False
DEFAULT_DIGEST_FREQUENCY = "never"
DIGEST_FREQUENCIES = frozenset({"never", "daily", "weekly"})


@dataclass
class NotificationPreference:
    """Stored preference; a missing row means the defaults apply."""

    id: int | None
    tenant_id: int
    user_id: int
    notification_type: str
    in_app_enabled: bool = DEFAULT_IN_APP_ENABLED
    email_enabled: bool = DEFAULT_EMAIL_ENABLED
    digest_frequency: str = DEFAULT_DIGEST_FREQUENCY
    quiet_hours: bool = False
    quiet_start: time | None = None
    quiet_end: time | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def default_for(
        cls, *, tenant_id: int, user_id: int, notification_type: str
    ) -> "NotificationPreference":
        """Return the unsaved preference used when no row exists."""

        return cls(
            id=None,
            tenant_id=tenant_id,
            user_id=user_id,
            notification_type=notification_type,
        )


__all__ = [
    "DEFAULT_DIGEST_FREQUENCY",
    "DIGEST_FREQUENCIES",
    "DEFAULT_EMAIL_ENABLED",
    "DEFAULT_IN_APP_ENABLED",
    "NotificationPreference",
]
