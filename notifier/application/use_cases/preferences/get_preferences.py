"""Use case returning the effective preferences of a user."""

from __future__ import annotations

from sqlalchemy.orm import Session

from notifier.application.notifications import build_preference_resolver
from notifier.domain.entities import NOTIFICATION_TYPES, NotificationPreference


def get_notification_preferences(
    session: Session, *, tenant_id: int, user_id: int
) -> list[NotificationPreference]:
    """Return one entry per known notification type, defaults filled in."""

    return build_preference_resolver(session).effective_preferences(
        tenant_id, user_id, NOTIFICATION_TYPES
    )
