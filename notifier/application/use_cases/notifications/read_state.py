"""Use cases that change a recipient's read state."""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy.orm import Session

from notifier.domain.errors import NotFoundError
from notifier.infrastructure.repositories import NotificationRepository


def count_unread_notifications(session: Session, *, tenant_id: int, user_id: int) -> int:
    return NotificationRepository(session).count_unread(tenant_id, user_id)


def mark_notification_as_read(
    session: Session, *, tenant_id: int, user_id: int, notification_id: int
) -> None:
    """Mark one notification read; repeated calls are no-ops."""

    found = NotificationRepository(session).mark_as_read(
        notification_id, tenant_id=tenant_id, user_id=user_id
    )
    if not found:
        raise NotFoundError("Notification not found")


def mark_notifications_as_read(
    session: Session, *, tenant_id: int, user_id: int, notification_ids: Iterable[int]
) -> int:
    return NotificationRepository(session).mark_many_as_read(
        notification_ids, tenant_id=tenant_id, user_id=user_id
    )


def mark_all_notifications_as_read(session: Session, *, tenant_id: int, user_id: int) -> int:
    """Return how many notifications changed from unread to read."""

    return NotificationRepository(session).mark_all_as_read(tenant_id=tenant_id, user_id=user_id)
