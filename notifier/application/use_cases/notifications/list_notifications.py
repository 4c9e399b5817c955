"""Use case for paging through a user's notifications."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.orm import Session

from notifier.domain.entities import Notification
from notifier.infrastructure.repositories import NotificationRepository

MAX_PAGE_SIZE = 100


@dataclass
class NotificationPage:
    notifications: list[Notification]
    total: int
    unread_count: int
    page: int
    limit: int


def list_notifications(
    session: Session,
    *,
    tenant_id: int,
    user_id: int,
    page: int = 1,
    limit: int = 20,
    unread_only: bool = False,
    notification_type: str | None = None,
    severity: str | None = None,
) -> NotificationPage:
    page = max(1, page)
    limit = max(1, min(limit, MAX_PAGE_SIZE))
    repository = NotificationRepository(session)
    items, total = repository.list_for_user(
        tenant_id,
        user_id,
        unread_only=unread_only,
        notification_type=notification_type,
        severity=severity,
        offset=(page - 1) * limit,
        limit=limit,
    )
    return NotificationPage(
        notifications=items,
        total=total,
        unread_count=repository.count_unread(tenant_id, user_id),
        page=page,
        limit=limit,
    )
