"""Use cases for notification reporting."""

from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from notifier.application.notifications import build_analytics
from notifier.infrastructure.cache import notification_cache


def get_notification_analytics(
    session: Session, *, tenant_id: int, user_id: int | None = None
) -> dict[str, Any]:
    return build_analytics(session).stats(tenant_id, user_id=user_id)


def clear_notification_cache() -> None:
    notification_cache.clear()
