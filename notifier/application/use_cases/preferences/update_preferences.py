"""Use case replacing the stored preferences of a user."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import time

from sqlalchemy.orm import Session

from notifier.application.notifications import build_preference_resolver
from notifier.domain.entities import (
    DIGEST_FREQUENCIES,
    NOTIFICATION_TYPES,
    NotificationPreference,
)
from notifier.domain.errors import ValidationError
from notifier.infrastructure.repositories import NotificationPreferenceRepository


@dataclass
class PreferenceInput:
    notification_type: str
    in_app_enabled: bool = True
    email_enabled: bool = False
    digest_frequency: str = "never"
    quiet_hours: bool = False
    quiet_start: time | None = None
    quiet_end: time | None = None


def update_notification_preferences(
    session: Session,
    *,
    tenant_id: int,
    user_id: int,
    preferences: Sequence[PreferenceInput],
) -> list[NotificationPreference]:
    errors: list[str] = []
    seen: set[str] = set()
    for index, item in enumerate(preferences):
        if item.notification_type not in NOTIFICATION_TYPES:
            errors.append(f"preferences[{index}].notificationType: unknown type {item.notification_type!r}")
        elif item.notification_type in seen:
            errors.append(f"preferences[{index}].notificationType: duplicated {item.notification_type!r}")
        seen.add(item.notification_type)
        if item.digest_frequency not in DIGEST_FREQUENCIES:
            errors.append(
                f"preferences[{index}].digestFrequency: expected one of {', '.join(sorted(DIGEST_FREQUENCIES))}"
            )
        if item.quiet_hours and (item.quiet_start is None or item.quiet_end is None):
            errors.append(f"preferences[{index}]: quiet hours need a start and an end time")
    if errors:
        raise ValidationError("Invalid preferences", errors)

    NotificationPreferenceRepository(session).replace_for_user(
        tenant_id,
        user_id,
        [
            NotificationPreference(
                id=None,
                tenant_id=tenant_id,
                user_id=user_id,
                notification_type=item.notification_type,
                in_app_enabled=item.in_app_enabled,
                email_enabled=item.email_enabled,
                digest_frequency=item.digest_frequency,
                quiet_hours=item.quiet_hours,
                quiet_start=item.quiet_start,
                quiet_end=item.quiet_end,
            )
            for item in preferences
        ],
    )
    return build_preference_resolver(session).effective_preferences(
        tenant_id, user_id, NOTIFICATION_TYPES
    )
