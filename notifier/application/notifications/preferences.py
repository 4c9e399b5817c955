"""Per-recipient channel eligibility derived from stored preferences."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from sqlalchemy.exc import SQLAlchemyError

from notifier.domain.entities import NotificationPreference
from notifier.domain.errors import PreferenceLookupError
from notifier.infrastructure.repositories import NotificationPreferenceRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Eligibility:
    """Users allowed to receive a notification type on each channel."""

    in_app: list[int] = field(default_factory=list)
    email: list[int] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.in_app and not self.email

    @property
    def recipients(self) -> list[int]:
        """Return ``in_app ∪ email`` preserving first-seen order."""

        return list(dict.fromkeys([*self.in_app, *self.email]))


class PreferenceResolver:
    """Single place where notification preference defaults are applied.

    A stored row is used verbatim. A missing row means in-app delivery only.
    When the preference store cannot be read, every candidate is treated as
    having no stored rows.
    """

    def __init__(self, repository: NotificationPreferenceRepository) -> None:
        self.repository = repository

    def eligible(
        self, tenant_id: int, candidate_user_ids: Sequence[int], notification_type: str
    ) -> Eligibility:
        candidates = list(dict.fromkeys(candidate_user_ids))
        if not candidates:
            return Eligibility()

        stored = self._load(tenant_id, notification_type, candidates)
        in_app: list[int] = []
        email: list[int] = []
        for user_id in candidates:
            preference = stored.get(user_id) or NotificationPreference.default_for(
                tenant_id=tenant_id, user_id=user_id, notification_type=notification_type
            )
            if preference.in_app_enabled:
                in_app.append(user_id)
            if preference.email_enabled:
                email.append(user_id)
        return Eligibility(in_app=in_app, email=email)

    def effective_preferences(
        self, tenant_id: int, user_id: int, notification_types: Iterable[str]
    ) -> list[NotificationPreference]:
        """Return one preference per type, stored values first, defaults otherwise."""

        stored = {
            preference.notification_type: preference
            for preference in self.repository.list_for_user(tenant_id, user_id)
        }
        types = sorted(set(notification_types) | set(stored))
        return [
            stored.get(notification_type)
            or NotificationPreference.default_for(
                tenant_id=tenant_id, user_id=user_id, notification_type=notification_type
            )
            for notification_type in types
        ]

    def _load(
        self, tenant_id: int, notification_type: str, user_ids: list[int]
    ) -> dict[int, NotificationPreference]:
        try:
            rows = self.repository.list_for_users(tenant_id, notification_type, user_ids)
        except (SQLAlchemyError, PreferenceLookupError) as exc:
            logger.warning(
                "Preference lookup failed for tenant %s type %s; using defaults: %s",
                tenant_id,
                notification_type,
                exc,
            )
            self.repository.session.rollback()
            return {}
        return {row.user_id: row for row in rows}


__all__ = ["Eligibility", "PreferenceResolver"]
