"""Persistence helpers for notification preferences."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from sqlalchemy.orm import Session

from notifier.domain.entities import NotificationPreference
from notifier.infrastructure.models import NotificationPreferenceModel
from notifier.utils import ensure_app_timezone


class NotificationPreferenceRepository:
    """Read-mostly store of per-user channel preferences."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_for_users(
        self, tenant_id: int, notification_type: str, user_ids: Iterable[int]
    ) -> list[NotificationPreference]:
        ids = {int(user_id) for user_id in user_ids}
        if not ids:
            return []
        query = (
            self.session.query(NotificationPreferenceModel)
            .filter(NotificationPreferenceModel.tenant_id == tenant_id)
            .filter(NotificationPreferenceModel.notification_type == notification_type)
            .filter(NotificationPreferenceModel.user_id.in_(ids))
        )
        return [self._to_entity(model) for model in query.all()]

    def list_for_user(self, tenant_id: int, user_id: int) -> list[NotificationPreference]:
        query = (
            self.session.query(NotificationPreferenceModel)
            .filter(NotificationPreferenceModel.tenant_id == tenant_id)
            .filter(NotificationPreferenceModel.user_id == user_id)
            .order_by(NotificationPreferenceModel.notification_type)
        )
        return [self._to_entity(model) for model in query.all()]

    def upsert(self, preference: NotificationPreference) -> NotificationPreference:
        model = (
            self.session.query(NotificationPreferenceModel)
            .filter(NotificationPreferenceModel.tenant_id == preference.tenant_id)
            .filter(NotificationPreferenceModel.user_id == preference.user_id)
            .filter(
                NotificationPreferenceModel.notification_type == preference.notification_type
            )
            .first()
        )
        if model is None:
            model = NotificationPreferenceModel(
                tenant_id=preference.tenant_id,
                user_id=preference.user_id,
                notification_type=preference.notification_type,
            )
        self._apply_entity_to_model(model, preference)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def replace_for_user(
        self, tenant_id: int, user_id: int, preferences: Sequence[NotificationPreference]
    ) -> list[NotificationPreference]:
        """Replace every stored preference of the user in one transaction."""

        self.session.query(NotificationPreferenceModel).filter(
            NotificationPreferenceModel.tenant_id == tenant_id,
            NotificationPreferenceModel.user_id == user_id,
        ).delete(synchronize_session=False)

        models: list[NotificationPreferenceModel] = []
        for preference in preferences:
            model = NotificationPreferenceModel(
                tenant_id=tenant_id,
                user_id=user_id,
                notification_type=preference.notification_type,
            )
            self._apply_entity_to_model(model, preference)
            models.append(model)
        self.session.add_all(models)
        self.session.flush()
        saved = [self._to_entity(model) for model in models]
        self.session.commit()
        return saved

    @staticmethod
    def _apply_entity_to_model(
        model: NotificationPreferenceModel, preference: NotificationPreference
    ) -> None:
        model.in_app_enabled = preference.in_app_enabled
        model.email_enabled = preference.email_enabled
        model.digest_frequency = preference.digest_frequency
        model.quiet_hours = preference.quiet_hours
        model.quiet_start = preference.quiet_start
        model.quiet_end = preference.quiet_end

    @staticmethod
    def _to_entity(model: NotificationPreferenceModel) -> NotificationPreference:
        return NotificationPreference(
            id=model.id,
            tenant_id=model.tenant_id,
            user_id=model.user_id,
            notification_type=model.notification_type,
            in_app_enabled=bool(model.in_app_enabled),
            email_enabled=bool(model.email_enabled),
            digest_frequency=model.digest_frequency,
            quiet_hours=bool(model.quiet_hours),
            quiet_start=model.quiet_start,
            quiet_end=model.quiet_end,
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["NotificationPreferenceRepository"]
