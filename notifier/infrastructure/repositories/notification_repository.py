"""Persistence helpers for notification entities."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from notifier.domain.entities import Notification, NotificationSeverity
from notifier.domain.errors import PersistenceError
from notifier.infrastructure.models import NotificationModel
from notifier.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)

logger = logging.getLogger(__name__)


class NotificationRepository:
    """Provide tenant-scoped read and write operations for :class:`Notification`."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create_many(self, notifications: Sequence[Notification]) -> list[Notification]:
        """Insert ``notifications`` in a single transaction.

        Either every row is committed or none is; a database failure is
        re-raised as :class:`PersistenceError` after rolling back.
        """

        if not notifications:
            return []

        models = [self._to_model(notification) for notification in notifications]
        try:
            self.session.add_all(models)
            self.session.flush()
            saved = [self._to_entity(model) for model in models]
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error("Failed to persist %s notifications: %s", len(models), exc)
            raise PersistenceError("Could not persist notifications") from exc
        return saved

    def get(self, notification_id: int, *, tenant_id: int, user_id: int) -> Notification | None:
        model = self._get_owned_model(notification_id, tenant_id=tenant_id, user_id=user_id)
        return self._to_entity(model) if model else None

    def list_for_user(
        self,
        tenant_id: int,
        user_id: int,
        *,
        unread_only: bool = False,
        notification_type: str | None = None,
        severity: str | None = None,
        offset: int = 0,
        limit: int = 20,
    ) -> tuple[list[Notification], int]:
        query = self._user_query(tenant_id, user_id)
        if unread_only:
            query = query.filter(NotificationModel.is_read.is_(False))
        if notification_type:
            query = query.filter(NotificationModel.type == notification_type)
        if severity:
            query = query.filter(NotificationModel.severity == severity)

        total = query.count()
        models = (
            query.order_by(NotificationModel.created_at.desc(), NotificationModel.id.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )
        return [self._to_entity(model) for model in models], total

    def count_unread(self, tenant_id: int, user_id: int) -> int:
        return (
            self._user_query(tenant_id, user_id)
            .filter(NotificationModel.is_read.is_(False))
            .count()
        )

    def mark_as_read(self, notification_id: int, *, tenant_id: int, user_id: int) -> bool:
        """Mark one notification as read; return ``False`` when it is not owned by the user."""

        model = self._get_owned_model(notification_id, tenant_id=tenant_id, user_id=user_id)
        if model is None:
            return False
        if not model.is_read:
            model.is_read = True
            model.read_at = ensure_app_naive_datetime(now_in_app_timezone())
            self.session.add(model)
            self.session.commit()
        return True

    def mark_many_as_read(
        self, notification_ids: Iterable[int], *, tenant_id: int, user_id: int
    ) -> int:
        ids = {int(notification_id) for notification_id in notification_ids if notification_id is not None}
        if not ids:
            return 0
        updated = (
            self._user_query(tenant_id, user_id)
            .filter(NotificationModel.id.in_(ids))
            .filter(NotificationModel.is_read.is_(False))
            .update(
                {
                    NotificationModel.is_read: True,
                    NotificationModel.read_at: ensure_app_naive_datetime(now_in_app_timezone()),
                },
                synchronize_session=False,
            )
        )
        self.session.commit()
        return updated

    def mark_all_as_read(self, *, tenant_id: int, user_id: int) -> int:
        updated = (
            self._user_query(tenant_id, user_id)
            .filter(NotificationModel.is_read.is_(False))
            .update(
                {
                    NotificationModel.is_read: True,
                    NotificationModel.read_at: ensure_app_naive_datetime(now_in_app_timezone()),
                },
                synchronize_session=False,
            )
        )
        self.session.commit()
        return updated

    def count_totals(self, tenant_id: int, *, user_id: int | None = None) -> tuple[int, int]:
        """Return ``(total, unread)`` notification counts."""

        query = self._tenant_query(tenant_id, user_id)
        total = query.count()
        unread = query.filter(NotificationModel.is_read.is_(False)).count()
        return total, unread

    def count_by_type(self, tenant_id: int, *, user_id: int | None = None) -> dict[str, int]:
        return self._group_count(NotificationModel.type, tenant_id, user_id)

    def count_by_severity(self, tenant_id: int, *, user_id: int | None = None) -> dict[str, int]:
        return self._group_count(NotificationModel.severity, tenant_id, user_id)

    def _group_count(self, column, tenant_id: int, user_id: int | None) -> dict[str, int]:
        query = self.session.query(column, func.count(NotificationModel.id)).filter(
            NotificationModel.tenant_id == tenant_id
        )
        if user_id is not None:
            query = query.filter(NotificationModel.user_id == user_id)
        return {key: count for key, count in query.group_by(column).all()}

    def _tenant_query(self, tenant_id: int, user_id: int | None = None):
        query = self.session.query(NotificationModel).filter(
            NotificationModel.tenant_id == tenant_id
        )
        if user_id is not None:
            query = query.filter(NotificationModel.user_id == user_id)
        return query

    def _user_query(self, tenant_id: int, user_id: int):
        return self._tenant_query(tenant_id, user_id)

    def _get_owned_model(
        self, notification_id: int, *, tenant_id: int, user_id: int
    ) -> NotificationModel | None:
        return (
            self._user_query(tenant_id, user_id)
            .filter(NotificationModel.id == notification_id)
            .first()
        )

    @staticmethod
    def _to_model(notification: Notification) -> NotificationModel:
        return NotificationModel(
            tenant_id=notification.tenant_id,
            user_id=notification.user_id,
            title=notification.title,
            message_body=notification.message_body,
            link_url=notification.link_url,
            type=notification.type,
            severity=NotificationSeverity(notification.severity).value,
            is_read=notification.is_read,
            read_at=ensure_app_naive_datetime(notification.read_at),
            created_at=ensure_app_naive_datetime(notification.created_at)
            or ensure_app_naive_datetime(now_in_app_timezone()),
            created_by=notification.created_by,
            related_module=notification.related_module,
            related_entity_id=notification.related_entity_id,
            template_variables=notification.template_variables or None,
        )

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            tenant_id=model.tenant_id,
            user_id=model.user_id,
            title=model.title,
            message_body=model.message_body,
            link_url=model.link_url,
            type=model.type,
            severity=NotificationSeverity(model.severity),
            is_read=bool(model.is_read),
            read_at=ensure_app_timezone(model.read_at),
            created_at=ensure_app_timezone(model.created_at),
            created_by=model.created_by,
            related_module=model.related_module,
            related_entity_id=model.related_entity_id,
            template_variables=dict(model.template_variables or {}),
        )


__all__ = ["NotificationRepository"]
