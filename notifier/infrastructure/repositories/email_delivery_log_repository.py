"""Persistence helpers for email delivery logs."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import func
from sqlalchemy.orm import Session

from notifier.domain.entities import DeliveryStatus, EmailDeliveryLog, EmailProvider
from notifier.infrastructure.models import EmailDeliveryLogModel
from notifier.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)


class EmailDeliveryLogRepository:
    """Append-only store of outbound email attempts."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def record_attempt(self, log: EmailDeliveryLog) -> EmailDeliveryLog:
        return self.create_many([log])[0]

    def create_many(self, logs: Sequence[EmailDeliveryLog]) -> list[EmailDeliveryLog]:
        if not logs:
            return []
        models = [self._to_model(log) for log in logs]
        self.session.add_all(models)
        self.session.commit()
        for model in models:
            self.session.refresh(model)
        return [self._to_entity(model) for model in models]

    def list(
        self,
        tenant_id: int,
        *,
        status: str | None = None,
        provider_id: int | None = None,
        offset: int = 0,
        limit: int = 50,
    ) -> tuple[list[EmailDeliveryLog], int]:
        query = self.session.query(EmailDeliveryLogModel).filter(
            EmailDeliveryLogModel.tenant_id == tenant_id
        )
        if status:
            query = query.filter(EmailDeliveryLogModel.status == status)
        if provider_id is not None:
            query = query.filter(EmailDeliveryLogModel.provider_id == provider_id)

        total = query.count()
        models = (
            query.order_by(EmailDeliveryLogModel.sent_at.desc(), EmailDeliveryLogModel.id.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )
        return [self._to_entity(model) for model in models], total

    def count_by_status(self, tenant_id: int) -> dict[str, int]:
        rows = (
            self.session.query(EmailDeliveryLogModel.status, func.count(EmailDeliveryLogModel.id))
            .filter(EmailDeliveryLogModel.tenant_id == tenant_id)
            .group_by(EmailDeliveryLogModel.status)
            .all()
        )
        return {status: count for status, count in rows}

    @staticmethod
    def _to_model(log: EmailDeliveryLog) -> EmailDeliveryLogModel:
        return EmailDeliveryLogModel(
            tenant_id=log.tenant_id,
            provider_id=log.provider_id,
            notification_id=log.notification_id,
            recipient_email=log.recipient_email,
            subject=log.subject,
            status=DeliveryStatus(log.status).value,
            provider_message_id=log.provider_message_id,
            error_message=log.error_message,
            sent_at=ensure_app_naive_datetime(log.sent_at or now_in_app_timezone()),
            delivered_at=ensure_app_naive_datetime(log.delivered_at),
            opened_at=ensure_app_naive_datetime(log.opened_at),
            clicked_at=ensure_app_naive_datetime(log.clicked_at),
        )

    @staticmethod
    def _to_entity(model: EmailDeliveryLogModel) -> EmailDeliveryLog:
        provider = model.provider
        return EmailDeliveryLog(
            id=model.id,
            tenant_id=model.tenant_id,
            provider_id=model.provider_id,
            notification_id=model.notification_id,
            recipient_email=model.recipient_email,
            subject=model.subject,
            status=DeliveryStatus(model.status),
            provider_message_id=model.provider_message_id,
            error_message=model.error_message,
            sent_at=ensure_app_timezone(model.sent_at),
            delivered_at=ensure_app_timezone(model.delivered_at),
            opened_at=ensure_app_timezone(model.opened_at),
            clicked_at=ensure_app_timezone(model.clicked_at),
            provider_name=EmailProvider(provider.provider).value if provider is not None else None,
        )


__all__ = ["EmailDeliveryLogRepository"]
