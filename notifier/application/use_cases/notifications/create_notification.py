"""Use case for dispatching a notification outside of the trigger pipeline."""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy.orm import Session

from notifier.application.notifications import DispatchRequest, build_dispatch_engine
from notifier.domain.entities import (
    NOTIFICATION_TYPES,
    DeliveryChannel,
    Notification,
    NotificationSeverity,
)
from notifier.domain.errors import ValidationError


def create_notification(
    session: Session,
    *,
    tenant_id: int,
    recipients: Iterable[int],
    notification_type: str,
    title: str,
    message_body: str,
    severity: NotificationSeverity = NotificationSeverity.INFO,
    link_url: str | None = None,
    delivery_channels: Iterable[DeliveryChannel] | None = None,
    created_by: int | None = None,
    related_module: str | None = None,
    related_entity_id: str | None = None,
) -> list[Notification]:
    errors: list[str] = []
    recipient_ids = list(recipients)
    if not recipient_ids:
        errors.append("recipients: at least one recipient is required")
    if notification_type not in NOTIFICATION_TYPES:
        errors.append(f"type: unknown notification type {notification_type!r}")
    if not title.strip():
        errors.append("title: must not be empty")
    if not message_body.strip():
        errors.append("messageBody: must not be empty")
    channels = frozenset(delivery_channels) if delivery_channels is not None else None
    if channels is not None and not channels:
        errors.append("deliveryChannels: at least one channel is required")
    if errors:
        raise ValidationError("Invalid notification", errors)

    request = DispatchRequest(
        tenant_id=tenant_id,
        recipients=recipient_ids,
        type=notification_type,
        title=title.strip(),
        message_body=message_body,
        severity=severity,
        link_url=link_url,
        created_by=created_by,
        related_module=related_module,
        related_entity_id=related_entity_id,
    )
    if channels is not None:
        request.delivery_channels = channels
    return build_dispatch_engine(session).dispatch(request)
