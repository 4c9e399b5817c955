"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import Field

from notifier.domain.entities import DeliveryChannel, NotificationSeverity

from .common import CamelModel


class NotificationRead(CamelModel):
    """Representation of a notification delivered to the client."""

    id: int
    user_id: int
    title: str
    message_body: str
    link_url: str | None = None
    type: str
    severity: NotificationSeverity
    is_read: bool
    read_at: datetime | None = None
    created_at: datetime | None = None
    created_by: int | None = None
    related_module: str | None = None
    related_entity_id: str | None = None


class NotificationListResponse(CamelModel):
    notifications: list[NotificationRead]
    total: int
    unread_count: int
    page: int
    limit: int


class NotificationCreate(CamelModel):
    """Payload used by workflows to dispatch a notification directly."""

    recipients: list[int] = Field(..., min_length=1)
    type: str = Field(..., min_length=1, max_length=60)
    title: str = Field(..., min_length=1, max_length=255)
    message_body: str = Field(..., min_length=1)
    severity: NotificationSeverity = NotificationSeverity.INFO
    link_url: str | None = Field(default=None, max_length=500)
    delivery_channels: list[DeliveryChannel] | None = None
    related_module: str | None = Field(default=None, max_length=60)
    related_entity_id: str | None = Field(default=None, max_length=100)


class BulkMarkReadRequest(CamelModel):
    """Payload used to mark a batch of notifications as read."""

    notification_ids: list[int] = Field(..., min_length=1)

    def unique_ids(self) -> list[int]:
        return list(dict.fromkeys(self.notification_ids))


class EventPublishRequest(CamelModel):
    module: str = Field(..., min_length=1)
    event: str = Field(..., min_length=1)
    payload: dict[str, Any] = Field(default_factory=dict)


__all__ = [
    "BulkMarkReadRequest",
    "EventPublishRequest",
    "NotificationCreate",
    "NotificationListResponse",
    "NotificationRead",
]
