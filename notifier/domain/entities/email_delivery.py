"""Domain objects describing outbound email messages and their outcome."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class DeliveryStatus(str, Enum):
    """Lifecycle states of an email delivery attempt."""

    SENT = "sent"
    DELIVERED = "delivered"
    OPENED = "opened"
    CLICKED = "clicked"
    FAILED = "failed"
    BOUNCED = "bounced"


TIMEOUT_ERROR_MESSAGE = "timeout"


@dataclass(frozen=True)
class EmailMessage:
    """Vendor-neutral message handed to a provider adapter."""

    to: str
    subject: str
    text: str | None = None
    html: str | None = None
    from_address: str | None = None
    reply_to: str | None = None
    notification_id: int | None = None


@dataclass(frozen=True)
class DeliveryOutcome:
    """Result reported by a provider adapter for one message."""

    success: bool
    error_message: str | None = None
    provider_message_id: str | None = None

    @classmethod
    def ok(cls, provider_message_id: str | None = None) -> "DeliveryOutcome":
        return cls(success=True, provider_message_id=provider_message_id)

    @classmethod
    def failed(cls, error_message: str) -> "DeliveryOutcome":
        return cls(success=False, error_message=error_message)


@dataclass
class EmailDeliveryLog:
    """Append-only record of a single outbound email attempt."""

    id: int | None
    tenant_id: int
    provider_id: int | None
    recipient_email: str
    subject: str
    status: DeliveryStatus
    notification_id: int | None = None
    provider_message_id: str | None = None
    sent_at: datetime | None = None
    delivered_at: datetime | None = None
    opened_at: datetime | None = None
    clicked_at: datetime | None = None
    error_message: str | None = None
    provider_name: str | None = None


__all__ = [
    "DeliveryOutcome",
    "DeliveryStatus",
    "EmailDeliveryLog",
    "EmailMessage",
    "TIMEOUT_ERROR_MESSAGE",
]
