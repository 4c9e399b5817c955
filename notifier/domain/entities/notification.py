"""Domain entity representing a persisted, per-recipient notification."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class NotificationSeverity(str, Enum):
    """Visual and routing weight of a notification."""

    INFO = "INFO"
    SUCCESS = "SUCCESS"
    WARNING = "WARNING"
    CRITICAL = "CRITICAL"


class DeliveryChannel(str, Enum):
    """Surfaces a notification can be delivered through."""

    IN_APP = "in_app"
    EMAIL = "email"


NOTIFICATION_TYPE_MENTION = "MENTION"
NOTIFICATION_TYPE_SYSTEM_MESSAGE = "SYSTEM_MESSAGE"

NOTIFICATION_TYPES: frozenset[str] = frozenset(
    {
        "TASK_ASSIGNMENT",
        "TASK_UPDATE",
        "TASK_COMPLETED",
        "TASK_STATUS_CHANGED",
        "TASK_OVERDUE",
        "TASK_DUE_SOON",
        "CLIENT_CREATED",
        "CLIENT_UPDATED",
        "CLIENT_MESSAGE",
        "CLIENT_DOCUMENT_UPLOADED",
        "ENTITY_CREATED",
        "ENTITY_UPDATED",
        "ENTITY_COMPLIANCE_DUE",
        "INVOICE_CREATED",
        "INVOICE_SENT",
        "INVOICE_PAID",
        "INVOICE_OVERDUE",
        "PAYMENT_RECEIVED",
        "PAYMENT_FAILED",
        "USER_CREATED",
        "PERMISSION_CHANGED",
        "WORKFLOW_APPROVAL",
        "WORKFLOW_COMPLETED",
        "WORKFLOW_FAILED",
        "SYSTEM_ALERT",
        "SYSTEM_MAINTENANCE",
        "REPORT_READY",
        "COMPLIANCE_DEADLINE_APPROACHING",
        "COMPLIANCE_DEADLINE_MISSED",
        NOTIFICATION_TYPE_MENTION,
        NOTIFICATION_TYPE_SYSTEM_MESSAGE,
        "CUSTOM",
    }
)


@dataclass
class Notification:
    """In-app message delivered to a single user of a tenant."""

    id: int | None
    tenant_id: int
    user_id: int
    title: str
    message_body: str
    type: str
    severity: NotificationSeverity = NotificationSeverity.INFO
    link_url: str | None = None
    is_read: bool = False
    read_at: datetime | None = None
    created_at: datetime | None = None
    created_by: int | None = None
    related_module: str | None = None
    related_entity_id: str | None = None
    template_variables: dict[str, Any] = field(default_factory=dict)


__all__ = [
    "DeliveryChannel",
    "NOTIFICATION_TYPES",
    "NOTIFICATION_TYPE_MENTION",
    "NOTIFICATION_TYPE_SYSTEM_MESSAGE",
    "Notification",
    "NotificationSeverity",
]
