"""Domain entity for administrator-defined event-to-notification rules."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from .notification import DeliveryChannel, NotificationSeverity


class RecipientType(str, Enum):
    """Strategies used to compute who receives a triggered notification."""

    ALL_USERS = "all_users"
    SPECIFIC_USERS = "specific_users"
    ROLE_BASED = "role_based"
    DEPARTMENT_BASED = "department_based"
    CONDITIONAL = "conditional"


@dataclass
class NotificationTrigger:
    """Rule mapping ``(trigger_module, trigger_event)`` to a templated notification."""

    id: int | None
    tenant_id: int
    trigger_name: str
    trigger_module: str
    trigger_event: str
    notification_type: str
    title_template: str
    message_template: str
    recipient_type: RecipientType
    created_by: int
    severity: NotificationSeverity = NotificationSeverity.INFO
    description: str | None = None
    link_template: str | None = None
    recipient_config: dict[str, Any] = field(default_factory=dict)
    delivery_channels: frozenset[DeliveryChannel] = frozenset({DeliveryChannel.IN_APP})
    delivery_delay: int = 0
    batch_delivery: bool = False
    trigger_conditions: dict[str, Any] | None = None
    template_constants: dict[str, Any] = field(default_factory=dict)
    is_active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None


__all__ = ["NotificationTrigger", "RecipientType"]
