"""Schemas for notification trigger endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import Field, field_validator

from notifier.domain.entities import DeliveryChannel, NotificationSeverity, RecipientType

from .common import CamelModel


class TriggerBase(CamelModel):
    trigger_name: str = Field(..., min_length=1, max_length=120)
    description: str | None = None
    trigger_module: str = Field(..., min_length=1, max_length=60)
    trigger_event: str = Field(..., min_length=1, max_length=60)
    trigger_conditions: dict[str, Any] | None = None
    notification_type: str = Field(..., min_length=1, max_length=60)
    severity: NotificationSeverity = NotificationSeverity.INFO
    title_template: str = Field(..., min_length=1)
    message_template: str = Field(..., min_length=1)
    link_template: str | None = None
    recipient_type: RecipientType
    recipient_config: dict[str, Any] = Field(default_factory=dict)
    delivery_channels: list[DeliveryChannel] = Field(
        default_factory=lambda: [DeliveryChannel.IN_APP], min_length=1
    )
    delivery_delay: int = Field(default=0, ge=0)
    batch_delivery: bool = False
    template_constants: dict[str, Any] = Field(default_factory=dict)
    is_active: bool = True


class TriggerCreate(TriggerBase):
    """Payload required to create a trigger."""


class TriggerUpdate(CamelModel):
    trigger_name: str | None = Field(default=None, min_length=1, max_length=120)
    description: str | None = None
    trigger_module: str | None = Field(default=None, min_length=1, max_length=60)
    trigger_event: str | None = Field(default=None, min_length=1, max_length=60)
    trigger_conditions: dict[str, Any] | None = None
    notification_type: str | None = Field(default=None, min_length=1, max_length=60)
    severity: NotificationSeverity | None = None
    title_template: str | None = Field(default=None, min_length=1)
    message_template: str | None = Field(default=None, min_length=1)
    link_template: str | None = None
    recipient_type: RecipientType | None = None
    recipient_config: dict[str, Any] | None = None
    delivery_channels: list[DeliveryChannel] | None = Field(default=None, min_length=1)
    delivery_delay: int | None = Field(default=None, ge=0)
    batch_delivery: bool | None = None
    template_constants: dict[str, Any] | None = None
    is_active: bool | None = None


class TriggerRead(TriggerBase):
    id: int
    created_by: int
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("delivery_channels", mode="before")
    @classmethod
    def _sorted_channels(cls, value: Any) -> Any:
        if isinstance(value, (set, frozenset)):
            return sorted(value, key=lambda channel: DeliveryChannel(channel).value)
        return value


__all__ = ["TriggerCreate", "TriggerRead", "TriggerUpdate"]
