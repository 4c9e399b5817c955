"""Schemas for email provider and delivery log endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import EmailStr, Field

from notifier.domain.entities import DeliveryStatus, EmailProvider

from .common import CamelModel


class EmailProviderCreate(CamelModel):
    provider: EmailProvider
    from_email: str = Field(..., max_length=120)
    from_name: str = Field(..., max_length=120)
    reply_to_email: str | None = Field(default=None, max_length=120)
    api_key: str = Field(..., max_length=500)
    api_secret: str | None = Field(default=None, max_length=500)
    smtp_host: str | None = Field(default=None, max_length=255)
    smtp_port: int | None = Field(default=None, ge=1, le=65535)
    smtp_secure: bool | None = None
    config_data: dict[str, Any] | None = None
    is_active: bool = False


class EmailProviderUpdate(CamelModel):
    provider: EmailProvider | None = None
    from_email: str | None = Field(default=None, max_length=120)
    from_name: str | None = Field(default=None, max_length=120)
    reply_to_email: str | None = Field(default=None, max_length=120)
    api_key: str | None = Field(default=None, max_length=500)
    api_secret: str | None = Field(default=None, max_length=500)
    smtp_host: str | None = Field(default=None, max_length=255)
    smtp_port: int | None = Field(default=None, ge=1, le=65535)
    smtp_secure: bool | None = None
    config_data: dict[str, Any] | None = None
    is_active: bool | None = None


class EmailProviderRead(CamelModel):
    """Provider as returned to clients; secrets are always masked."""

    id: int
    provider: EmailProvider
    from_email: str
    from_name: str
    reply_to_email: str | None = None
    api_key: str
    api_secret: str | None = None
    smtp_host: str | None = None
    smtp_port: int | None = None
    smtp_secure: bool | None = None
    config_data: dict[str, Any] = Field(default_factory=dict)
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProviderTestRequest(CamelModel):
    test_email: EmailStr


class ProviderTestResponse(CamelModel):
    success: bool
    error_message: str | None = None


class EmailDeliveryLogRead(CamelModel):
    id: int
    provider_id: int | None = None
    provider_name: str | None = None
    notification_id: int | None = None
    recipient_email: str
    subject: str
    status: DeliveryStatus
    provider_message_id: str | None = None
    error_message: str | None = None
    sent_at: datetime | None = None
    delivered_at: datetime | None = None
    opened_at: datetime | None = None
    clicked_at: datetime | None = None


class EmailLogListResponse(CamelModel):
    logs: list[EmailDeliveryLogRead]
    total: int
    page: int
    limit: int


__all__ = [
    "EmailDeliveryLogRead",
    "EmailLogListResponse",
    "EmailProviderCreate",
    "EmailProviderRead",
    "EmailProviderUpdate",
    "ProviderTestRequest",
    "ProviderTestResponse",
]
