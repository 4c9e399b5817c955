"""Pydantic schemas for the HTTP API."""

from .auth import Token
from .common import CamelModel, CountResponse, ErrorResponse
from .email_provider import (
    EmailDeliveryLogRead,
    EmailLogListResponse,
    EmailProviderCreate,
    EmailProviderRead,
    EmailProviderUpdate,
    ProviderTestRequest,
    ProviderTestResponse,
)
from .notification import (
    BulkMarkReadRequest,
    EventPublishRequest,
    NotificationCreate,
    NotificationListResponse,
    NotificationRead,
)
from .preference import PreferenceItem, PreferenceRead, PreferencesUpdate
from .trigger import TriggerCreate, TriggerRead, TriggerUpdate

__all__ = [
    "BulkMarkReadRequest",
    "CamelModel",
    "CountResponse",
    "EmailDeliveryLogRead",
    "EmailLogListResponse",
    "EmailProviderCreate",
    "EmailProviderRead",
    "EmailProviderUpdate",
    "ErrorResponse",
    "EventPublishRequest",
    "NotificationCreate",
    "NotificationListResponse",
    "NotificationRead",
    "PreferenceItem",
    "PreferenceRead",
    "PreferencesUpdate",
    "ProviderTestRequest",
    "ProviderTestResponse",
    "Token",
    "TriggerCreate",
    "TriggerRead",
    "TriggerUpdate",
]
