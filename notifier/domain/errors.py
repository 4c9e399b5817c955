"""Error taxonomy shared by the notification engines and the API layer."""

from __future__ import annotations

from collections.abc import Sequence


class NotificationError(Exception):
    """Base class for notification subsystem failures."""


class ValidationError(NotificationError, ValueError):
    """Raised when a provider configuration or payload is malformed."""

    def __init__(self, message: str, errors: Sequence[str] | None = None) -> None:
        super().__init__(message)
        self.errors = list(errors or [])


class NotFoundError(NotificationError, LookupError):
    """Raised when a tenant-scoped record does not exist."""


class PreferenceLookupError(NotificationError):
    """Raised when stored preferences cannot be read."""


class RecipientResolutionError(NotificationError):
    """Raised when a trigger's recipient rule cannot be resolved."""


class ProviderSendError(NotificationError):
    """Raised by a provider adapter when the vendor rejects a message."""


class PersistenceError(NotificationError):
    """Raised when notification rows cannot be written."""


__all__ = [
    "NotFoundError",
    "NotificationError",
    "PersistenceError",
    "PreferenceLookupError",
    "ProviderSendError",
    "RecipientResolutionError",
    "ValidationError",
]
