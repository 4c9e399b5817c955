"""Validation helpers for provider settings."""

from notifier.domain.entities import EmailProviderSetting
from notifier.domain.errors import ValidationError
from notifier.infrastructure.email import validate_provider_settings


def ensure_valid_provider(setting: EmailProviderSetting) -> None:
    validation = validate_provider_settings(setting)
    if not validation.is_valid:
        raise ValidationError("Invalid email provider configuration", validation.errors)
