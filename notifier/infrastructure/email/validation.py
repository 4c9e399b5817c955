"""Static checks applied to provider settings before they are stored."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from notifier.domain.entities import EmailProvider, EmailProviderSetting

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


@dataclass(frozen=True)
class ProviderValidation:
    is_valid: bool
    errors: list[str] = field(default_factory=list)


def validate_provider_settings(settings: EmailProviderSetting) -> ProviderValidation:
    errors: list[str] = []

    if not settings.from_email or not _EMAIL_PATTERN.match(settings.from_email.strip()):
        errors.append("Valid from email is required")
    if not (settings.from_name or "").strip():
        errors.append("From name is required")
    if not (settings.api_key or "").strip():
        errors.append("API key is required")

    provider = EmailProvider(settings.provider)
    if provider is EmailProvider.SMTP:
        if not (settings.smtp_host or "").strip():
            errors.append("SMTP host is required")
        if not settings.smtp_port:
            errors.append("SMTP port is required")
    elif provider is EmailProvider.MAILGUN:
        config = settings.config_data
        if not isinstance(config, dict) or not config:
            errors.append("Mailgun domain configuration is required")
        elif not str(config.get("domain") or "").strip():
            errors.append("Mailgun domain is required in configuration")

    return ProviderValidation(is_valid=not errors, errors=errors)


__all__ = ["ProviderValidation", "validate_provider_settings"]
