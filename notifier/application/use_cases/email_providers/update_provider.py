"""Use case for editing an email provider."""

from dataclasses import replace
from typing import Any

from sqlalchemy.orm import Session

from notifier.domain.entities import SECRET_MASK, EmailProviderSetting
from notifier.domain.errors import NotFoundError, ValidationError
from notifier.infrastructure.cache import notification_cache
from notifier.infrastructure.repositories import EmailProviderRepository
from .validators import ensure_valid_provider

_SECRET_FIELDS = ("api_key", "api_secret")
_PROTECTED_FIELDS = {"id", "tenant_id", "created_at", "updated_at"}
_REQUIRED_FIELDS = {
    "provider": "provider",
    "from_email": "fromEmail",
    "from_name": "fromName",
    "is_active": "isActive",
}


def update_email_provider(
    session: Session, *, tenant_id: int, provider_id: int, changes: dict[str, Any]
) -> EmailProviderSetting:
    """Apply ``changes``; a masked or blank secret keeps the stored value."""

    accepted = {key: value for key, value in changes.items() if key not in _PROTECTED_FIELDS}
    null_errors = [
        f"{alias}: must not be null"
        for key, alias in _REQUIRED_FIELDS.items()
        if key in accepted and accepted[key] is None
    ]
    if null_errors:
        raise ValidationError("Invalid email provider configuration", null_errors)
    for field in _SECRET_FIELDS:
        if accepted.get(field) in (None, "", SECRET_MASK):
            accepted.pop(field, None)
    if "config_data" in accepted and accepted["config_data"] is None:
        accepted["config_data"] = {}

    repository = EmailProviderRepository(session)
    current = repository.get(provider_id, tenant_id=tenant_id)
    if current is None:
        raise NotFoundError("Email provider not found")

    updated = replace(current, **accepted)
    ensure_valid_provider(updated)

    saved = repository.update(updated)
    if saved is None:
        raise NotFoundError("Email provider not found")
    notification_cache.invalidate_tenant(tenant_id)
    return saved
