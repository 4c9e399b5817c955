"""Use case for storing a new email provider."""

from sqlalchemy.orm import Session

from notifier.domain.entities import EmailProviderSetting
from notifier.infrastructure.cache import notification_cache
from notifier.infrastructure.repositories import EmailProviderRepository
from .validators import ensure_valid_provider


def create_email_provider(session: Session, *, setting: EmailProviderSetting) -> EmailProviderSetting:
    """Validate and persist ``setting``; an active one replaces the current active provider."""

    ensure_valid_provider(setting)
    saved = EmailProviderRepository(session).create(setting)
    notification_cache.invalidate_tenant(setting.tenant_id)
    return saved
