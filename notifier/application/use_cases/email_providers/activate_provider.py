"""Use case for switching the tenant's active email provider."""

from sqlalchemy.orm import Session

from notifier.domain.entities import EmailProviderSetting
from notifier.domain.errors import NotFoundError
from notifier.infrastructure.cache import notification_cache
from notifier.infrastructure.repositories import EmailProviderRepository
from .validators import ensure_valid_provider


def activate_email_provider(
    session: Session, *, tenant_id: int, provider_id: int
) -> EmailProviderSetting:
    repository = EmailProviderRepository(session)
    current = repository.get(provider_id, tenant_id=tenant_id)
    if current is None:
        raise NotFoundError("Email provider not found")
    ensure_valid_provider(current)

    activated = repository.activate(provider_id, tenant_id=tenant_id)
    if activated is None:
        raise NotFoundError("Email provider not found")
    notification_cache.invalidate_tenant(tenant_id)
    return activated
