"""Use case for removing an email provider."""

from sqlalchemy.orm import Session

from notifier.domain.errors import NotFoundError
from notifier.infrastructure.cache import notification_cache
from notifier.infrastructure.repositories import EmailProviderRepository


def delete_email_provider(session: Session, *, tenant_id: int, provider_id: int) -> None:
    if not EmailProviderRepository(session).delete(provider_id, tenant_id=tenant_id):
        raise NotFoundError("Email provider not found")
    notification_cache.invalidate_tenant(tenant_id)
