"""Use cases for reading email providers."""

from collections.abc import Sequence

from sqlalchemy.orm import Session

from notifier.domain.entities import EmailProviderSetting
from notifier.domain.errors import NotFoundError
from notifier.infrastructure.repositories import EmailProviderRepository


def list_email_providers(session: Session, *, tenant_id: int) -> Sequence[EmailProviderSetting]:
    return EmailProviderRepository(session).list(tenant_id)


def get_email_provider(session: Session, *, tenant_id: int, provider_id: int) -> EmailProviderSetting:
    setting = EmailProviderRepository(session).get(provider_id, tenant_id=tenant_id)
    if setting is None:
        raise NotFoundError("Email provider not found")
    return setting
