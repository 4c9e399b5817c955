"""Persistence helpers for tenant email provider settings."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from notifier.domain.entities import EmailProvider, EmailProviderSetting
from notifier.domain.errors import PersistenceError
from notifier.infrastructure.models import EmailDeliveryLogModel, EmailProviderSettingModel
from notifier.utils import ensure_app_timezone

logger = logging.getLogger(__name__)


class EmailProviderRepository:
    """Provide CRUD operations for :class:`EmailProviderSetting` objects.

    At most one row per tenant is active. Every write that activates a row
    clears the flag on its siblings inside the same commit.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def list(self, tenant_id: int) -> Sequence[EmailProviderSetting]:
        query = (
            self.session.query(EmailProviderSettingModel)
            .filter(EmailProviderSettingModel.tenant_id == tenant_id)
            .order_by(EmailProviderSettingModel.id)
        )
        return [self._to_entity(model) for model in query.all()]

    def get(self, provider_id: int, *, tenant_id: int) -> EmailProviderSetting | None:
        model = self._get_model(provider_id, tenant_id=tenant_id)
        return self._to_entity(model) if model else None

    def get_active(self, tenant_id: int) -> EmailProviderSetting | None:
        model = (
            self.session.query(EmailProviderSettingModel)
            .filter(EmailProviderSettingModel.tenant_id == tenant_id)
            .filter(EmailProviderSettingModel.is_active.is_(True))
            .order_by(EmailProviderSettingModel.updated_at.desc())
            .first()
        )
        return self._to_entity(model) if model else None

    def create(self, setting: EmailProviderSetting) -> EmailProviderSetting:
        model = EmailProviderSettingModel(tenant_id=setting.tenant_id)
        self._apply_entity_to_model(model, setting)
        self.session.add(model)
        self.session.flush()
        if model.is_active:
            self._deactivate_siblings(setting.tenant_id, model.id)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, setting: EmailProviderSetting) -> EmailProviderSetting | None:
        if setting.id is None:
            raise ValueError("Provider id is required for updates")
        model = self._get_model(setting.id, tenant_id=setting.tenant_id)
        if model is None:
            return None
        self._apply_entity_to_model(model, setting)
        if model.is_active:
            self._deactivate_siblings(setting.tenant_id, model.id)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def activate(self, provider_id: int, *, tenant_id: int) -> EmailProviderSetting | None:
        """Make ``provider_id`` the tenant's only active provider."""

        model = self._get_model(provider_id, tenant_id=tenant_id)
        if model is None:
            return None
        self._deactivate_siblings(tenant_id, model.id)
        model.is_active = True
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete(self, provider_id: int, *, tenant_id: int) -> bool:
        """Remove the provider; its delivery logs stay, detached from it."""

        model = self._get_model(provider_id, tenant_id=tenant_id)
        if model is None:
            return False
        try:
            self.session.query(EmailDeliveryLogModel).filter(
                EmailDeliveryLogModel.tenant_id == tenant_id,
                EmailDeliveryLogModel.provider_id == model.id,
            ).update({EmailDeliveryLogModel.provider_id: None}, synchronize_session=False)
            self.session.delete(model)
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error("Failed to delete email provider %s: %s", provider_id, exc)
            raise PersistenceError("Could not delete email provider") from exc
        return True

    def _deactivate_siblings(self, tenant_id: int, keep_id: int) -> None:
        self.session.query(EmailProviderSettingModel).filter(
            EmailProviderSettingModel.tenant_id == tenant_id,
            EmailProviderSettingModel.id != keep_id,
            EmailProviderSettingModel.is_active.is_(True),
        ).update({EmailProviderSettingModel.is_active: False}, synchronize_session=False)

    def _get_model(self, provider_id: int, *, tenant_id: int) -> EmailProviderSettingModel | None:
        return (
            self.session.query(EmailProviderSettingModel)
            .filter(EmailProviderSettingModel.id == provider_id)
            .filter(EmailProviderSettingModel.tenant_id == tenant_id)
            .first()
        )

    @staticmethod
    def _apply_entity_to_model(
        model: EmailProviderSettingModel, setting: EmailProviderSetting
    ) -> None:
        model.provider = EmailProvider(setting.provider).value
        model.from_email = setting.from_email
        model.from_name = setting.from_name
        model.reply_to_email = setting.reply_to_email
        model.api_key = setting.api_key
        model.api_secret = setting.api_secret
        model.smtp_host = setting.smtp_host
        model.smtp_port = setting.smtp_port
        model.smtp_secure = setting.smtp_secure
        model.config_data = dict(setting.config_data or {}) or None
        model.is_active = setting.is_active

    @staticmethod
    def _to_entity(model: EmailProviderSettingModel) -> EmailProviderSetting:
        return EmailProviderSetting(
            id=model.id,
            tenant_id=model.tenant_id,
            provider=EmailProvider(model.provider),
            from_email=model.from_email,
            from_name=model.from_name,
            reply_to_email=model.reply_to_email,
            api_key=model.api_key,
            api_secret=model.api_secret,
            smtp_host=model.smtp_host,
            smtp_port=model.smtp_port,
            smtp_secure=model.smtp_secure,
            config_data=dict(model.config_data or {}),
            is_active=bool(model.is_active),
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["EmailProviderRepository"]
