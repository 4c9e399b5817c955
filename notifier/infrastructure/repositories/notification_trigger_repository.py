"""Persistence helpers for notification triggers."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from notifier.domain.entities import (
    DeliveryChannel,
    NotificationSeverity,
    NotificationTrigger,
    RecipientType,
)
from notifier.infrastructure.models import NotificationTriggerModel
from notifier.utils import ensure_app_timezone


class NotificationTriggerRepository:
    """Provide CRUD operations for :class:`NotificationTrigger` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list(self, tenant_id: int) -> Sequence[NotificationTrigger]:
        query = (
            self.session.query(NotificationTriggerModel)
            .filter(NotificationTriggerModel.tenant_id == tenant_id)
            .order_by(NotificationTriggerModel.created_at.desc(), NotificationTriggerModel.id.desc())
        )
        return [self._to_entity(model) for model in query.all()]

    def list_active(self, tenant_id: int) -> list[NotificationTrigger]:
        query = (
            self.session.query(NotificationTriggerModel)
            .filter(NotificationTriggerModel.tenant_id == tenant_id)
            .filter(NotificationTriggerModel.is_active.is_(True))
            .order_by(NotificationTriggerModel.id)
        )
        return [self._to_entity(model) for model in query.all()]

    def get(self, trigger_id: int, *, tenant_id: int) -> NotificationTrigger | None:
        model = self._get_model(trigger_id, tenant_id=tenant_id)
        return self._to_entity(model) if model else None

    def create(self, trigger: NotificationTrigger) -> NotificationTrigger:
        model = NotificationTriggerModel(tenant_id=trigger.tenant_id, created_by=trigger.created_by)
        self._apply_entity_to_model(model, trigger)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, trigger: NotificationTrigger) -> NotificationTrigger | None:
        if trigger.id is None:
            raise ValueError("Trigger id is required for updates")
        model = self._get_model(trigger.id, tenant_id=trigger.tenant_id)
        if model is None:
            return None
        self._apply_entity_to_model(model, trigger)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete(self, trigger_id: int, *, tenant_id: int) -> bool:
        model = self._get_model(trigger_id, tenant_id=tenant_id)
        if model is None:
            return False
        self.session.delete(model)
        self.session.commit()
        return True

    def _get_model(self, trigger_id: int, *, tenant_id: int) -> NotificationTriggerModel | None:
        return (
            self.session.query(NotificationTriggerModel)
            .filter(NotificationTriggerModel.id == trigger_id)
            .filter(NotificationTriggerModel.tenant_id == tenant_id)
            .first()
        )

    @staticmethod
    def _apply_entity_to_model(model: NotificationTriggerModel, trigger: NotificationTrigger) -> None:
        model.trigger_name = trigger.trigger_name
        model.description = trigger.description
        model.trigger_module = trigger.trigger_module
        model.trigger_event = trigger.trigger_event
        model.trigger_conditions = trigger.trigger_conditions
        model.notification_type = trigger.notification_type
        model.severity = NotificationSeverity(trigger.severity).value
        model.title_template = trigger.title_template
        model.message_template = trigger.message_template
        model.link_template = trigger.link_template
        model.recipient_type = RecipientType(trigger.recipient_type).value
        model.recipient_config = dict(trigger.recipient_config or {})
        model.delivery_channels = sorted(
            DeliveryChannel(channel).value for channel in trigger.delivery_channels
        )
        model.delivery_delay = trigger.delivery_delay
        model.batch_delivery = trigger.batch_delivery
        model.template_constants = dict(trigger.template_constants or {}) or None
        model.is_active = trigger.is_active

    @staticmethod
    def _to_entity(model: NotificationTriggerModel) -> NotificationTrigger:
        return NotificationTrigger(
            id=model.id,
            tenant_id=model.tenant_id,
            trigger_name=model.trigger_name,
            description=model.description,
            trigger_module=model.trigger_module,
            trigger_event=model.trigger_event,
            trigger_conditions=model.trigger_conditions,
            notification_type=model.notification_type,
            severity=NotificationSeverity(model.severity),
            title_template=model.title_template,
            message_template=model.message_template,
            link_template=model.link_template,
            recipient_type=RecipientType(model.recipient_type),
            recipient_config=dict(model.recipient_config or {}),
            delivery_channels=frozenset(
                DeliveryChannel(channel) for channel in (model.delivery_channels or [])
            ),
            delivery_delay=model.delivery_delay or 0,
            batch_delivery=bool(model.batch_delivery),
            template_constants=dict(model.template_constants or {}),
            is_active=bool(model.is_active),
            created_by=model.created_by,
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["NotificationTriggerRepository"]
