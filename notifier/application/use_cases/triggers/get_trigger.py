"""Use cases for reading notification triggers."""

from collections.abc import Sequence

from sqlalchemy.orm import Session

from notifier.domain.entities import NotificationTrigger
from notifier.domain.errors import NotFoundError
from notifier.infrastructure.repositories import NotificationTriggerRepository


def list_triggers(session: Session, *, tenant_id: int) -> Sequence[NotificationTrigger]:
    return NotificationTriggerRepository(session).list(tenant_id)


def get_trigger(session: Session, *, tenant_id: int, trigger_id: int) -> NotificationTrigger:
    trigger = NotificationTriggerRepository(session).get(trigger_id, tenant_id=tenant_id)
    if trigger is None:
        raise NotFoundError("Trigger not found")
    return trigger
