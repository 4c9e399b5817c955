"""Use case for deleting notification triggers."""

from sqlalchemy.orm import Session

from notifier.domain.errors import NotFoundError
from notifier.infrastructure.cache import notification_cache
from notifier.infrastructure.repositories import NotificationTriggerRepository


def delete_trigger(session: Session, *, tenant_id: int, trigger_id: int) -> None:
    if not NotificationTriggerRepository(session).delete(trigger_id, tenant_id=tenant_id):
        raise NotFoundError("Trigger not found")
    notification_cache.invalidate_tenant(tenant_id)
