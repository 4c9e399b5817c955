"""Use case for creating notification triggers."""

from sqlalchemy.orm import Session

from notifier.domain.entities import NotificationTrigger
from notifier.infrastructure.cache import notification_cache
from notifier.infrastructure.repositories import NotificationTriggerRepository
from .validators import validate_trigger


def create_trigger(session: Session, *, trigger: NotificationTrigger) -> NotificationTrigger:
    """Validate and store a new trigger."""

    validate_trigger(trigger)
    saved = NotificationTriggerRepository(session).create(trigger)
    notification_cache.invalidate_tenant(trigger.tenant_id)
    return saved
