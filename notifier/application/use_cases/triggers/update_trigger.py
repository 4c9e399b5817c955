"""Use case for updating notification triggers."""

from dataclasses import replace
from typing import Any

from sqlalchemy.orm import Session

from notifier.domain.entities import NotificationTrigger
from notifier.domain.errors import NotFoundError, ValidationError
from notifier.infrastructure.cache import notification_cache
from notifier.infrastructure.repositories import NotificationTriggerRepository
from .validators import validate_trigger

_PROTECTED_FIELDS = {"id", "tenant_id", "created_by", "created_at", "updated_at"}
# Only these may be cleared with an explicit null.
_NULLABLE_FIELDS = {"description", "link_template", "trigger_conditions"}


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def update_trigger(
    session: Session, *, tenant_id: int, trigger_id: int, changes: dict[str, Any]
) -> NotificationTrigger:
    """Apply ``changes`` (entity field names) to an existing trigger."""

    accepted = {key: value for key, value in changes.items() if key not in _PROTECTED_FIELDS}
    null_errors = [
        f"{_camel(key)}: must not be null"
        for key, value in accepted.items()
        if value is None and key not in _NULLABLE_FIELDS
    ]
    if null_errors:
        raise ValidationError("Invalid trigger", null_errors)

    repository = NotificationTriggerRepository(session)
    current = repository.get(trigger_id, tenant_id=tenant_id)
    if current is None:
        raise NotFoundError("Trigger not found")

    updated = replace(current, **accepted)
    validate_trigger(updated)

    saved = repository.update(updated)
    if saved is None:
        raise NotFoundError("Trigger not found")
    notification_cache.invalidate_tenant(tenant_id)
    return saved
