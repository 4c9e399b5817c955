"""Use case feeding a domain event to the trigger engine."""

from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from notifier.application.notifications import build_trigger_engine
from notifier.domain.errors import ValidationError


def publish_event(
    session: Session,
    *,
    tenant_id: int,
    module: str,
    event: str,
    payload: dict[str, Any] | None = None,
    actor_id: int | None = None,
) -> None:
    errors = [
        f"{name}: must not be empty" for name, value in (("module", module), ("event", event))
        if not (value or "").strip()
    ]
    if errors:
        raise ValidationError("Invalid event", errors)

    build_trigger_engine(session).on_event(
        tenant_id, module.strip(), event.strip(), payload or {}, actor_id=actor_id
    )
