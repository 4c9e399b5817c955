"""Domain entity for a dispatch deferred by a trigger's delivery delay."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass
class ScheduledDispatch:
    """Serialized dispatch request waiting for ``due_at``."""

    id: int | None
    tenant_id: int
    due_at: datetime
    payload: dict[str, Any] = field(default_factory=dict)
    attempts: int = 0
    last_error: str | None = None
    created_at: datetime | None = None


__all__ = ["ScheduledDispatch"]
