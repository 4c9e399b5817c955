"""Persistence helpers for delayed dispatch requests."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy.orm import Session

from notifier.domain.entities import ScheduledDispatch
from notifier.infrastructure.models import ScheduledDispatchModel
from notifier.utils import ensure_app_naive_datetime, ensure_app_timezone


class ScheduledDispatchRepository:
    """Queue of dispatch requests waiting for their due time."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def enqueue(self, tenant_id: int, due_at: datetime, payload: dict[str, Any]) -> ScheduledDispatch:
        model = ScheduledDispatchModel(
            tenant_id=tenant_id,
            due_at=ensure_app_naive_datetime(due_at),
            payload=payload,
            attempts=0,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def list_due(self, now: datetime, *, limit: int = 100) -> list[ScheduledDispatch]:
        query = (
            self.session.query(ScheduledDispatchModel)
            .filter(ScheduledDispatchModel.due_at <= ensure_app_naive_datetime(now))
            .order_by(ScheduledDispatchModel.due_at, ScheduledDispatchModel.id)
            .limit(limit)
        )
        return [self._to_entity(model) for model in query.all()]

    def list_pending(self, tenant_id: int) -> list[ScheduledDispatch]:
        query = (
            self.session.query(ScheduledDispatchModel)
            .filter(ScheduledDispatchModel.tenant_id == tenant_id)
            .order_by(ScheduledDispatchModel.due_at, ScheduledDispatchModel.id)
        )
        return [self._to_entity(model) for model in query.all()]

    def delete(self, dispatch_id: int) -> bool:
        model = self.session.get(ScheduledDispatchModel, dispatch_id)
        if model is None:
            return False
        self.session.delete(model)
        self.session.commit()
        return True

    def record_failure(self, dispatch_id: int, error: str) -> None:
        model = self.session.get(ScheduledDispatchModel, dispatch_id)
        if model is None:
            return
        model.attempts = (model.attempts or 0) + 1
        model.last_error = error
        self.session.add(model)
        self.session.commit()

    @staticmethod
    def _to_entity(model: ScheduledDispatchModel) -> ScheduledDispatch:
        return ScheduledDispatch(
            id=model.id,
            tenant_id=model.tenant_id,
            due_at=ensure_app_timezone(model.due_at),
            payload=dict(model.payload or {}),
            attempts=model.attempts or 0,
            last_error=model.last_error,
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["ScheduledDispatchRepository"]
