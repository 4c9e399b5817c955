"""Delayed dispatch queue for triggers with a delivery delay."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timedelta

import anyio
from anyio import to_thread
from sqlalchemy.orm import Session

from notifier.domain.entities import ScheduledDispatch
from notifier.infrastructure.repositories import ScheduledDispatchRepository
from notifier.utils import now_in_app_timezone

from .dispatch import DispatchEngine, DispatchRequest

logger = logging.getLogger(__name__)


class DelayedDispatchScheduler:
    """Persist dispatch requests and run them once they are due.

    A queued request is removed only after its dispatch succeeded; a failure
    keeps it for the next poll, so execution is at-least-once and never
    before ``due_at``.
    """

    def __init__(
        self,
        repository: ScheduledDispatchRepository,
        dispatch_engine: DispatchEngine | None = None,
    ) -> None:
        self.repository = repository
        self.dispatch_engine = dispatch_engine

    def schedule(
        self, request: DispatchRequest, delay_minutes: int, *, now: datetime | None = None
    ) -> ScheduledDispatch:
        due_at = (now or now_in_app_timezone()) + timedelta(minutes=delay_minutes)
        scheduled = self.repository.enqueue(request.tenant_id, due_at, request.to_payload())
        logger.info(
            "Scheduled %s dispatch for tenant %s at %s",
            request.type,
            request.tenant_id,
            due_at.isoformat(),
        )
        return scheduled

    def run_due(self, now: datetime | None = None) -> int:
        """Dispatch every queued request due at ``now``; return how many succeeded."""

        if self.dispatch_engine is None:
            raise RuntimeError("A dispatch engine is required to run scheduled dispatches")

        completed = 0
        for item in self.repository.list_due(now or now_in_app_timezone()):
            try:
                self.dispatch_engine.dispatch(DispatchRequest.from_payload(item.payload))
            except Exception as exc:
                self.repository.session.rollback()
                logger.exception("Scheduled dispatch %s failed", item.id)
                self.repository.record_failure(item.id, str(exc) or exc.__class__.__name__)
                continue
            self.repository.delete(item.id)
            completed += 1
        return completed


def run_scheduler_once(session_factory: Callable[[], Session]) -> int:
    from .factory import build_scheduler

    session = session_factory()
    try:
        return build_scheduler(session).run_due()
    finally:
        session.close()


async def run_scheduler_forever(
    session_factory: Callable[[], Session], poll_seconds: float
) -> None:
    """Poll the queue until cancelled; used by the application lifespan."""

    logger.info("Delayed dispatch poller started (every %ss)", poll_seconds)
    while True:
        try:
            completed = await to_thread.run_sync(run_scheduler_once, session_factory)
        except Exception:
            logger.exception("Delayed dispatch poll failed")
        else:
            if completed:
                logger.info("Delayed dispatch poll completed %s request(s)", completed)
        await anyio.sleep(poll_seconds)


__all__ = ["DelayedDispatchScheduler", "run_scheduler_forever", "run_scheduler_once"]
