"""Route outbound email through the tenant's active provider."""

from __future__ import annotations

import logging
import time
from collections import deque
from collections.abc import Mapping, Sequence
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait

from notifier.config import get_settings
from notifier.domain.entities import (
    TIMEOUT_ERROR_MESSAGE,
    DeliveryOutcome,
    DeliveryStatus,
    EmailDeliveryLog,
    EmailMessage,
    EmailProvider,
    EmailProviderSetting,
)
from notifier.domain.errors import ProviderSendError
from notifier.infrastructure.cache import NotificationCache, notification_cache
from notifier.infrastructure.email import DEFAULT_ADAPTERS, EmailAdapter, get_adapter
from notifier.infrastructure.repositories import (
    EmailDeliveryLogRepository,
    EmailProviderRepository,
)
from notifier.utils import now_in_app_timezone

logger = logging.getLogger(__name__)

ACTIVE_PROVIDER_CACHE_KEY = "active_email_provider"


class ChannelRouter:
    """Send email through the tenant's single active provider and log each attempt.

    When the tenant has no active provider the email channel is silently
    skipped and nothing is logged. Otherwise every attempt produces exactly
    one :class:`EmailDeliveryLog` row with status ``sent`` or ``failed``.
    Adapters run on worker threads and never see the database session; the
    log rows are written by the calling thread once all sends have settled.
    """

    def __init__(
        self,
        provider_repository: EmailProviderRepository,
        log_repository: EmailDeliveryLogRepository,
        *,
        adapters: Mapping[EmailProvider, EmailAdapter] | None = None,
        cache: NotificationCache | None = None,
        timeout_seconds: float | None = None,
        max_workers: int | None = None,
    ) -> None:
        settings = get_settings()
        self.provider_repository = provider_repository
        self.log_repository = log_repository
        self.adapters = DEFAULT_ADAPTERS if adapters is None else adapters
        self.cache = notification_cache if cache is None else cache
        self.timeout_seconds = timeout_seconds or settings.email_send_timeout_seconds
        self.max_workers = max_workers or settings.email_max_workers

    def active_provider(self, tenant_id: int) -> EmailProviderSetting | None:
        return self.cache.get_or_load(
            (ACTIVE_PROVIDER_CACHE_KEY, tenant_id),
            lambda: self.provider_repository.get_active(tenant_id),
        )

    def send_email(
        self,
        tenant_id: int,
        message: EmailMessage,
        provider: EmailProviderSetting | None = None,
    ) -> EmailDeliveryLog | None:
        """Send a single message; ``provider`` overrides the active one."""

        logs = self.send_many(tenant_id, [message], provider=provider)
        return logs[0] if logs else None

    def send_many(
        self,
        tenant_id: int,
        messages: Sequence[EmailMessage],
        provider: EmailProviderSetting | None = None,
    ) -> list[EmailDeliveryLog]:
        if not messages:
            return []

        settings = provider or self.active_provider(tenant_id)
        if settings is None:
            logger.debug("Tenant %s has no active email provider; email channel skipped", tenant_id)
            return []

        adapter = get_adapter(settings.provider, self.adapters)
        outcomes = self._send_parallel(adapter, settings, messages)

        sent_at = now_in_app_timezone()
        logs = [
            EmailDeliveryLog(
                id=None,
                tenant_id=tenant_id,
                provider_id=settings.id,
                notification_id=message.notification_id,
                recipient_email=message.to,
                subject=message.subject,
                status=DeliveryStatus.SENT if outcome.success else DeliveryStatus.FAILED,
                provider_message_id=outcome.provider_message_id,
                error_message=outcome.error_message,
                sent_at=sent_at,
            )
            for message, outcome in zip(messages, outcomes)
        ]
        saved = self.log_repository.create_many(logs)

        failures = sum(1 for outcome in outcomes if not outcome.success)
        logger.info(
            "Email fan-out for tenant %s via %s: %s sent, %s failed",
            tenant_id,
            settings.provider.value,
            len(outcomes) - failures,
            failures,
        )
        return saved

    def _send_parallel(
        self,
        adapter: EmailAdapter,
        settings: EmailProviderSetting,
        messages: Sequence[EmailMessage],
    ) -> list[DeliveryOutcome]:
        """Run at most ``max_workers`` sends at once, each bounded by its own timeout.

        A send is abandoned once ``timeout_seconds`` have passed since it was
        submitted. Its thread keeps running, so the pool may grow past
        ``max_workers`` to let the remaining messages start on time.
        """

        workers = max(1, min(self.max_workers, len(messages)))
        queue = deque(enumerate(messages))
        outcomes: list[DeliveryOutcome | None] = [None] * len(messages)
        in_flight: dict[Future[DeliveryOutcome], tuple[int, float]] = {}

        executor = ThreadPoolExecutor(max_workers=len(messages), thread_name_prefix="email-send")
        try:
            while queue or in_flight:
                while queue and len(in_flight) < workers:
                    index, message = queue.popleft()
                    future = executor.submit(_attempt, adapter, settings, message)
                    in_flight[future] = (index, time.monotonic() + self.timeout_seconds)

                next_deadline = min(deadline for _, deadline in in_flight.values())
                done, _ = wait(
                    in_flight,
                    timeout=max(0.0, next_deadline - time.monotonic()),
                    return_when=FIRST_COMPLETED,
                )
                for future in done:
                    index, _ = in_flight.pop(future)
                    outcomes[index] = future.result()

                now = time.monotonic()
                for future, (index, deadline) in list(in_flight.items()):
                    if deadline <= now and not future.done():
                        del in_flight[future]
                        future.cancel()
                        logger.warning("Email send via %s timed out", settings.provider.value)
                        outcomes[index] = DeliveryOutcome.failed(TIMEOUT_ERROR_MESSAGE)
        finally:
            # Timed-out sends keep their thread; do not wait for them.
            executor.shutdown(wait=False, cancel_futures=True)
        return outcomes


def _attempt(
    adapter: EmailAdapter, settings: EmailProviderSetting, message: EmailMessage
) -> DeliveryOutcome:
    try:
        return adapter.send(settings, message)
    except ProviderSendError as exc:
        return DeliveryOutcome.failed(str(exc))
    except Exception as exc:
        error = ProviderSendError(f"{settings.provider.value} adapter error: {exc}")
        logger.exception("Unexpected failure in %s adapter", settings.provider.value)
        return DeliveryOutcome.failed(str(error))


__all__ = ["ACTIVE_PROVIDER_CACHE_KEY", "ChannelRouter"]
