"""In-process TTL cache for per-tenant lookups on the dispatch hot path."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable, Hashable
from typing import Any, TypeVar

from notifier.config import get_settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


class NotificationCache:
    """Cache active providers and triggers keyed by ``(kind, tenant_id, ...)``.

    Entries expire after ``ttl_seconds``. Writers invalidate the tenant they
    touch; ``clear()`` drops everything.
    """

    def __init__(self, ttl_seconds: float | None = None, clock: Callable[[], float] = time.monotonic) -> None:
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: dict[tuple[Hashable, ...], tuple[float, Any]] = {}
        self._lock = threading.Lock()

    @property
    def ttl_seconds(self) -> float:
        if self._ttl is not None:
            return self._ttl
        return float(get_settings().notification_cache_ttl_seconds)

    def get_or_load(self, key: tuple[Hashable, ...], loader: Callable[[], T]) -> T:
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and entry[0] > now:
                return entry[1]

        value = loader()
        if self.ttl_seconds > 0:
            with self._lock:
                self._entries[key] = (now + self.ttl_seconds, value)
        return value

    def invalidate_tenant(self, tenant_id: int) -> None:
        with self._lock:
            for key in [key for key in self._entries if len(key) > 1 and key[1] == tenant_id]:
                del self._entries[key]

    def clear(self) -> None:
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
        logger.info("Notification cache cleared (%s entries)", count)

    def __len__(self) -> int:
        return len(self._entries)


notification_cache = NotificationCache()


__all__ = ["NotificationCache", "notification_cache"]
