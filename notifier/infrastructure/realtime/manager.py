"""Tenant-scoped registry of open notification websockets."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any

from fastapi import WebSocket

logger = logging.getLogger(__name__)

SubscriberKey = tuple[int, int]


class NotificationConnectionManager:
    """Track the sockets of each ``(tenant_id, user_id)`` subscriber.

    A user may hold several sockets (one per browser tab); a push goes to all
    of them. Sockets that fail on send are dropped from the registry.
    """

    def __init__(self) -> None:
        self._subscribers: defaultdict[SubscriberKey, set[WebSocket]] = defaultdict(set)

    async def connect(self, tenant_id: int, user_id: int, websocket: WebSocket) -> None:
        await websocket.accept()
        self._subscribers[(tenant_id, user_id)].add(websocket)
        logger.debug("Realtime subscriber %s/%s connected", tenant_id, user_id)

    def disconnect(self, tenant_id: int, user_id: int, websocket: WebSocket) -> None:
        key = (tenant_id, user_id)
        sockets = self._subscribers.get(key)
        if sockets is None:
            return
        sockets.discard(websocket)
        if not sockets:
            del self._subscribers[key]
            logger.debug("Realtime subscriber %s/%s has no open sockets", tenant_id, user_id)

    def is_connected(self, tenant_id: int, user_id: int) -> bool:
        return bool(self._subscribers.get((tenant_id, user_id)))

    async def send_to_user(self, tenant_id: int, user_id: int, message: dict[str, Any]) -> int:
        """Push ``message`` to every socket of the subscriber; return how many got it."""

        delivered = 0
        for websocket in list(self._subscribers.get((tenant_id, user_id), ())):
            try:
                await websocket.send_json(message)
            except Exception as exc:
                logger.debug(
                    "Dropping socket of subscriber %s/%s after failed push: %s",
                    tenant_id,
                    user_id,
                    exc,
                )
                self.disconnect(tenant_id, user_id, websocket)
            else:
                delivered += 1
        return delivered


notification_manager = NotificationConnectionManager()


__all__ = ["NotificationConnectionManager", "SubscriberKey", "notification_manager"]
