"""The single write path that turns a request into per-recipient notifications."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from notifier.config import get_settings
from notifier.domain.entities import (
    DeliveryChannel,
    EmailMessage,
    Notification,
    NotificationSeverity,
    User,
)
from notifier.infrastructure.email import render_email_html
from notifier.infrastructure.realtime import NotificationPublisher, notification_publisher
from notifier.infrastructure.repositories import NotificationRepository, UserRepository
from notifier.utils import now_in_app_timezone

from .channel_router import ChannelRouter
from .preferences import PreferenceResolver

logger = logging.getLogger(__name__)

ALL_CHANNELS: frozenset[DeliveryChannel] = frozenset(DeliveryChannel)


@dataclass
class DispatchRequest:
    """Everything needed to fan one rendered notification out to its recipients."""

    tenant_id: int
    recipients: Sequence[int]
    type: str
    title: str
    message_body: str
    severity: NotificationSeverity = NotificationSeverity.INFO
    link_url: str | None = None
    delivery_channels: frozenset[DeliveryChannel] = ALL_CHANNELS
    batch_delivery: bool = False
    created_by: int | None = None
    related_module: str | None = None
    related_entity_id: str | None = None
    template_variables: dict[str, Any] = field(default_factory=dict)

    def to_payload(self) -> dict[str, Any]:
        """Return a JSON-serializable copy used by the delayed dispatch queue."""

        return {
            "tenant_id": self.tenant_id,
            "recipients": [int(user_id) for user_id in self.recipients],
            "type": self.type,
            "title": self.title,
            "message_body": self.message_body,
            "severity": NotificationSeverity(self.severity).value,
            "link_url": self.link_url,
            "delivery_channels": sorted(channel.value for channel in self.delivery_channels),
            "batch_delivery": self.batch_delivery,
            "created_by": self.created_by,
            "related_module": self.related_module,
            "related_entity_id": self.related_entity_id,
            "template_variables": self.template_variables,
        }

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "DispatchRequest":
        return cls(
            tenant_id=int(payload["tenant_id"]),
            recipients=[int(user_id) for user_id in payload.get("recipients", [])],
            type=payload["type"],
            title=payload["title"],
            message_body=payload["message_body"],
            severity=NotificationSeverity(payload.get("severity", NotificationSeverity.INFO.value)),
            link_url=payload.get("link_url"),
            delivery_channels=frozenset(
                DeliveryChannel(channel)
                for channel in payload.get("delivery_channels", [DeliveryChannel.IN_APP.value])
            ),
            batch_delivery=bool(payload.get("batch_delivery", False)),
            created_by=payload.get("created_by"),
            related_module=payload.get("related_module"),
            related_entity_id=payload.get("related_entity_id"),
            template_variables=dict(payload.get("template_variables") or {}),
        )


class DispatchEngine:
    """Persist one notification per eligible recipient, then deliver email.

    Rows for a single call are written in one transaction before any email is
    attempted. Email problems are logged by the router and never affect the
    stored notifications.
    """

    def __init__(
        self,
        notification_repository: NotificationRepository,
        user_repository: UserRepository,
        preference_resolver: PreferenceResolver,
        channel_router: ChannelRouter,
        *,
        publisher: NotificationPublisher | None = None,
        batch_size: int | None = None,
    ) -> None:
        self.notification_repository = notification_repository
        self.user_repository = user_repository
        self.preference_resolver = preference_resolver
        self.channel_router = channel_router
        self.publisher = notification_publisher if publisher is None else publisher
        self.batch_size = batch_size or get_settings().dispatch_batch_size

    def dispatch(self, request: DispatchRequest) -> list[Notification]:
        candidates = list(
            dict.fromkeys(int(user_id) for user_id in request.recipients if user_id is not None)
        )
        candidates = self.user_repository.filter_tenant_ids(request.tenant_id, candidates)
        if not candidates:
            return []

        eligibility = self.preference_resolver.eligible(request.tenant_id, candidates, request.type)
        in_app = eligibility.in_app if DeliveryChannel.IN_APP in request.delivery_channels else []
        email = eligibility.email if DeliveryChannel.EMAIL in request.delivery_channels else []
        targets = list(dict.fromkeys([*in_app, *email]))
        if not targets:
            logger.debug(
                "No eligible recipients for %s in tenant %s", request.type, request.tenant_id
            )
            return []

        created_at = now_in_app_timezone()
        saved = self.notification_repository.create_many(
            [self._build_notification(request, user_id, created_at) for user_id in targets]
        )
        logger.info(
            "Dispatched %s notification(s) of type %s for tenant %s",
            len(saved),
            request.type,
            request.tenant_id,
        )

        self.publisher.dispatch_many(saved)
        if email:
            self._deliver_email(request, saved, set(email))
        return saved

    def _deliver_email(
        self, request: DispatchRequest, notifications: list[Notification], email_user_ids: set[int]
    ) -> None:
        users = self.user_repository.get_map_by_ids(request.tenant_id, sorted(email_user_ids))
        messages = [
            self._build_email(notification, users[notification.user_id])
            for notification in notifications
            if notification.user_id in email_user_ids
            and notification.user_id in users
            and users[notification.user_id].email
        ]
        if not messages:
            return

        chunk_size = self.batch_size if request.batch_delivery else len(messages)
        try:
            for start in range(0, len(messages), chunk_size):
                self.channel_router.send_many(request.tenant_id, messages[start : start + chunk_size])
        except Exception:
            # Rows are already committed; email trouble only reaches the log.
            logger.exception(
                "Email delivery for %s in tenant %s could not be completed",
                request.type,
                request.tenant_id,
            )
            self.notification_repository.session.rollback()

    @staticmethod
    def _build_notification(request: DispatchRequest, user_id: int, created_at) -> Notification:
        return Notification(
            id=None,
            tenant_id=request.tenant_id,
            user_id=user_id,
            title=request.title,
            message_body=request.message_body,
            type=request.type,
            severity=NotificationSeverity(request.severity),
            link_url=request.link_url,
            created_at=created_at,
            created_by=request.created_by,
            related_module=request.related_module,
            related_entity_id=request.related_entity_id,
            template_variables=dict(request.template_variables or {}),
        )

    @staticmethod
    def _build_email(notification: Notification, user: User) -> EmailMessage:
        text = notification.message_body
        if notification.link_url:
            text = f"{text}\n\n{notification.link_url}"
        return EmailMessage(
            to=user.email,
            subject=notification.title,
            text=text,
            html=render_email_html(
                notification.title,
                notification.message_body,
                notification.severity,
                notification.type,
                notification.link_url,
            ),
            notification_id=notification.id,
        )


__all__ = ["ALL_CHANNELS", "DispatchEngine", "DispatchRequest"]
