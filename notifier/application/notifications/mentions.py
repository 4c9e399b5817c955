"""``@username`` mentions inside free text."""

from __future__ import annotations

import logging
import re

from notifier.domain.entities import NOTIFICATION_TYPE_MENTION, Notification
from notifier.infrastructure.repositories import UserRepository

from .dispatch import DispatchEngine, DispatchRequest

logger = logging.getLogger(__name__)

MENTION_PATTERN = re.compile(r"(?<![\w.])@(\w+)")


def extract_mentions(text: str | None) -> list[str]:
    """Return mentioned names in first-seen order, compared case-insensitively."""

    seen: dict[str, str] = {}
    for name in MENTION_PATTERN.findall(text or ""):
        seen.setdefault(name.lower(), name)
    return list(seen.values())


class MentionNotifier:
    """Dispatch ``MENTION`` notifications to users named in a text."""

    def __init__(self, user_repository: UserRepository, dispatch_engine: DispatchEngine) -> None:
        self.user_repository = user_repository
        self.dispatch_engine = dispatch_engine

    def notify_mentions(
        self,
        tenant_id: int,
        text: str,
        *,
        author_id: int | None = None,
        context: str = "a comment",
        link_url: str | None = None,
        related_module: str | None = None,
        related_entity_id: str | None = None,
    ) -> list[Notification]:
        names = extract_mentions(text)
        if not names:
            return []

        users = self.user_repository.list_by_names(tenant_id, names)
        recipients = [user.id for user in users if user.id != author_id]
        if not recipients:
            logger.debug("No mentionable users found in tenant %s", tenant_id)
            return []

        author_name = "Someone"
        if author_id is not None:
            author = self.user_repository.get(author_id, tenant_id=tenant_id)
            if author is not None:
                author_name = author.name

        return self.dispatch_engine.dispatch(
            DispatchRequest(
                tenant_id=tenant_id,
                recipients=recipients,
                type=NOTIFICATION_TYPE_MENTION,
                title=f"{author_name} mentioned you",
                message_body=f"{author_name} mentioned you in {context}: {_excerpt(text)}",
                link_url=link_url,
                created_by=author_id,
                related_module=related_module,
                related_entity_id=related_entity_id,
            )
        )


def _excerpt(text: str, limit: int = 200) -> str:
    text = " ".join(text.split())
    return text if len(text) <= limit else text[: limit - 3] + "..."


__all__ = ["MENTION_PATTERN", "MentionNotifier", "extract_mentions"]
