"""Common contract implemented by every outbound email vendor adapter."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from notifier.domain.entities import (
    DeliveryOutcome,
    EmailMessage,
    EmailProvider,
    EmailProviderSetting,
)


@dataclass(frozen=True)
class ResolvedSender:
    """Sender headers after applying provider defaults."""

    from_address: str
    reply_to: str


def resolve_sender(settings: EmailProviderSetting, message: EmailMessage) -> ResolvedSender:
    """Fill ``from``/``reply-to`` from the provider when the message omits them."""

    return ResolvedSender(
        from_address=message.from_address or settings.from_address,
        reply_to=message.reply_to or settings.reply_to_email or settings.from_email,
    )


class EmailAdapter(ABC):
    """Send one :class:`EmailMessage` through a vendor.

    Adapters are stateless with respect to the database. Expected vendor
    failures are reported as a failed :class:`DeliveryOutcome`; anything
    else may raise and is converted by the router.
    """

    provider: EmailProvider

    @abstractmethod
    def send(self, settings: EmailProviderSetting, message: EmailMessage) -> DeliveryOutcome:
        raise NotImplementedError


__all__ = ["EmailAdapter", "ResolvedSender", "resolve_sender"]
