"""Lookup table from :class:`EmailProvider` to its adapter."""

from __future__ import annotations

from collections.abc import Mapping

from notifier.domain.entities import EmailProvider

from .base import EmailAdapter
from .mailgun_adapter import MailgunAdapter
from .postmark_adapter import PostmarkAdapter
from .resend_adapter import ResendAdapter
from .sendgrid_adapter import SendGridAdapter
from .ses_adapter import SesAdapter
from .smtp_adapter import SmtpAdapter


def build_default_adapters() -> dict[EmailProvider, EmailAdapter]:
    adapters: list[EmailAdapter] = [
        SendGridAdapter(),
        SmtpAdapter(),
        MailgunAdapter(),
        SesAdapter(),
        PostmarkAdapter(),
        ResendAdapter(),
    ]
    return {adapter.provider: adapter for adapter in adapters}


DEFAULT_ADAPTERS: Mapping[EmailProvider, EmailAdapter] = build_default_adapters()


def get_adapter(
    provider: EmailProvider | str,
    adapters: Mapping[EmailProvider, EmailAdapter] | None = None,
) -> EmailAdapter:
    table = DEFAULT_ADAPTERS if adapters is None else adapters
    return table[EmailProvider(provider)]


__all__ = ["DEFAULT_ADAPTERS", "build_default_adapters", "get_adapter"]
