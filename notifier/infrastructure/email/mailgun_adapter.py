"""Mailgun adapter using the messages REST endpoint."""

from __future__ import annotations

import httpx

from notifier.domain.entities import (
    DeliveryOutcome,
    EmailMessage,
    EmailProvider,
    EmailProviderSetting,
)

from .base import resolve_sender
from .http_adapter import HttpEmailAdapter

MAILGUN_API_BASE = "https://api.mailgun.net/v3"
MAILGUN_EU_API_BASE = "https://api.eu.mailgun.net/v3"


def mailgun_messages_url(settings: EmailProviderSetting) -> str | None:
    config = settings.config_data or {}
    domain = str(config.get("domain") or "").strip()
    if not domain:
        return None
    base = MAILGUN_EU_API_BASE if str(config.get("region", "")).lower() == "eu" else MAILGUN_API_BASE
    return f"{base}/{domain}/messages"


class MailgunAdapter(HttpEmailAdapter):
    provider = EmailProvider.MAILGUN
    vendor_name = "Mailgun"

    def send(self, settings: EmailProviderSetting, message: EmailMessage) -> DeliveryOutcome:
        url = mailgun_messages_url(settings)
        if url is None:
            return DeliveryOutcome.failed("Mailgun domain not configured")

        sender = resolve_sender(settings, message)
        data = {
            "from": sender.from_address,
            "to": message.to,
            "subject": message.subject,
            "h:Reply-To": sender.reply_to,
        }
        if message.text:
            data["text"] = message.text
        if message.html:
            data["html"] = message.html

        result = self._post(url, data=data, auth=httpx.BasicAuth("api", settings.api_key))
        if isinstance(result, DeliveryOutcome):
            return result
        return DeliveryOutcome.ok(self._json_field(result, "id"))


__all__ = ["MAILGUN_API_BASE", "MAILGUN_EU_API_BASE", "MailgunAdapter", "mailgun_messages_url"]
