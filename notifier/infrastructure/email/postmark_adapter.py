"""Postmark adapter."""

from __future__ import annotations

from notifier.domain.entities import (
    DeliveryOutcome,
    EmailMessage,
    EmailProvider,
    EmailProviderSetting,
)

from .base import resolve_sender
from .http_adapter import HttpEmailAdapter

POSTMARK_API_URL = "https://api.postmarkapp.com/email"


class PostmarkAdapter(HttpEmailAdapter):
    provider = EmailProvider.POSTMARK
    vendor_name = "Postmark"

    def send(self, settings: EmailProviderSetting, message: EmailMessage) -> DeliveryOutcome:
        sender = resolve_sender(settings, message)
        payload = {
            "From": sender.from_address,
            "To": message.to,
            "Subject": message.subject,
            "TextBody": message.text,
            "HtmlBody": message.html,
            "ReplyTo": sender.reply_to,
        }
        result = self._post(
            POSTMARK_API_URL,
            json={key: value for key, value in payload.items() if value is not None},
            headers={
                "Accept": "application/json",
                "X-Postmark-Server-Token": settings.api_key,
            },
        )
        if isinstance(result, DeliveryOutcome):
            return result
        return DeliveryOutcome.ok(self._json_field(result, "MessageID"))


__all__ = ["POSTMARK_API_URL", "PostmarkAdapter"]
