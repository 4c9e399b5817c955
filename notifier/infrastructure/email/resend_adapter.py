"""Resend adapter."""

from __future__ import annotations

from notifier.domain.entities import (
    DeliveryOutcome,
    EmailMessage,
    EmailProvider,
    EmailProviderSetting,
)

from .base import resolve_sender
from .http_adapter import HttpEmailAdapter

RESEND_API_URL = "https://api.resend.com/emails"


class ResendAdapter(HttpEmailAdapter):
    provider = EmailProvider.RESEND
    vendor_name = "Resend"

    def send(self, settings: EmailProviderSetting, message: EmailMessage) -> DeliveryOutcome:
        sender = resolve_sender(settings, message)
        payload = {
            "from": sender.from_address,
            "to": [message.to],
            "subject": message.subject,
            "text": message.text,
            "html": message.html,
            "reply_to": [sender.reply_to],
        }
        result = self._post(
            RESEND_API_URL,
            json={key: value for key, value in payload.items() if value is not None},
            headers={"Authorization": f"Bearer {settings.api_key}"},
        )
        if isinstance(result, DeliveryOutcome):
            return result
        return DeliveryOutcome.ok(self._json_field(result, "id"))


__all__ = ["RESEND_API_URL", "ResendAdapter"]
