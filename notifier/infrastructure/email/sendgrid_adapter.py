"""SendGrid adapter backed by the official SDK."""

from __future__ import annotations

import json
import logging
from typing import Any

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import From, Mail, ReplyTo

from notifier.domain.entities import (
    DeliveryOutcome,
    EmailMessage,
    EmailProvider,
    EmailProviderSetting,
)

from .base import EmailAdapter, resolve_sender

logger = logging.getLogger(__name__)


def _extract_sendgrid_error_details(body: Any) -> str | None:
    """Return a human readable description for a SendGrid error payload."""

    if body in (None, ""):
        return None

    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError:
            return None

    if isinstance(body, str):
        body = body.strip()
        if not body:
            return None
        try:
            parsed = json.loads(body)
        except json.JSONDecodeError:
            return body
    else:
        parsed = body

    if isinstance(parsed, dict):
        errors = parsed.get("errors")
        if isinstance(errors, list):
            messages = [
                str(item["message"])
                for item in errors
                if isinstance(item, dict) and item.get("message")
            ]
            if messages:
                return "; ".join(messages)
        try:
            return json.dumps(parsed)
        except (TypeError, ValueError):
            return None

    if isinstance(parsed, list):
        return "; ".join(str(item) for item in parsed)

    return None


class SendGridAdapter(EmailAdapter):
    provider = EmailProvider.SENDGRID

    def __init__(self, client_factory=SendGridAPIClient) -> None:
        self._client_factory = client_factory

    def send(self, settings: EmailProviderSetting, message: EmailMessage) -> DeliveryOutcome:
        sender = resolve_sender(settings, message)
        mail = Mail(
            from_email=From(sender.from_address),
            to_emails=message.to,
            subject=message.subject,
            plain_text_content=message.text,
            html_content=message.html,
        )
        mail.reply_to = ReplyTo(sender.reply_to)

        try:
            response = self._client_factory(settings.api_key).send(mail)
        except Exception as exc:  # SDK raises python_http_client errors with a body
            status_code = getattr(exc, "status_code", None)
            details = _extract_sendgrid_error_details(getattr(exc, "body", None)) or str(exc)
            logger.error("SendGrid API request failed with status %s: %s", status_code, details)
            return DeliveryOutcome.failed(f"SendGrid error: {details}")

        status_code = getattr(response, "status_code", None)
        if not isinstance(status_code, int) or not 200 <= status_code < 300:
            details = _extract_sendgrid_error_details(getattr(response, "body", None))
            logger.error("SendGrid API responded with status %s: %s", status_code, details)
            return DeliveryOutcome.failed(
                f"SendGrid responded with status {status_code}" + (f": {details}" if details else "")
            )

        headers = getattr(response, "headers", None) or {}
        return DeliveryOutcome.ok(headers.get("X-Message-Id"))


__all__ = ["SendGridAdapter"]
