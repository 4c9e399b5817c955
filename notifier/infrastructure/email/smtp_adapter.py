"""Plain SMTP adapter."""

from __future__ import annotations

import logging
import smtplib
import ssl
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import make_msgid

from notifier.domain.entities import (
    DeliveryOutcome,
    EmailMessage,
    EmailProvider,
    EmailProviderSetting,
)

from .base import EmailAdapter, ResolvedSender, resolve_sender

logger = logging.getLogger(__name__)

DEFAULT_SMTP_PORT = 587


class SmtpAdapter(EmailAdapter):
    """Deliver through the tenant's SMTP relay.

    ``smtp_secure`` selects implicit TLS (``SMTP_SSL``); otherwise the
    connection is upgraded with STARTTLS when the server offers it. The
    login is ``(from_email, api_key)``.
    """

    provider = EmailProvider.SMTP

    def __init__(self, timeout: float = 30.0) -> None:
        self._timeout = timeout

    def send(self, settings: EmailProviderSetting, message: EmailMessage) -> DeliveryOutcome:
        sender = resolve_sender(settings, message)
        mime = self._build_message(sender, message)
        host = settings.smtp_host or ""
        port = settings.smtp_port or DEFAULT_SMTP_PORT

        try:
            if settings.smtp_secure:
                server = smtplib.SMTP_SSL(
                    host, port, timeout=self._timeout, context=ssl.create_default_context()
                )
            else:
                server = smtplib.SMTP(host, port, timeout=self._timeout)
            with server:
                if not settings.smtp_secure:
                    server.ehlo()
                    if server.has_extn("starttls"):
                        server.starttls(context=ssl.create_default_context())
                        server.ehlo()
                server.login(settings.from_email, settings.api_key)
                server.sendmail(settings.from_email, [message.to], mime.as_string())
        except (smtplib.SMTPException, OSError) as exc:
            logger.warning("SMTP delivery via %s:%s failed: %s", host, port, exc)
            return DeliveryOutcome.failed(f"SMTP error: {exc}")

        return DeliveryOutcome.ok(mime["Message-ID"])

    @staticmethod
    def _build_message(sender: ResolvedSender, message: EmailMessage) -> MIMEMultipart:
        mime = MIMEMultipart("alternative")
        mime["From"] = sender.from_address
        mime["To"] = message.to
        mime["Subject"] = message.subject
        mime["Reply-To"] = sender.reply_to
        mime["Message-ID"] = make_msgid()
        if message.text:
            mime.attach(MIMEText(message.text, "plain", "utf-8"))
        if message.html:
            mime.attach(MIMEText(message.html, "html", "utf-8"))
        return mime


__all__ = ["DEFAULT_SMTP_PORT", "SmtpAdapter"]
