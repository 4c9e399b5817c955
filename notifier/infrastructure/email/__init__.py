"""Outbound email adapters, HTML rendering and provider validation."""

from .base import EmailAdapter, ResolvedSender, resolve_sender
from .http_adapter import HttpEmailAdapter
from .mailgun_adapter import (
    MAILGUN_API_BASE,
    MAILGUN_EU_API_BASE,
    MailgunAdapter,
    mailgun_messages_url,
)
from .postmark_adapter import PostmarkAdapter
from .registry import DEFAULT_ADAPTERS, build_default_adapters, get_adapter
from .resend_adapter import ResendAdapter
from .sendgrid_adapter import SendGridAdapter
from .ses_adapter import SES_NOT_IMPLEMENTED, SesAdapter
from .smtp_adapter import DEFAULT_SMTP_PORT, SmtpAdapter
from .templates import SEVERITY_COLORS, render_email_html
from .validation import ProviderValidation, validate_provider_settings

__all__ = [
    "DEFAULT_ADAPTERS",
    "DEFAULT_SMTP_PORT",
    "MAILGUN_API_BASE",
    "MAILGUN_EU_API_BASE",
    "EmailAdapter",
    "HttpEmailAdapter",
    "MailgunAdapter",
    "PostmarkAdapter",
    "ProviderValidation",
    "ResendAdapter",
    "ResolvedSender",
    "SES_NOT_IMPLEMENTED",
    "SEVERITY_COLORS",
    "SendGridAdapter",
    "SesAdapter",
    "SmtpAdapter",
    "build_default_adapters",
    "get_adapter",
    "mailgun_messages_url",
    "render_email_html",
    "resolve_sender",
    "validate_provider_settings",
]
