"""Use case sending a live test message through one provider."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.orm import Session

from notifier.application.notifications import build_channel_router
from notifier.domain.entities import DeliveryStatus, EmailMessage, NotificationSeverity
from notifier.domain.errors import NotFoundError, ValidationError
from notifier.infrastructure.email import render_email_html
from notifier.infrastructure.repositories import EmailProviderRepository

TEST_SUBJECT = "Test email from your notification settings"
TEST_BODY = "This is a test email. Your email provider is configured correctly."


@dataclass(frozen=True)
class ProviderTestResult:
    success: bool
    error_message: str | None = None


def send_test_email(
    session: Session, *, tenant_id: int, provider_id: int, test_email: str
) -> ProviderTestResult:
    """Send one message through ``provider_id`` whether or not it is active.

    The attempt is logged like any other delivery.
    """

    if "@" not in (test_email or ""):
        raise ValidationError("Invalid test email", ["testEmail: a valid email address is required"])

    setting = EmailProviderRepository(session).get(provider_id, tenant_id=tenant_id)
    if setting is None:
        raise NotFoundError("Email provider not found")

    message = EmailMessage(
        to=test_email,
        subject=TEST_SUBJECT,
        text=TEST_BODY,
        html=render_email_html(TEST_SUBJECT, TEST_BODY, NotificationSeverity.SUCCESS),
    )
    log = build_channel_router(session).send_email(tenant_id, message, provider=setting)
    if log is None:
        return ProviderTestResult(success=False, error_message="No delivery attempt was made")
    return ProviderTestResult(
        success=log.status is DeliveryStatus.SENT, error_message=log.error_message
    )
