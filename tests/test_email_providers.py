"""Tests for email provider management use cases."""

from datetime import datetime

import pytest
from sqlalchemy import text

from conftest import OTHER_TENANT_ID, TENANT_ID, RecordingAdapter
import notifier.application.notifications.channel_router as channel_router_module
from notifier.application.use_cases.email_providers import (
    activate_email_provider,
    create_email_provider,
    delete_email_provider,
    list_email_logs,
    list_email_providers,
    send_test_email,
    update_email_provider,
)
from notifier.domain.entities import (
    EmailDeliveryLog,
    SECRET_MASK,
    DeliveryStatus,
    EmailProvider,
    EmailProviderSetting,
)
from notifier.domain.errors import NotFoundError, ValidationError
from notifier.infrastructure.repositories import EmailDeliveryLogRepository, EmailProviderRepository


def _setting(provider: EmailProvider, *, tenant_id: int = TENANT_ID, **overrides) -> EmailProviderSetting:
    values = {
        "id": None,
        "tenant_id": tenant_id,
        "provider": provider,
        "from_email": "alerts@acme.test",
        "from_name": "Acme Alerts",
        "api_key": f"{provider.value.lower()}-key",
    }
    values.update(overrides)
    return EmailProviderSetting(**values)


def _active(session, tenant_id: int = TENANT_ID) -> list[EmailProvider]:
    return [item.provider for item in list_email_providers(session, tenant_id=tenant_id) if item.is_active]


def test_activating_mailgun_deactivates_sendgrid(session) -> None:
    create_email_provider(session, setting=_setting(EmailProvider.SENDGRID, is_active=True))
    mailgun = create_email_provider(
        session,
        setting=_setting(EmailProvider.MAILGUN, config_data={"domain": "mg.acme.test"}),
    )
    assert _active(session) == [EmailProvider.SENDGRID]

    activated = activate_email_provider(session, tenant_id=TENANT_ID, provider_id=mailgun.id)

    assert activated.is_active is True
    assert _active(session) == [EmailProvider.MAILGUN]
    assert EmailProviderRepository(session).get_active(TENANT_ID).id == mailgun.id


def test_creating_an_active_provider_replaces_the_active_one(session) -> None:
    create_email_provider(session, setting=_setting(EmailProvider.SENDGRID, is_active=True))
    create_email_provider(session, setting=_setting(EmailProvider.RESEND, is_active=True))
    create_email_provider(
        session, setting=_setting(EmailProvider.POSTMARK, tenant_id=OTHER_TENANT_ID, is_active=True)
    )

    assert _active(session) == [EmailProvider.RESEND]
    assert _active(session, OTHER_TENANT_ID) == [EmailProvider.POSTMARK]


def test_invalid_provider_is_rejected_with_every_error(session) -> None:
    with pytest.raises(ValidationError) as excinfo:
        create_email_provider(
            session,
            setting=_setting(EmailProvider.SMTP, from_email="nope", api_key=""),
        )

    assert excinfo.value.errors == [
        "Valid from email is required",
        "API key is required",
        "SMTP host is required",
        "SMTP port is required",
    ]


def test_masked_secret_keeps_the_stored_value(session) -> None:
    created = create_email_provider(
        session, setting=_setting(EmailProvider.POSTMARK, api_secret="shh")
    )

    updated = update_email_provider(
        session,
        tenant_id=TENANT_ID,
        provider_id=created.id,
        changes={"api_key": SECRET_MASK, "api_secret": "", "from_name": "Acme Billing"},
    )

    assert updated.from_name == "Acme Billing"
    assert updated.api_key == "postmark-key"
    assert updated.api_secret == "shh"
    assert updated.masked().api_key == SECRET_MASK


def test_update_and_delete_of_unknown_provider(session) -> None:
    with pytest.raises(NotFoundError):
        update_email_provider(session, tenant_id=TENANT_ID, provider_id=99, changes={})
    with pytest.raises(NotFoundError):
        delete_email_provider(session, tenant_id=TENANT_ID, provider_id=99)


def test_test_email_is_sent_and_logged_for_inactive_provider(session, monkeypatch) -> None:
    adapter = RecordingAdapter(EmailProvider.RESEND)
    monkeypatch.setattr(channel_router_module, "DEFAULT_ADAPTERS", {EmailProvider.RESEND: adapter})
    provider = create_email_provider(session, setting=_setting(EmailProvider.RESEND))

    result = send_test_email(
        session, tenant_id=TENANT_ID, provider_id=provider.id, test_email="ops@acme.test"
    )

    assert result.success is True
    assert [message.to for message in adapter.sent] == ["ops@acme.test"]
    page = list_email_logs(session, tenant_id=TENANT_ID)
    assert page.total == 1
    assert page.logs[0].status is DeliveryStatus.SENT
    assert page.logs[0].provider_name == "RESEND"


def test_test_email_reports_provider_failure(session) -> None:
    provider = create_email_provider(session, setting=_setting(EmailProvider.SES))

    result = send_test_email(
        session, tenant_id=TENANT_ID, provider_id=provider.id, test_email="ops@acme.test"
    )

    assert result.success is False
    assert result.error_message.startswith("not implemented")
    failed = list_email_logs(session, tenant_id=TENANT_ID, status="failed")
    assert failed.total == 1
    assert list_email_logs(session, tenant_id=TENANT_ID, status="sent").total == 0


def test_email_log_status_filter_is_validated(session) -> None:
    with pytest.raises(ValidationError):
        list_email_logs(session, tenant_id=TENANT_ID, status="lost")


@pytest.fixture
def enforced_foreign_keys(session):
    session.execute(text("PRAGMA foreign_keys=ON"))
    yield
    session.rollback()
    session.execute(text("PRAGMA foreign_keys=OFF"))


def test_deleting_a_provider_keeps_its_delivery_logs(session, enforced_foreign_keys) -> None:
    provider = create_email_provider(session, setting=_setting(EmailProvider.SENDGRID, is_active=True))
    EmailDeliveryLogRepository(session).record_attempt(
        EmailDeliveryLog(
            id=None,
            tenant_id=TENANT_ID,
            provider_id=provider.id,
            recipient_email="ops@acme.test",
            subject="Invoice overdue",
            status=DeliveryStatus.SENT,
            sent_at=datetime(2024, 3, 1, 9, 30),
        )
    )

    delete_email_provider(session, tenant_id=TENANT_ID, provider_id=provider.id)

    assert list_email_providers(session, tenant_id=TENANT_ID) == []
    page = list_email_logs(session, tenant_id=TENANT_ID)
    assert page.total == 1
    assert page.logs[0].provider_id is None
    assert page.logs[0].provider_name is None
    assert page.logs[0].subject == "Invoice overdue"
