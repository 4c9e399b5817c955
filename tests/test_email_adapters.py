"""Tests for the outbound email adapters and provider validation."""

from __future__ import annotations

import base64
import json
import smtplib
from types import SimpleNamespace
from unittest.mock import MagicMock
from urllib.parse import parse_qs

import httpx
import pytest

from notifier.domain.entities import EmailMessage, EmailProvider, EmailProviderSetting
from notifier.infrastructure.email import (
    MAILGUN_EU_API_BASE,
    SES_NOT_IMPLEMENTED,
    MailgunAdapter,
    PostmarkAdapter,
    ResendAdapter,
    SendGridAdapter,
    SesAdapter,
    SmtpAdapter,
    get_adapter,
    render_email_html,
    resolve_sender,
    validate_provider_settings,
)
from notifier.infrastructure.email import smtp_adapter

MESSAGE = EmailMessage(
    to="bob@acme.test",
    subject="Invoice created",
    text="Invoice INV-7 was created.",
    html="<p>Invoice INV-7 was created.</p>",
)


def _settings(provider: EmailProvider, **overrides) -> EmailProviderSetting:
    values = {
        "id": 3,
        "tenant_id": 5,
        "provider": provider,
        "from_email": "alerts@acme.test",
        "from_name": "Acme Alerts",
        "api_key": "key-123",
    }
    values.update(overrides)
    return EmailProviderSetting(**values)


class CapturingTransport:
    """Build an ``httpx.MockTransport`` that records requests."""

    def __init__(self, status_code: int = 200, payload: dict | None = None, text: str | None = None):
        self.requests: list[httpx.Request] = []
        self.status_code = status_code
        self.payload = payload
        self.text = text

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.text is not None:
            return httpx.Response(self.status_code, text=self.text)
        return httpx.Response(self.status_code, json=self.payload or {})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


def test_sender_defaults_come_from_the_provider() -> None:
    sender = resolve_sender(_settings(EmailProvider.RESEND), MESSAGE)

    assert sender.from_address == "Acme Alerts <alerts@acme.test>"
    assert sender.reply_to == "alerts@acme.test"

    sender = resolve_sender(
        _settings(EmailProvider.RESEND, reply_to_email="support@acme.test"),
        EmailMessage(to="bob@acme.test", subject="Hi", reply_to="ada@acme.test"),
    )
    assert sender.reply_to == "ada@acme.test"


def test_mailgun_posts_form_with_basic_auth() -> None:
    capture = CapturingTransport(payload={"id": "<20240101.1@acme.test>", "message": "Queued"})
    adapter = MailgunAdapter(transport=capture.transport)

    outcome = adapter.send(_settings(EmailProvider.MAILGUN, config_data={"domain": "mg.acme.test"}), MESSAGE)

    assert outcome.success is True
    assert outcome.provider_message_id == "<20240101.1@acme.test>"
    [request] = capture.requests
    assert str(request.url) == "https://api.mailgun.net/v3/mg.acme.test/messages"
    assert request.headers["Authorization"] == "Basic " + base64.b64encode(b"api:key-123").decode()
    form = parse_qs(request.content.decode())
    assert form["from"] == ["Acme Alerts <alerts@acme.test>"]
    assert form["to"] == ["bob@acme.test"]
    assert form["h:Reply-To"] == ["alerts@acme.test"]
    assert form["html"] == ["<p>Invoice INV-7 was created.</p>"]


def test_mailgun_uses_eu_endpoint_for_eu_region() -> None:
    capture = CapturingTransport(payload={"id": "x"})
    adapter = MailgunAdapter(transport=capture.transport)

    adapter.send(
        _settings(EmailProvider.MAILGUN, config_data={"domain": "mg.acme.test", "region": "EU"}),
        MESSAGE,
    )

    assert str(capture.requests[0].url).startswith(MAILGUN_EU_API_BASE)


def test_mailgun_without_domain_fails_without_calling_the_api() -> None:
    capture = CapturingTransport()
    adapter = MailgunAdapter(transport=capture.transport)

    outcome = adapter.send(_settings(EmailProvider.MAILGUN), MESSAGE)

    assert outcome.success is False
    assert outcome.error_message == "Mailgun domain not configured"
    assert capture.requests == []


def test_http_error_status_becomes_failed_outcome() -> None:
    capture = CapturingTransport(status_code=401, text="Forbidden")
    adapter = MailgunAdapter(transport=capture.transport)

    outcome = adapter.send(_settings(EmailProvider.MAILGUN, config_data={"domain": "mg.acme.test"}), MESSAGE)

    assert outcome.success is False
    assert outcome.error_message == "Mailgun responded with status 401: Forbidden"


def test_transport_error_becomes_failed_outcome() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    adapter = ResendAdapter(transport=httpx.MockTransport(handler))

    outcome = adapter.send(_settings(EmailProvider.RESEND), MESSAGE)

    assert outcome.success is False
    assert "connection refused" in outcome.error_message


def test_postmark_sends_server_token_header() -> None:
    capture = CapturingTransport(payload={"MessageID": "pm-1", "ErrorCode": 0})
    adapter = PostmarkAdapter(transport=capture.transport)

    outcome = adapter.send(_settings(EmailProvider.POSTMARK), MESSAGE)

    assert outcome.provider_message_id == "pm-1"
    [request] = capture.requests
    assert request.headers["X-Postmark-Server-Token"] == "key-123"
    body = json.loads(request.content)
    assert body["From"] == "Acme Alerts <alerts@acme.test>"
    assert body["To"] == "bob@acme.test"
    assert body["TextBody"] == MESSAGE.text


def test_resend_uses_bearer_token_and_list_recipients() -> None:
    capture = CapturingTransport(payload={"id": "re_123"})
    adapter = ResendAdapter(transport=capture.transport)

    outcome = adapter.send(_settings(EmailProvider.RESEND), MESSAGE)

    assert outcome.success is True
    assert outcome.provider_message_id == "re_123"
    [request] = capture.requests
    assert request.headers["Authorization"] == "Bearer key-123"
    body = json.loads(request.content)
    assert body["to"] == ["bob@acme.test"]
    assert body["reply_to"] == ["alerts@acme.test"]


def test_ses_always_reports_not_implemented() -> None:
    outcome = SesAdapter().send(_settings(EmailProvider.SES), MESSAGE)

    assert outcome.success is False
    assert outcome.error_message == SES_NOT_IMPLEMENTED


def test_smtp_uses_starttls_and_logs_in_with_from_email(monkeypatch) -> None:
    smtp_class = MagicMock()
    server = smtp_class.return_value
    server.has_extn.return_value = True
    monkeypatch.setattr(smtp_adapter.smtplib, "SMTP", smtp_class)

    outcome = SmtpAdapter().send(
        _settings(EmailProvider.SMTP, smtp_host="smtp.acme.test", smtp_port=2525), MESSAGE
    )

    assert outcome.success is True
    assert outcome.provider_message_id
    smtp_class.assert_called_once_with("smtp.acme.test", 2525, timeout=30.0)
    server.starttls.assert_called_once()
    server.login.assert_called_once_with("alerts@acme.test", "key-123")
    from_addr, to_addrs, raw = server.sendmail.call_args.args
    assert from_addr == "alerts@acme.test"
    assert to_addrs == ["bob@acme.test"]
    assert "Subject: Invoice created" in raw


def test_smtp_secure_uses_implicit_tls(monkeypatch) -> None:
    ssl_class = MagicMock()
    monkeypatch.setattr(smtp_adapter.smtplib, "SMTP_SSL", ssl_class)
    monkeypatch.setattr(smtp_adapter.smtplib, "SMTP", MagicMock(side_effect=AssertionError))

    outcome = SmtpAdapter().send(
        _settings(EmailProvider.SMTP, smtp_host="smtp.acme.test", smtp_port=465, smtp_secure=True),
        MESSAGE,
    )

    assert outcome.success is True
    assert ssl_class.call_args.args == ("smtp.acme.test", 465)
    ssl_class.return_value.starttls.assert_not_called()


def test_smtp_errors_become_failed_outcome(monkeypatch) -> None:
    smtp_class = MagicMock()
    smtp_class.return_value.login.side_effect = smtplib.SMTPAuthenticationError(
        535, b"Authentication failed"
    )
    monkeypatch.setattr(smtp_adapter.smtplib, "SMTP", smtp_class)

    outcome = SmtpAdapter().send(_settings(EmailProvider.SMTP, smtp_host="smtp.acme.test"), MESSAGE)

    assert outcome.success is False
    assert outcome.error_message.startswith("SMTP error:")
    assert smtp_class.call_args.args == ("smtp.acme.test", 587)


class FakeSendGridClient:
    instances: list["FakeSendGridClient"] = []

    def __init__(self, api_key: str, response=None, error: Exception | None = None) -> None:
        self.api_key = api_key
        self.response = response
        self.error = error
        self.sent = []
        FakeSendGridClient.instances.append(self)

    def send(self, mail):
        self.sent.append(mail)
        if self.error is not None:
            raise self.error
        return self.response


def test_sendgrid_builds_mail_and_reads_message_id() -> None:
    FakeSendGridClient.instances = []
    response = SimpleNamespace(status_code=202, headers={"X-Message-Id": "sg-1"}, body="")
    adapter = SendGridAdapter(client_factory=lambda key: FakeSendGridClient(key, response=response))

    outcome = adapter.send(_settings(EmailProvider.SENDGRID), MESSAGE)

    assert outcome.success is True
    assert outcome.provider_message_id == "sg-1"
    [client] = FakeSendGridClient.instances
    assert client.api_key == "key-123"
    payload = client.sent[0].get()
    assert payload["from"] == {"name": "Acme Alerts", "email": "alerts@acme.test"}
    assert payload["reply_to"]["email"] == "alerts@acme.test"
    assert payload["subject"] == "Invoice created"


def test_sendgrid_error_body_is_reported() -> None:
    class SendGridHTTPError(Exception):
        status_code = 401
        body = json.dumps({"errors": [{"message": "The provided authorization grant is invalid"}]})

    adapter = SendGridAdapter(
        client_factory=lambda key: FakeSendGridClient(key, error=SendGridHTTPError("401"))
    )

    outcome = adapter.send(_settings(EmailProvider.SENDGRID), MESSAGE)

    assert outcome.success is False
    assert outcome.error_message == "SendGrid error: The provided authorization grant is invalid"


def test_sendgrid_non_success_status_is_reported() -> None:
    response = SimpleNamespace(status_code=500, headers={}, body=b"upstream failure")
    adapter = SendGridAdapter(client_factory=lambda key: FakeSendGridClient(key, response=response))

    outcome = adapter.send(_settings(EmailProvider.SENDGRID), MESSAGE)

    assert outcome.success is False
    assert outcome.error_message == "SendGrid responded with status 500: upstream failure"


def test_registry_covers_every_provider() -> None:
    for provider in EmailProvider:
        assert get_adapter(provider).provider is provider
    assert isinstance(get_adapter("MAILGUN"), MailgunAdapter)


@pytest.mark.parametrize(
    ("provider", "overrides", "expected"),
    [
        (EmailProvider.SENDGRID, {"from_email": "not-an-email"}, "Valid from email is required"),
        (EmailProvider.SENDGRID, {"from_name": " "}, "From name is required"),
        (EmailProvider.SENDGRID, {"api_key": ""}, "API key is required"),
        (EmailProvider.SMTP, {"smtp_port": 587}, "SMTP host is required"),
        (EmailProvider.SMTP, {"smtp_host": "smtp.acme.test"}, "SMTP port is required"),
        (EmailProvider.MAILGUN, {}, "Mailgun domain configuration is required"),
        (EmailProvider.MAILGUN, {"config_data": {"region": "eu"}}, "Mailgun domain is required in configuration"),
    ],
)
def test_provider_validation_errors(provider, overrides, expected) -> None:
    result = validate_provider_settings(_settings(provider, **overrides))

    assert result.is_valid is False
    assert expected in result.errors


def test_valid_provider_settings_pass() -> None:
    result = validate_provider_settings(
        _settings(EmailProvider.MAILGUN, config_data={"domain": "mg.acme.test"})
    )

    assert result.is_valid is True
    assert result.errors == []


def test_email_html_escapes_content_and_links() -> None:
    html = render_email_html(
        "<Alert>", "Line one\nLine two", "CRITICAL", "SYSTEM_ALERT", "/alerts?id=1&x=2"
    )

    assert "&lt;Alert&gt;" in html
    assert "Line one<br>Line two" in html
    assert "System Alert" in html
    assert 'href="/alerts?id=1&amp;x=2"' in html
    assert "#ef4444" in html
