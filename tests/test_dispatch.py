"""Tests for the dispatch engine and the email channel router."""

import time

from conftest import (
    OTHER_TENANT_ID,
    TENANT_ID,
    RecordingAdapter,
    add_provider,
    build_engine,
)
from notifier.application.notifications import DispatchRequest
from notifier.domain.entities import (
    TIMEOUT_ERROR_MESSAGE,
    DeliveryChannel,
    DeliveryStatus,
    EmailProvider,
    NotificationPreference,
    NotificationSeverity,
)
from notifier.infrastructure.repositories import (
    EmailDeliveryLogRepository,
    NotificationPreferenceRepository,
    NotificationRepository,
)


def _enable_email(session, user_id: int, notification_type: str, *, in_app: bool = True) -> None:
    NotificationPreferenceRepository(session).upsert(
        NotificationPreference(
            id=None,
            tenant_id=TENANT_ID,
            user_id=user_id,
            notification_type=notification_type,
            in_app_enabled=in_app,
            email_enabled=True,
        )
    )


def _request(recipients, notification_type="TASK_ASSIGNMENT", **overrides) -> DispatchRequest:
    values = {
        "tenant_id": TENANT_ID,
        "recipients": recipients,
        "type": notification_type,
        "title": "New Task Assigned",
        "message_body": "You have been assigned to task Audit.",
    }
    values.update(overrides)
    return DispatchRequest(**values)


def _logs(session):
    logs, _ = EmailDeliveryLogRepository(session).list(TENANT_ID, limit=100)
    return logs


def test_default_preferences_create_in_app_row_without_email(session, users) -> None:
    adapter = RecordingAdapter()
    add_provider(session)

    created = build_engine(session, adapter).dispatch(_request([users.bob.id]))

    assert len(created) == 1
    notification = created[0]
    assert notification.id is not None
    assert notification.tenant_id == TENANT_ID
    assert notification.user_id == users.bob.id
    assert notification.is_read is False
    assert notification.severity is NotificationSeverity.INFO
    assert adapter.sent == []
    assert _logs(session) == []


def test_email_enabled_recipient_gets_row_and_one_sent_log(session, users) -> None:
    adapter = RecordingAdapter()
    provider = add_provider(session)
    _enable_email(session, users.bob.id, "INVOICE_CREATED")

    created = build_engine(session, adapter).dispatch(
        _request([users.bob.id], "INVOICE_CREATED", title="Invoice created", link_url="/invoices/7")
    )

    assert len(created) == 1
    assert [message.to for message in adapter.sent] == ["bob@acme.test"]
    assert "/invoices/7" in adapter.sent[0].text
    assert "View Details" in adapter.sent[0].html
    logs = _logs(session)
    assert len(logs) == 1
    assert logs[0].status is DeliveryStatus.SENT
    assert logs[0].provider_id == provider.id
    assert logs[0].notification_id == created[0].id
    assert logs[0].recipient_email == "bob@acme.test"
    assert logs[0].provider_message_id == "msg-1"


def test_recipient_with_everything_disabled_gets_nothing(session, users) -> None:
    adapter = RecordingAdapter()
    add_provider(session)
    NotificationPreferenceRepository(session).upsert(
        NotificationPreference(
            id=None,
            tenant_id=TENANT_ID,
            user_id=users.bob.id,
            notification_type="TASK_UPDATE",
            in_app_enabled=False,
            email_enabled=False,
        )
    )

    created = build_engine(session, adapter).dispatch(_request([users.bob.id], "TASK_UPDATE"))

    assert created == []
    assert NotificationRepository(session).count_totals(TENANT_ID) == (0, 0)
    assert adapter.sent == []
    assert _logs(session) == []


def test_email_only_recipient_still_gets_a_row(session, users) -> None:
    adapter = RecordingAdapter()
    add_provider(session)
    _enable_email(session, users.bob.id, "REPORT_READY", in_app=False)

    created = build_engine(session, adapter).dispatch(_request([users.bob.id], "REPORT_READY"))

    assert [item.user_id for item in created] == [users.bob.id]
    assert len(adapter.sent) == 1


def test_every_email_attempt_is_logged_once(session, users) -> None:
    adapter = RecordingAdapter(fail_for={"carol@acme.test"})
    add_provider(session)
    for user in (users.admin, users.bob, users.carol):
        _enable_email(session, user.id, "INVOICE_OVERDUE")

    created = build_engine(session, adapter).dispatch(
        _request([users.admin.id, users.bob.id, users.carol.id], "INVOICE_OVERDUE")
    )

    assert len(created) == 3
    logs = {log.recipient_email: log for log in _logs(session)}
    assert len(logs) == 3
    assert logs["ada@acme.test"].status is DeliveryStatus.SENT
    assert logs["bob@acme.test"].status is DeliveryStatus.SENT
    assert logs["carol@acme.test"].status is DeliveryStatus.FAILED
    assert logs["carol@acme.test"].error_message == "mailbox unavailable"


def test_adapter_exception_is_logged_as_failure(session, users) -> None:
    adapter = RecordingAdapter(raise_for={"bob@acme.test"})
    add_provider(session)
    _enable_email(session, users.bob.id, "PAYMENT_FAILED")

    created = build_engine(session, adapter).dispatch(_request([users.bob.id], "PAYMENT_FAILED"))

    assert len(created) == 1
    [log] = _logs(session)
    assert log.status is DeliveryStatus.FAILED
    assert "connection reset" in log.error_message


def test_slow_send_is_logged_as_timeout(session, users) -> None:
    adapter = RecordingAdapter(block_for={"bob@acme.test"})
    add_provider(session)
    _enable_email(session, users.bob.id, "TASK_DUE_SOON")
    _enable_email(session, users.carol.id, "TASK_DUE_SOON")

    try:
        build_engine(session, adapter, timeout_seconds=0.2, max_workers=2).dispatch(
            _request([users.bob.id, users.carol.id], "TASK_DUE_SOON")
        )
    finally:
        adapter.release.set()

    logs = {log.recipient_email: log for log in _logs(session)}
    assert logs["bob@acme.test"].status is DeliveryStatus.FAILED
    assert logs["bob@acme.test"].error_message == TIMEOUT_ERROR_MESSAGE
    assert logs["carol@acme.test"].status is DeliveryStatus.SENT


def test_no_active_provider_skips_email_silently(session, users) -> None:
    adapter = RecordingAdapter()
    add_provider(session, is_active=False)
    _enable_email(session, users.bob.id, "INVOICE_CREATED")

    created = build_engine(session, adapter).dispatch(_request([users.bob.id], "INVOICE_CREATED"))

    assert len(created) == 1
    assert adapter.sent == []
    assert _logs(session) == []


def test_channels_restrict_delivery(session, users) -> None:
    adapter = RecordingAdapter()
    add_provider(session)
    _enable_email(session, users.bob.id, "CLIENT_MESSAGE")

    created = build_engine(session, adapter).dispatch(
        _request(
            [users.bob.id],
            "CLIENT_MESSAGE",
            delivery_channels=frozenset({DeliveryChannel.IN_APP}),
        )
    )

    assert len(created) == 1
    assert adapter.sent == []


def test_recipients_are_deduplicated_and_scoped_to_active_tenant_users(session, users) -> None:
    created = build_engine(session).dispatch(
        _request([users.bob.id, users.bob.id, users.dave.id, users.eve.id, 404])
    )

    assert [item.user_id for item in created] == [users.bob.id]
    assert NotificationRepository(session).count_totals(OTHER_TENANT_ID) == (0, 0)


def test_batch_delivery_sends_in_chunks(session, users) -> None:
    adapter = RecordingAdapter()
    add_provider(session)
    recipients = [users.admin.id, users.bob.id, users.carol.id]
    for user_id in recipients:
        _enable_email(session, user_id, "SYSTEM_MAINTENANCE")

    engine = build_engine(session, adapter, batch_size=2)
    calls = []
    send_many = engine.channel_router.send_many

    def spy(tenant_id, messages, provider=None):
        calls.append(len(messages))
        return send_many(tenant_id, messages, provider)

    engine.channel_router.send_many = spy
    engine.dispatch(_request(recipients, "SYSTEM_MAINTENANCE", batch_delivery=True))

    assert calls == [2, 1]
    assert len(_logs(session)) == 3


def test_email_failure_never_removes_rows(session, users) -> None:
    add_provider(session, provider=EmailProvider.SES, api_key="aws-key")
    _enable_email(session, users.bob.id, "REPORT_READY")

    created = build_engine(session).dispatch(_request([users.bob.id], "REPORT_READY"))

    assert len(created) == 1
    [log] = _logs(session)
    assert log.status is DeliveryStatus.FAILED
    assert log.error_message.startswith("not implemented")
    assert NotificationRepository(session).count_unread(TENANT_ID, users.bob.id) == 1


def test_stuck_send_does_not_hold_back_the_queued_ones(session, users) -> None:
    adapter = RecordingAdapter(block_for={"bob@acme.test"})
    add_provider(session)
    for user in (users.bob, users.carol, users.admin):
        _enable_email(session, user.id, "REPORT_READY")

    started = time.monotonic()
    try:
        build_engine(session, adapter, timeout_seconds=0.3, max_workers=1).dispatch(
            _request([users.bob.id, users.carol.id, users.admin.id], "REPORT_READY")
        )
        elapsed = time.monotonic() - started
    finally:
        adapter.release.set()

    logs = {log.recipient_email: log for log in _logs(session)}
    assert logs["bob@acme.test"].error_message == TIMEOUT_ERROR_MESSAGE
    assert logs["carol@acme.test"].status is DeliveryStatus.SENT
    assert logs["ada@acme.test"].status is DeliveryStatus.SENT
    assert elapsed < 2
