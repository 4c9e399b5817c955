"""Tests for mention extraction and the direct notification producers."""

from conftest import TENANT_ID, build_engine
from notifier.application.notifications import (
    MentionNotifier,
    extract_mentions,
    notify_invoice_payment,
    notify_system_alert,
    notify_task_assignment,
    notify_task_completion,
    notify_workflow_approval,
)
from notifier.domain.entities import NOTIFICATION_TYPE_MENTION, NotificationSeverity
from notifier.infrastructure.repositories import UserRepository


def test_extract_mentions_deduplicates_case_insensitively() -> None:
    assert extract_mentions("@bob please sync with @Carol and @BOB") == ["bob", "Carol"]
    assert extract_mentions("no mentions here") == []
    assert extract_mentions(None) == []


def test_email_addresses_are_not_mentions() -> None:
    assert extract_mentions("mail bob@acme.com or ops.team@acme.com") == []
    assert extract_mentions("(@carol) see mail from bob@acme.com, @bob") == ["carol", "bob"]


def test_mentioned_users_are_notified_except_the_author(session, users) -> None:
    notifier = MentionNotifier(UserRepository(session), build_engine(session))

    created = notifier.notify_mentions(
        TENANT_ID,
        "@bob and @carol please review, cc @ada @eve @nobody",
        author_id=users.admin.id,
        context="task Audit",
        link_url="/tasks/42",
        related_module="tasks",
        related_entity_id="42",
    )

    assert sorted(item.user_id for item in created) == [users.bob.id, users.carol.id]
    notification = created[0]
    assert notification.type == NOTIFICATION_TYPE_MENTION
    assert notification.title == "Ada mentioned you"
    assert notification.message_body.startswith("Ada mentioned you in task Audit: @bob and @carol")
    assert notification.link_url == "/tasks/42"


def test_text_without_known_names_creates_nothing(session, users) -> None:
    notifier = MentionNotifier(UserRepository(session), build_engine(session))

    assert notifier.notify_mentions(TENANT_ID, "hello @nobody", author_id=users.bob.id) == []


def test_task_assignment_goes_to_the_assignee(session, users) -> None:
    [notification] = notify_task_assignment(
        build_engine(session),
        tenant_id=TENANT_ID,
        task_id=42,
        task_name="Audit",
        assignee_id=users.bob.id,
        assigned_by=users.admin.id,
        assigner_name="Ada",
    )

    assert notification.user_id == users.bob.id
    assert notification.type == "TASK_ASSIGNMENT"
    assert notification.message_body == 'You have been assigned to task "Audit" by Ada.'
    assert notification.link_url == "/tasks/42"


def test_task_completion_skips_the_completer(session, users) -> None:
    created = notify_task_completion(
        build_engine(session),
        tenant_id=TENANT_ID,
        task_id=42,
        task_name="Audit",
        recipient_ids=[users.admin.id, users.bob.id],
        completed_by=users.bob.id,
    )

    assert [item.user_id for item in created] == [users.admin.id]
    assert created[0].severity is NotificationSeverity.SUCCESS


def test_invoice_and_workflow_producers(session, users) -> None:
    engine = build_engine(session)

    [paid] = notify_invoice_payment(
        engine,
        tenant_id=TENANT_ID,
        invoice_id=7,
        invoice_number="INV-7",
        amount="$1,250.00",
        recipient_ids=[users.bob.id],
    )
    [approval] = notify_workflow_approval(
        engine,
        tenant_id=TENANT_ID,
        workflow_id=3,
        workflow_name="Vendor onboarding",
        approver_ids=[users.carol.id],
    )

    assert paid.message_body == "Invoice INV-7 has been paid ($1,250.00)."
    assert paid.link_url == "/finance/invoices/7"
    assert approval.type == "WORKFLOW_APPROVAL"
    assert approval.severity is NotificationSeverity.WARNING


def test_system_alert_reaches_only_administrators(session, users) -> None:
    created = notify_system_alert(
        build_engine(session),
        UserRepository(session),
        tenant_id=TENANT_ID,
        title="Disk almost full",
        message="Storage is at 95%.",
    )

    assert [item.user_id for item in created] == [users.admin.id]
    assert created[0].type == "SYSTEM_ALERT"
