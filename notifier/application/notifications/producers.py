"""Convenience producers for notifications raised directly by domain code."""

from __future__ import annotations

from notifier.domain.entities import ADMIN_ROLE_ALIAS, Notification, NotificationSeverity
from notifier.infrastructure.repositories import UserRepository

from .dispatch import DispatchEngine, DispatchRequest


def notify_task_assignment(
    engine: DispatchEngine,
    *,
    tenant_id: int,
    task_id: int,
    task_name: str,
    assignee_id: int,
    assigned_by: int | None = None,
    assigner_name: str | None = None,
) -> list[Notification]:
    by = f" by {assigner_name}" if assigner_name else ""
    return engine.dispatch(
        DispatchRequest(
            tenant_id=tenant_id,
            recipients=[assignee_id],
            type="TASK_ASSIGNMENT",
            title="New Task Assigned",
            message_body=f'You have been assigned to task "{task_name}"{by}.',
            link_url=f"/tasks/{task_id}",
            created_by=assigned_by,
            related_module="tasks",
            related_entity_id=str(task_id),
        )
    )


def notify_task_completion(
    engine: DispatchEngine,
    *,
    tenant_id: int,
    task_id: int,
    task_name: str,
    recipient_ids: list[int],
    completed_by: int | None = None,
    completer_name: str | None = None,
) -> list[Notification]:
    by = f" by {completer_name}" if completer_name else ""
    return engine.dispatch(
        DispatchRequest(
            tenant_id=tenant_id,
            recipients=[user_id for user_id in recipient_ids if user_id != completed_by],
            type="TASK_COMPLETED",
            severity=NotificationSeverity.SUCCESS,
            title="Task Completed",
            message_body=f'Task "{task_name}" has been completed{by}.',
            link_url=f"/tasks/{task_id}",
            created_by=completed_by,
            related_module="tasks",
            related_entity_id=str(task_id),
        )
    )


def notify_invoice_payment(
    engine: DispatchEngine,
    *,
    tenant_id: int,
    invoice_id: int,
    invoice_number: str,
    amount: str,
    recipient_ids: list[int],
) -> list[Notification]:
    return engine.dispatch(
        DispatchRequest(
            tenant_id=tenant_id,
            recipients=recipient_ids,
            type="INVOICE_PAID",
            severity=NotificationSeverity.SUCCESS,
            title="Invoice Paid",
            message_body=f"Invoice {invoice_number} has been paid ({amount}).",
            link_url=f"/finance/invoices/{invoice_id}",
            related_module="finance",
            related_entity_id=str(invoice_id),
        )
    )


def notify_workflow_approval(
    engine: DispatchEngine,
    *,
    tenant_id: int,
    workflow_id: int,
    workflow_name: str,
    approver_ids: list[int],
    requested_by: int | None = None,
) -> list[Notification]:
    return engine.dispatch(
        DispatchRequest(
            tenant_id=tenant_id,
            recipients=approver_ids,
            type="WORKFLOW_APPROVAL",
            severity=NotificationSeverity.WARNING,
            title="Approval Required",
            message_body=f'Workflow "{workflow_name}" is waiting for your approval.',
            link_url=f"/workflows/{workflow_id}",
            created_by=requested_by,
            related_module="workflows",
            related_entity_id=str(workflow_id),
        )
    )


def notify_system_alert(
    engine: DispatchEngine,
    user_repository: UserRepository,
    *,
    tenant_id: int,
    title: str,
    message: str,
    severity: NotificationSeverity = NotificationSeverity.WARNING,
    link_url: str | None = None,
) -> list[Notification]:
    """Send a ``SYSTEM_ALERT`` to every administrator of the tenant."""

    admin_ids = user_repository.list_ids_by_role_aliases(tenant_id, [ADMIN_ROLE_ALIAS])
    return engine.dispatch(
        DispatchRequest(
            tenant_id=tenant_id,
            recipients=admin_ids,
            type="SYSTEM_ALERT",
            severity=severity,
            title=title,
            message_body=message,
            link_url=link_url,
            related_module="system",
        )
    )


__all__ = [
    "notify_invoice_payment",
    "notify_system_alert",
    "notify_task_assignment",
    "notify_task_completion",
    "notify_workflow_approval",
]
