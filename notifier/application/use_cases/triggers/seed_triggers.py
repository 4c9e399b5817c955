"""Use case for installing the default trigger set of a tenant."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.orm import Session

from notifier.domain.entities import (
    DeliveryChannel,
    NotificationSeverity,
    NotificationTrigger,
    RecipientType,
)
from notifier.infrastructure.cache import notification_cache
from notifier.infrastructure.repositories import NotificationTriggerRepository
from .validators import validate_trigger

logger = logging.getLogger(__name__)

_IN_APP = frozenset({DeliveryChannel.IN_APP})
_IN_APP_AND_EMAIL = frozenset({DeliveryChannel.IN_APP, DeliveryChannel.EMAIL})

DEFAULT_TRIGGERS: tuple[dict[str, Any], ...] = (
    {
        "trigger_name": "Task Status Changed",
        "description": "Notify when task status changes",
        "trigger_module": "tasks",
        "trigger_event": "status_changed",
        "notification_type": "TASK_STATUS_CHANGED",
        "title_template": "Task Status Updated",
        "message_template": (
            'Task "{{taskDetails}}" status changed from {{previousStatus}} to {{newStatus}}'
        ),
        "link_template": "/tasks/{{id}}",
        "recipient_type": RecipientType.CONDITIONAL,
        "recipient_config": {"userIdFields": ["assigneeId", "createdBy"]},
        "delivery_channels": _IN_APP_AND_EMAIL,
    },
    {
        "trigger_name": "Task Assignment",
        "description": "Notify when task is assigned to someone",
        "trigger_module": "tasks",
        "trigger_event": "assigned",
        "notification_type": "TASK_ASSIGNMENT",
        "title_template": "New Task Assigned",
        "message_template": 'You have been assigned task: "{{taskDetails}}"',
        "link_template": "/tasks/{{id}}",
        "recipient_type": RecipientType.CONDITIONAL,
        "recipient_config": {"userIdFields": ["assigneeId"]},
        "delivery_channels": _IN_APP_AND_EMAIL,
    },
    {
        "trigger_name": "Task Completion",
        "description": "Notify when task is completed",
        "trigger_module": "tasks",
        "trigger_event": "completed",
        "notification_type": "TASK_COMPLETED",
        "severity": NotificationSeverity.SUCCESS,
        "title_template": "Task Completed",
        "message_template": 'Task "{{taskDetails}}" has been completed',
        "link_template": "/tasks/{{id}}",
        "recipient_type": RecipientType.CONDITIONAL,
        "recipient_config": {"userIdFields": ["createdBy", "assigneeId"]},
        "delivery_channels": _IN_APP_AND_EMAIL,
    },
    {
        "trigger_name": "Task Updated",
        "description": "Notify when task details are updated",
        "trigger_module": "tasks",
        "trigger_event": "updated",
        "notification_type": "TASK_STATUS_CHANGED",
        "title_template": "Task Updated",
        "message_template": 'Task "{{taskDetails}}" has been updated',
        "link_template": "/tasks/{{id}}",
        "recipient_type": RecipientType.CONDITIONAL,
        "recipient_config": {"userIdFields": ["assigneeId"]},
        "delivery_channels": _IN_APP,
        "batch_delivery": True,
    },
    {
        "trigger_name": "Client Created",
        "description": "Notify when new client is created",
        "trigger_module": "clients",
        "trigger_event": "created",
        "notification_type": "CLIENT_CREATED",
        "title_template": "New Client Added",
        "message_template": 'New client "{{displayName}}" has been added to the system',
        "link_template": "/clients/{{id}}",
        "recipient_type": RecipientType.ROLE_BASED,
        "recipient_config": {"roles": ["admin"]},
        "delivery_channels": _IN_APP,
    },
    {
        "trigger_name": "Entity Created",
        "description": "Notify when new entity is created",
        "trigger_module": "entities",
        "trigger_event": "created",
        "notification_type": "ENTITY_CREATED",
        "title_template": "New Entity Added",
        "message_template": 'New entity "{{name}}" has been created',
        "link_template": "/entities/{{id}}",
        "recipient_type": RecipientType.ROLE_BASED,
        "recipient_config": {"roles": ["admin"]},
        "delivery_channels": _IN_APP,
    },
    {
        "trigger_name": "Invoice Created",
        "description": "Notify when new invoice is created",
        "trigger_module": "finance",
        "trigger_event": "invoice_created",
        "notification_type": "INVOICE_CREATED",
        "title_template": "New Invoice Created",
        "message_template": "Invoice {{invoiceNumber}} has been created for {{clientName}}",
        "link_template": "/finance/invoices/{{id}}",
        "recipient_type": RecipientType.ROLE_BASED,
        "recipient_config": {"roles": ["admin"]},
        "delivery_channels": _IN_APP_AND_EMAIL,
    },
    {
        "trigger_name": "Workflow Approval Requested",
        "description": "Notify approvers when a workflow step waits for them",
        "trigger_module": "workflows",
        "trigger_event": "approval_requested",
        "notification_type": "WORKFLOW_APPROVAL",
        "severity": NotificationSeverity.WARNING,
        "title_template": "Approval Required",
        "message_template": 'Workflow "{{workflowName}}" is waiting for your approval',
        "link_template": "/workflows/{{id}}",
        "recipient_type": RecipientType.CONDITIONAL,
        "recipient_config": {"userIdFields": ["approverIds"]},
        "delivery_channels": _IN_APP_AND_EMAIL,
    },
)


def seed_default_triggers(
    session: Session, *, tenant_id: int, created_by: int
) -> list[NotificationTrigger]:
    """Create the default triggers the tenant does not have yet.

    A default is considered present when the tenant already owns a trigger
    with the same name, module and event, whatever its other settings. The
    newly created triggers are returned; running the seed again returns ``[]``.
    """

    repo = NotificationTriggerRepository(session)
    existing = {
        (trigger.trigger_name, trigger.trigger_module, trigger.trigger_event)
        for trigger in repo.list(tenant_id)
    }

    created: list[NotificationTrigger] = []
    for values in DEFAULT_TRIGGERS:
        key = (values["trigger_name"], values["trigger_module"], values["trigger_event"])
        if key in existing:
            logger.debug("Tenant %s already has trigger %r", tenant_id, values["trigger_name"])
            continue
        trigger = NotificationTrigger(
            id=None,
            tenant_id=tenant_id,
            created_by=created_by,
            **{**values, "recipient_config": dict(values["recipient_config"])},
        )
        validate_trigger(trigger)
        created.append(repo.create(trigger))

    if created:
        notification_cache.invalidate_tenant(tenant_id)
        logger.info("Seeded %d notification triggers for tenant %s", len(created), tenant_id)
    return created
