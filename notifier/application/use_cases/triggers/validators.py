"""Validation shared by trigger create and update."""

from __future__ import annotations

from notifier.application.notifications import Template
from notifier.domain.entities import NOTIFICATION_TYPES, NotificationTrigger, RecipientType
from notifier.domain.errors import ValidationError

_CONFIG_KEYS = {
    RecipientType.SPECIFIC_USERS: "userIds",
    RecipientType.ROLE_BASED: "roles",
    RecipientType.DEPARTMENT_BASED: "departments",
    RecipientType.CONDITIONAL: "userIdFields",
}


def _check_template(field: str, source: str | None, errors: list[str], *, required: bool) -> None:
    if not source or not source.strip():
        if required:
            errors.append(f"{field}: must not be empty")
        return
    template = Template.parse(source)
    if source.count("{{") != len([node for node in template.nodes if not isinstance(node, str)]):
        errors.append(f"{field}: contains a malformed placeholder")


def validate_trigger(trigger: NotificationTrigger) -> None:
    """Raise :class:`ValidationError` listing every problem with ``trigger``."""

    errors: list[str] = []
    for field, value in (
        ("triggerName", trigger.trigger_name),
        ("triggerModule", trigger.trigger_module),
        ("triggerEvent", trigger.trigger_event),
    ):
        if not (value or "").strip():
            errors.append(f"{field}: must not be empty")

    if trigger.notification_type not in NOTIFICATION_TYPES:
        errors.append(f"notificationType: unknown type {trigger.notification_type!r}")

    _check_template("titleTemplate", trigger.title_template, errors, required=True)
    _check_template("messageTemplate", trigger.message_template, errors, required=True)
    _check_template("linkTemplate", trigger.link_template, errors, required=False)

    if not trigger.delivery_channels:
        errors.append("deliveryChannels: at least one channel is required")
    if trigger.delivery_delay < 0:
        errors.append("deliveryDelay: must be zero or positive")

    config_key = _CONFIG_KEYS.get(RecipientType(trigger.recipient_type))
    if config_key is not None:
        value = (trigger.recipient_config or {}).get(config_key)
        if not isinstance(value, list) or not value:
            errors.append(f"recipientConfig.{config_key}: a non-empty list is required")

    if trigger.trigger_conditions is not None and not isinstance(trigger.trigger_conditions, dict):
        errors.append("triggerConditions: must be an object")

    if errors:
        raise ValidationError("Invalid trigger", errors)
