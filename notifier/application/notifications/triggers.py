"""Map domain events to administrator-defined notification triggers."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from notifier.domain.entities import NotificationTrigger
from notifier.domain.errors import RecipientResolutionError
from notifier.infrastructure.cache import NotificationCache, notification_cache
from notifier.infrastructure.repositories import NotificationTriggerRepository, UserRepository
from notifier.utils import now_in_app_timezone

from .conditions import ConditionError, conditions_match
from .dispatch import DispatchEngine, DispatchRequest
from .recipients import UserRecipientResolver
from .scheduler import DelayedDispatchScheduler
from .templating import render

logger = logging.getLogger(__name__)

ACTIVE_TRIGGERS_CACHE_KEY = "active_triggers"


class TriggerEngine:
    """Fire every active trigger matching ``(module, event)`` for a tenant.

    ``on_event`` is fire-and-forget for producers: every failure is logged
    and one broken trigger never prevents the others from running.
    """

    def __init__(
        self,
        trigger_repository: NotificationTriggerRepository,
        user_repository: UserRepository,
        recipient_resolver: UserRecipientResolver,
        dispatch_engine: DispatchEngine,
        scheduler: DelayedDispatchScheduler,
        *,
        cache: NotificationCache | None = None,
    ) -> None:
        self.trigger_repository = trigger_repository
        self.user_repository = user_repository
        self.recipient_resolver = recipient_resolver
        self.dispatch_engine = dispatch_engine
        self.scheduler = scheduler
        self.cache = notification_cache if cache is None else cache

    def on_event(
        self,
        tenant_id: int,
        module: str,
        event: str,
        payload: Mapping[str, Any] | None = None,
        actor_id: int | None = None,
    ) -> None:
        payload = dict(payload or {})
        try:
            triggers = [
                trigger
                for trigger in self._active_triggers(tenant_id)
                if trigger.trigger_module == module and trigger.trigger_event == event
            ]
        except Exception:
            self.trigger_repository.session.rollback()
            logger.exception("Could not load triggers for %s.%s in tenant %s", module, event, tenant_id)
            return

        if not triggers:
            logger.debug("No active triggers for %s.%s in tenant %s", module, event, tenant_id)
            return

        for trigger in triggers:
            try:
                self._fire(trigger, payload, actor_id)
            except (RecipientResolutionError, ConditionError) as exc:
                logger.warning("Trigger %s (%s) skipped: %s", trigger.id, trigger.trigger_name, exc)
            except Exception:
                self.trigger_repository.session.rollback()
                logger.exception("Trigger %s (%s) failed", trigger.id, trigger.trigger_name)

    def _active_triggers(self, tenant_id: int) -> list[NotificationTrigger]:
        return self.cache.get_or_load(
            (ACTIVE_TRIGGERS_CACHE_KEY, tenant_id),
            lambda: self.trigger_repository.list_active(tenant_id),
        )

    def _fire(
        self, trigger: NotificationTrigger, payload: dict[str, Any], actor_id: int | None
    ) -> None:
        if not conditions_match(trigger.trigger_conditions, payload):
            logger.debug("Trigger %s conditions not met", trigger.id)
            return

        recipients = self.recipient_resolver.resolve(
            trigger.tenant_id,
            trigger.recipient_type,
            trigger.recipient_config,
            payload,
            actor_id,
        )
        if not recipients:
            logger.debug("Trigger %s resolved no recipients", trigger.id)
            return

        variables = self._variables(trigger, payload, actor_id)
        entity_id = payload.get("id")
        request = DispatchRequest(
            tenant_id=trigger.tenant_id,
            recipients=recipients,
            type=trigger.notification_type,
            severity=trigger.severity,
            title=render(trigger.title_template, variables),
            message_body=render(trigger.message_template, variables),
            link_url=render(trigger.link_template, variables) or None,
            delivery_channels=trigger.delivery_channels,
            batch_delivery=trigger.batch_delivery,
            created_by=actor_id,
            related_module=trigger.trigger_module,
            related_entity_id=str(entity_id) if entity_id is not None else None,
            template_variables=payload,
        )

        if trigger.delivery_delay > 0:
            self.scheduler.schedule(request, trigger.delivery_delay)
            return
        self.dispatch_engine.dispatch(request)

    def _variables(
        self, trigger: NotificationTrigger, payload: dict[str, Any], actor_id: int | None
    ) -> dict[str, Any]:
        variables: dict[str, Any] = {**(trigger.template_constants or {}), **payload}
        variables.setdefault("timestamp", now_in_app_timezone().isoformat())
        variables.setdefault("tenantId", trigger.tenant_id)
        if actor_id is not None and ("actor" not in variables or "user" not in variables):
            actor = self.user_repository.get(actor_id, tenant_id=trigger.tenant_id)
            if actor is not None:
                summary = {"id": actor.id, "name": actor.name, "email": actor.email}
                variables.setdefault("actor", summary)
                variables.setdefault("user", summary)
        return variables


__all__ = ["ACTIVE_TRIGGERS_CACHE_KEY", "TriggerEngine"]
