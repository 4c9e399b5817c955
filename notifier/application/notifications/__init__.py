"""Notification dispatch, trigger evaluation and email routing."""

from .analytics import NotificationAnalytics
from .channel_router import ChannelRouter
from .conditions import ConditionError, conditions_match
from .dispatch import ALL_CHANNELS, DispatchEngine, DispatchRequest
from .factory import (
    build_analytics,
    build_channel_router,
    build_dispatch_engine,
    build_mention_notifier,
    build_preference_resolver,
    build_scheduler,
    build_trigger_engine,
)
from .mentions import MentionNotifier, extract_mentions
from .preferences import Eligibility, PreferenceResolver
from .producers import (
    notify_invoice_payment,
    notify_system_alert,
    notify_task_assignment,
    notify_task_completion,
    notify_workflow_approval,
)
from .recipients import UserRecipientResolver
from .scheduler import DelayedDispatchScheduler, run_scheduler_forever, run_scheduler_once
from .templating import Template, render
from .triggers import TriggerEngine

__all__ = [
    "ALL_CHANNELS",
    "ChannelRouter",
    "ConditionError",
    "DelayedDispatchScheduler",
    "DispatchEngine",
    "DispatchRequest",
    "Eligibility",
    "MentionNotifier",
    "NotificationAnalytics",
    "PreferenceResolver",
    "Template",
    "TriggerEngine",
    "UserRecipientResolver",
    "build_analytics",
    "build_channel_router",
    "build_dispatch_engine",
    "build_mention_notifier",
    "build_preference_resolver",
    "build_scheduler",
    "build_trigger_engine",
    "conditions_match",
    "extract_mentions",
    "notify_invoice_payment",
    "notify_system_alert",
    "notify_task_assignment",
    "notify_task_completion",
    "notify_workflow_approval",
    "render",
    "run_scheduler_forever",
    "run_scheduler_once",
]
