"""Wire the notification engines for a database session."""

from __future__ import annotations

from sqlalchemy.orm import Session

from notifier.infrastructure.repositories import (
    EmailDeliveryLogRepository,
    EmailProviderRepository,
    NotificationPreferenceRepository,
    NotificationRepository,
    NotificationTriggerRepository,
    RoleRepository,
    ScheduledDispatchRepository,
    UserRepository,
)

from .analytics import NotificationAnalytics
from .channel_router import ChannelRouter
from .dispatch import DispatchEngine
from .mentions import MentionNotifier
from .preferences import PreferenceResolver
from .recipients import UserRecipientResolver
from .scheduler import DelayedDispatchScheduler
from .triggers import TriggerEngine


def build_preference_resolver(session: Session) -> PreferenceResolver:
    return PreferenceResolver(NotificationPreferenceRepository(session))


def build_channel_router(session: Session) -> ChannelRouter:
    return ChannelRouter(EmailProviderRepository(session), EmailDeliveryLogRepository(session))


def build_dispatch_engine(session: Session) -> DispatchEngine:
    return DispatchEngine(
        NotificationRepository(session),
        UserRepository(session),
        build_preference_resolver(session),
        build_channel_router(session),
    )


def build_scheduler(session: Session) -> DelayedDispatchScheduler:
    return DelayedDispatchScheduler(
        ScheduledDispatchRepository(session), build_dispatch_engine(session)
    )


def build_trigger_engine(session: Session) -> TriggerEngine:
    dispatch_engine = build_dispatch_engine(session)
    user_repository = UserRepository(session)
    return TriggerEngine(
        NotificationTriggerRepository(session),
        user_repository,
        UserRecipientResolver(user_repository, RoleRepository(session)),
        dispatch_engine,
        DelayedDispatchScheduler(ScheduledDispatchRepository(session), dispatch_engine),
    )


def build_mention_notifier(session: Session) -> MentionNotifier:
    return MentionNotifier(UserRepository(session), build_dispatch_engine(session))


def build_analytics(session: Session) -> NotificationAnalytics:
    return NotificationAnalytics(NotificationRepository(session), EmailDeliveryLogRepository(session))


__all__ = [
    "build_analytics",
    "build_channel_router",
    "build_dispatch_engine",
    "build_mention_notifier",
    "build_preference_resolver",
    "build_scheduler",
    "build_trigger_engine",
]
