"""Repository implementations."""

from .email_delivery_log_repository import EmailDeliveryLogRepository
from .email_provider_repository import EmailProviderRepository
from .notification_preference_repository import NotificationPreferenceRepository
from .notification_repository import NotificationRepository
from .notification_trigger_repository import NotificationTriggerRepository
from .role_repository import RoleRepository
from .scheduled_dispatch_repository import ScheduledDispatchRepository
from .user_repository import UserRepository

__all__ = [
    "EmailDeliveryLogRepository",
    "EmailProviderRepository",
    "NotificationPreferenceRepository",
    "NotificationRepository",
    "NotificationTriggerRepository",
    "RoleRepository",
    "ScheduledDispatchRepository",
    "UserRepository",
]
