"""ORM models used by the application infrastructure."""

from .email_delivery_log import EmailDeliveryLogModel
from .email_provider_setting import EmailProviderSettingModel
from .notification import NotificationModel
from .notification_preference import NotificationPreferenceModel
from .notification_trigger import NotificationTriggerModel
from .role import RoleModel
from .scheduled_dispatch import ScheduledDispatchModel
from .user import UserModel

__all__ = [
    "EmailDeliveryLogModel",
    "EmailProviderSettingModel",
    "NotificationModel",
    "NotificationPreferenceModel",
    "NotificationTriggerModel",
    "RoleModel",
    "ScheduledDispatchModel",
    "UserModel",
]
