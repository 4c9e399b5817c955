"""Use cases for notification preferences."""

from .get_preferences import get_notification_preferences
from .update_preferences import PreferenceInput, update_notification_preferences

__all__ = [
    "PreferenceInput",
    "get_notification_preferences",
    "update_notification_preferences",
]
