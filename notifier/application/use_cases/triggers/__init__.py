"""Use cases for managing notification triggers."""

from .create_trigger import create_trigger
from .delete_trigger import delete_trigger
from .get_trigger import get_trigger, list_triggers
from .seed_triggers import DEFAULT_TRIGGERS, seed_default_triggers
from .update_trigger import update_trigger
from .validators import validate_trigger

__all__ = [
    "DEFAULT_TRIGGERS",
    "create_trigger",
    "delete_trigger",
    "get_trigger",
    "list_triggers",
    "seed_default_triggers",
    "update_trigger",
    "validate_trigger",
]
