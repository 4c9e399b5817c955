"""Schemas for notification preferences."""

from __future__ import annotations

from datetime import time

from pydantic import Field

from .common import CamelModel


class PreferenceItem(CamelModel):
    notification_type: str
    in_app_enabled: bool = True
    email_enabled: bool = False
    digest_frequency: str = "never"
    quiet_hours: bool = False
    quiet_start: time | None = None
    quiet_end: time | None = None


class PreferenceRead(PreferenceItem):
    id: int | None = None


class PreferencesUpdate(CamelModel):
    preferences: list[PreferenceItem] = Field(default_factory=list)


__all__ = ["PreferenceItem", "PreferenceRead", "PreferencesUpdate"]
