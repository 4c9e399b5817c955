"""Endpoints for the authenticated user's notification preferences."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from notifier.application.use_cases.preferences import (
    PreferenceInput,
    get_notification_preferences,
    update_notification_preferences,
)
from notifier.domain.entities import User
from notifier.infrastructure.database import get_db
from notifier.interfaces.api.dependencies import get_current_active_user
from notifier.interfaces.api.schemas import PreferenceRead, PreferencesUpdate

router = APIRouter(prefix="/notifications/preferences", tags=["notification-preferences"])


@router.get("", response_model=list[PreferenceRead])
def read_preferences(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> list[PreferenceRead]:
    """Return one entry per notification type; missing rows show the defaults."""

    preferences = get_notification_preferences(
        db, tenant_id=current_user.tenant_id, user_id=current_user.id
    )
    return [PreferenceRead.model_validate(item) for item in preferences]


@router.put("", response_model=list[PreferenceRead])
def replace_preferences(
    payload: PreferencesUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> list[PreferenceRead]:
    preferences = update_notification_preferences(
        db,
        tenant_id=current_user.tenant_id,
        user_id=current_user.id,
        preferences=[PreferenceInput(**item.model_dump()) for item in payload.preferences],
    )
    return [PreferenceRead.model_validate(item) for item in preferences]
