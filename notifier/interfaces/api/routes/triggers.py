"""Administrator endpoints for notification triggers."""

from typing import Any

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from notifier.application.use_cases.triggers import (
    create_trigger,
    delete_trigger,
    get_trigger,
    list_triggers,
    update_trigger,
)
from notifier.domain.entities import NotificationTrigger, User
from notifier.infrastructure.database import get_db
from notifier.interfaces.api.dependencies import require_admin
from notifier.interfaces.api.schemas import TriggerCreate, TriggerRead, TriggerUpdate

router = APIRouter(prefix="/notifications/triggers", tags=["notification-triggers"])


def _entity_fields(data: dict[str, Any]) -> dict[str, Any]:
    if data.get("delivery_channels") is not None:
        data["delivery_channels"] = frozenset(data["delivery_channels"])
    return data


@router.get("", response_model=list[TriggerRead])
def read_triggers(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> list[TriggerRead]:
    return [
        TriggerRead.model_validate(trigger)
        for trigger in list_triggers(db, tenant_id=current_user.tenant_id)
    ]


@router.get("/{trigger_id}", response_model=TriggerRead)
def read_trigger(
    trigger_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> TriggerRead:
    return TriggerRead.model_validate(
        get_trigger(db, tenant_id=current_user.tenant_id, trigger_id=trigger_id)
    )


@router.post("", response_model=TriggerRead, status_code=status.HTTP_201_CREATED)
def create_new_trigger(
    payload: TriggerCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> TriggerRead:
    trigger = NotificationTrigger(
        id=None,
        tenant_id=current_user.tenant_id,
        created_by=current_user.id,
        **_entity_fields(payload.model_dump()),
    )
    return TriggerRead.model_validate(create_trigger(db, trigger=trigger))


@router.put("/{trigger_id}", response_model=TriggerRead)
def update_existing_trigger(
    trigger_id: int,
    payload: TriggerUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> TriggerRead:
    updated = update_trigger(
        db,
        tenant_id=current_user.tenant_id,
        trigger_id=trigger_id,
        changes=_entity_fields(payload.model_dump(exclude_unset=True)),
    )
    return TriggerRead.model_validate(updated)


@router.delete("/{trigger_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_existing_trigger(
    trigger_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> Response:
    delete_trigger(db, tenant_id=current_user.tenant_id, trigger_id=trigger_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
