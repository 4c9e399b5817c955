"""Notification inbox endpoints, dispatch, events and the realtime websocket."""

from __future__ import annotations

from typing import Any

from fastapi import (
    APIRouter,
    Depends,
    HTTPException,
    Query,
    Response,
    WebSocket,
    WebSocketDisconnect,
    status,
)
from sqlalchemy.orm import Session

from notifier.application.use_cases.notifications import (
    clear_notification_cache,
    count_unread_notifications,
    create_notification,
    get_notification_analytics,
    list_notifications,
    mark_all_notifications_as_read,
    mark_notification_as_read,
    mark_notifications_as_read,
    publish_event,
)
from notifier.domain.entities import NotificationSeverity, User
from notifier.infrastructure.database import SessionLocal, get_db
from notifier.infrastructure.realtime import notification_manager, serialize_notification
from notifier.infrastructure.repositories import NotificationRepository
from notifier.interfaces.api.dependencies import (
    get_current_active_user,
    require_admin,
    resolve_current_user,
)
from notifier.interfaces.api.schemas import (
    BulkMarkReadRequest,
    CountResponse,
    EventPublishRequest,
    NotificationCreate,
    NotificationListResponse,
    NotificationRead,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=NotificationListResponse)
def list_user_notifications(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    unread_only: bool = Query(False, alias="unreadOnly"),
    notification_type: str | None = Query(None, alias="type"),
    severity: NotificationSeverity | None = Query(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> NotificationListResponse:
    """Return a page of the authenticated user's notifications, newest first."""

    result = list_notifications(
        db,
        tenant_id=current_user.tenant_id,
        user_id=current_user.id,
        page=page,
        limit=limit,
        unread_only=unread_only,
        notification_type=notification_type,
        severity=severity.value if severity else None,
    )
    return NotificationListResponse(
        notifications=[NotificationRead.model_validate(item) for item in result.notifications],
        total=result.total,
        unread_count=result.unread_count,
        page=result.page,
        limit=result.limit,
    )


@router.get("/unread-count", response_model=CountResponse)
def unread_count(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> CountResponse:
    return CountResponse(
        count=count_unread_notifications(
            db, tenant_id=current_user.tenant_id, user_id=current_user.id
        )
    )


@router.put("/{notification_id}/read", status_code=status.HTTP_204_NO_CONTENT)
def mark_as_read(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> Response:
    mark_notification_as_read(
        db,
        tenant_id=current_user.tenant_id,
        user_id=current_user.id,
        notification_id=notification_id,
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.api_route("/mark-all-read", methods=["PUT", "POST"], response_model=CountResponse)
def mark_all_as_read(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> CountResponse:
    return CountResponse(
        count=mark_all_notifications_as_read(
            db, tenant_id=current_user.tenant_id, user_id=current_user.id
        )
    )


@router.post("/bulk-mark-read", response_model=CountResponse)
def bulk_mark_as_read(
    payload: BulkMarkReadRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> CountResponse:
    return CountResponse(
        count=mark_notifications_as_read(
            db,
            tenant_id=current_user.tenant_id,
            user_id=current_user.id,
            notification_ids=payload.unique_ids(),
        )
    )


@router.post("", response_model=list[NotificationRead], status_code=status.HTTP_201_CREATED)
def create_user_notification(
    payload: NotificationCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> list[NotificationRead]:
    """Dispatch a notification to explicit recipients of the caller's tenant."""

    created = create_notification(
        db,
        tenant_id=current_user.tenant_id,
        recipients=payload.recipients,
        notification_type=payload.type,
        title=payload.title,
        message_body=payload.message_body,
        severity=payload.severity,
        link_url=payload.link_url,
        delivery_channels=payload.delivery_channels,
        created_by=current_user.id,
        related_module=payload.related_module,
        related_entity_id=payload.related_entity_id,
    )
    return [NotificationRead.model_validate(item) for item in created]


@router.post("/events", status_code=status.HTTP_202_ACCEPTED)
def publish_domain_event(
    payload: EventPublishRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> dict[str, Any]:
    """Feed a ``{module, event, payload}`` tuple to the tenant's triggers."""

    publish_event(
        db,
        tenant_id=current_user.tenant_id,
        module=payload.module,
        event=payload.event,
        payload=payload.payload,
        actor_id=current_user.id,
    )
    return {"accepted": True}


@router.get("/analytics")
def notification_analytics(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> dict[str, Any]:
    """Tenant-wide statistics for administrators, personal ones otherwise."""

    user_id = None if current_user.is_admin() else current_user.id
    return get_notification_analytics(db, tenant_id=current_user.tenant_id, user_id=user_id)


@router.post("/clear-cache")
def clear_cache(current_user: User = Depends(require_admin)) -> dict[str, str]:
    clear_notification_cache()
    return {"message": "Notification cache cleared"}


@router.websocket("/ws")
async def notifications_websocket(websocket: WebSocket) -> None:
    """Websocket endpoint that streams notifications to the authenticated user."""

    token = websocket.query_params.get("token")
    if not token:
        await websocket.close(code=1008)
        return

    session = SessionLocal()
    try:
        user = resolve_current_user(token, session)
        if not user.is_active:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Inactive user")
        pending, _ = NotificationRepository(session).list_for_user(
            user.tenant_id, user.id, unread_only=True, limit=50
        )
    except HTTPException:
        await websocket.close(code=1008)
        return
    finally:
        session.close()

    await notification_manager.connect(user.tenant_id, user.id, websocket)
    try:
        if pending:
            await websocket.send_json(
                {"type": "init", "data": [serialize_notification(item) for item in pending]}
            )
        while True:
            message = await websocket.receive_json()
            if not isinstance(message, dict):
                continue

            message_type = message.get("type")
            if message_type == "ping":
                await websocket.send_json({"type": "pong"})
            elif message_type == "ack":
                ids = message.get("ids", [])
                if isinstance(ids, list) and ids:
                    ack_session = SessionLocal()
                    try:
                        NotificationRepository(ack_session).mark_many_as_read(
                            ids, tenant_id=user.tenant_id, user_id=user.id
                        )
                    finally:
                        ack_session.close()
    except WebSocketDisconnect:
        pass
    finally:
        notification_manager.disconnect(user.tenant_id, user.id, websocket)
