"""Administrator endpoints for email providers and delivery history."""

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from notifier.application.use_cases.email_providers import (
    activate_email_provider,
    create_email_provider,
    delete_email_provider,
    get_email_provider,
    list_email_logs,
    list_email_providers,
    send_test_email,
    update_email_provider,
)
from notifier.domain.entities import DeliveryStatus, EmailProviderSetting, User
from notifier.infrastructure.database import get_db
from notifier.interfaces.api.dependencies import require_admin
from notifier.interfaces.api.schemas import (
    EmailDeliveryLogRead,
    EmailLogListResponse,
    EmailProviderCreate,
    EmailProviderRead,
    EmailProviderUpdate,
    ProviderTestRequest,
    ProviderTestResponse,
)

router = APIRouter(prefix="/notifications", tags=["email-providers"])


def _to_read(setting: EmailProviderSetting) -> EmailProviderRead:
    return EmailProviderRead.model_validate(setting.masked())


@router.get("/email-providers", response_model=list[EmailProviderRead])
def read_providers(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> list[EmailProviderRead]:
    return [_to_read(item) for item in list_email_providers(db, tenant_id=current_user.tenant_id)]


@router.get("/email-providers/{provider_id}", response_model=EmailProviderRead)
def read_provider(
    provider_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> EmailProviderRead:
    return _to_read(
        get_email_provider(db, tenant_id=current_user.tenant_id, provider_id=provider_id)
    )


@router.post(
    "/email-providers", response_model=EmailProviderRead, status_code=status.HTTP_201_CREATED
)
def create_provider(
    payload: EmailProviderCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> EmailProviderRead:
    data = payload.model_dump()
    data["config_data"] = data.get("config_data") or {}
    setting = EmailProviderSetting(id=None, tenant_id=current_user.tenant_id, **data)
    return _to_read(create_email_provider(db, setting=setting))


@router.put("/email-providers/{provider_id}", response_model=EmailProviderRead)
def update_provider(
    provider_id: int,
    payload: EmailProviderUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> EmailProviderRead:
    changes = payload.model_dump(exclude_unset=True)
    if "config_data" in changes:
        changes["config_data"] = changes["config_data"] or {}
    return _to_read(
        update_email_provider(
            db, tenant_id=current_user.tenant_id, provider_id=provider_id, changes=changes
        )
    )


@router.post("/email-providers/{provider_id}/activate", response_model=EmailProviderRead)
def activate_provider(
    provider_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> EmailProviderRead:
    return _to_read(
        activate_email_provider(db, tenant_id=current_user.tenant_id, provider_id=provider_id)
    )


@router.delete("/email-providers/{provider_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_provider(
    provider_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> Response:
    delete_email_provider(db, tenant_id=current_user.tenant_id, provider_id=provider_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/email-providers/{provider_id}/test", response_model=ProviderTestResponse)
def send_provider_test_email(
    provider_id: int,
    payload: ProviderTestRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> ProviderTestResponse:
    """Send a live test email through the provider; the attempt is logged."""

    result = send_test_email(
        db,
        tenant_id=current_user.tenant_id,
        provider_id=provider_id,
        test_email=str(payload.test_email),
    )
    return ProviderTestResponse(success=result.success, error_message=result.error_message)


@router.get("/email-logs", response_model=EmailLogListResponse)
def read_email_logs(
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=100),
    delivery_status: DeliveryStatus | None = Query(None, alias="status"),
    provider_id: int | None = Query(None, alias="providerId"),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> EmailLogListResponse:
    result = list_email_logs(
        db,
        tenant_id=current_user.tenant_id,
        page=page,
        limit=limit,
        status=delivery_status.value if delivery_status else None,
        provider_id=provider_id,
    )
    return EmailLogListResponse(
        logs=[EmailDeliveryLogRead.model_validate(log) for log in result.logs],
        total=result.total,
        page=result.page,
        limit=result.limit,
    )
