"""Use case for paging through email delivery history."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.orm import Session

from notifier.domain.entities import DeliveryStatus, EmailDeliveryLog
from notifier.domain.errors import ValidationError
from notifier.infrastructure.repositories import EmailDeliveryLogRepository

MAX_PAGE_SIZE = 100


@dataclass
class EmailLogPage:
    logs: list[EmailDeliveryLog]
    total: int
    page: int
    limit: int


def list_email_logs(
    session: Session,
    *,
    tenant_id: int,
    page: int = 1,
    limit: int = 50,
    status: str | None = None,
    provider_id: int | None = None,
) -> EmailLogPage:
    if status is not None:
        try:
            status = DeliveryStatus(status).value
        except ValueError as exc:
            raise ValidationError("Invalid status filter", [f"status: unknown value {status!r}"]) from exc

    page = max(1, page)
    limit = max(1, min(limit, MAX_PAGE_SIZE))
    logs, total = EmailDeliveryLogRepository(session).list(
        tenant_id,
        status=status,
        provider_id=provider_id,
        offset=(page - 1) * limit,
        limit=limit,
    )
    return EmailLogPage(logs=logs, total=total, page=page, limit=limit)
