"""Read-side aggregation over notifications and email delivery logs."""

from __future__ import annotations

from typing import Any

from notifier.domain.entities import DeliveryStatus
from notifier.infrastructure.repositories import (
    EmailDeliveryLogRepository,
    NotificationRepository,
)


class NotificationAnalytics:
    def __init__(
        self,
        notification_repository: NotificationRepository,
        log_repository: EmailDeliveryLogRepository,
    ) -> None:
        self.notification_repository = notification_repository
        self.log_repository = log_repository

    def stats(self, tenant_id: int, *, user_id: int | None = None) -> dict[str, Any]:
        """Return notification totals and email outcomes for a tenant.

        ``user_id`` narrows the notification counts to one recipient; email
        delivery counts are always tenant wide.
        """

        total, unread = self.notification_repository.count_totals(tenant_id, user_id=user_id)
        by_status = {status.value: 0 for status in DeliveryStatus}
        by_status.update(self.log_repository.count_by_status(tenant_id))
        return {
            "notifications": {
                "total": total,
                "unread": unread,
                "byType": self.notification_repository.count_by_type(tenant_id, user_id=user_id),
                "bySeverity": self.notification_repository.count_by_severity(
                    tenant_id, user_id=user_id
                ),
            },
            "emailDelivery": {
                "total": sum(by_status.values()),
                "byStatus": by_status,
            },
        }


__all__ = ["NotificationAnalytics"]
