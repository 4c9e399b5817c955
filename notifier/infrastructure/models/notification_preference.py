"""SQLAlchemy model for notification preferences."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String, Time, UniqueConstraint

from notifier.infrastructure.database import Base
from notifier.utils import now_in_app_naive_datetime


class NotificationPreferenceModel(Base):
    """One row per ``(tenant, user, notification type)`` the user customised."""

    __tablename__ = "notification_preference"
    __table_args__ = (
        UniqueConstraint(
            "tenant_id",
            "user_id",
            "notification_type",
            name="uq_notification_preference_tenant_user_type",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    tenant_id = Column(Integer, nullable=False, index=True)
    user_id = Column(Integer, nullable=False, index=True)
    notification_type = Column(String(60), nullable=False)
    in_app_enabled = Column(Boolean, nullable=False, default=True)
    email_enabled = Column(Boolean, nullable=False, default=False)
    digest_frequency = Column(String(20), nullable=False, default="never")
    quiet_hours = Column(Boolean, nullable=False, default=False)
    quiet_start = Column(Time, nullable=True)
    quiet_end = Column(Time, nullable=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(
        DateTime,
        nullable=False,
        default=now_in_app_naive_datetime,
        onupdate=now_in_app_naive_datetime,
    )


__all__ = ["NotificationPreferenceModel"]
