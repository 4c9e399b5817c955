"""SQLAlchemy model for persisted notifications."""

from sqlalchemy import Boolean, Column, DateTime, Index, Integer, JSON, String, Text

from notifier.infrastructure.database import Base
from notifier.utils import now_in_app_naive_datetime


class NotificationModel(Base):
    """Database representation for per-recipient notifications."""

    __tablename__ = "notification"
    __table_args__ = (
        Index("ix_notification_tenant_user_read", "tenant_id", "user_id", "is_read"),
    )

    id = Column(Integer, primary_key=True, index=True)
    tenant_id = Column(Integer, nullable=False, index=True)
    user_id = Column(Integer, nullable=False, index=True)
    title = Column(String(255), nullable=False)
    message_body = Column(Text, nullable=False)
    link_url = Column(String(500), nullable=True)
    type = Column(String(60), nullable=False)
    severity = Column(String(20), nullable=False, default="INFO")
    is_read = Column(Boolean, nullable=False, default=False)
    read_at = Column(DateTime(), nullable=True)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)
    created_by = Column(Integer, nullable=True)
    related_module = Column(String(60), nullable=True)
    related_entity_id = Column(String(60), nullable=True)
    template_variables = Column(JSON, nullable=True)


__all__ = ["NotificationModel"]
