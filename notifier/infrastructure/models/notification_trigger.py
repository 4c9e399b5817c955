"""SQLAlchemy model for notification triggers."""

from sqlalchemy import Boolean, Column, DateTime, Index, Integer, JSON, String, Text

from notifier.infrastructure.database import Base
from notifier.utils import now_in_app_naive_datetime


class NotificationTriggerModel(Base):
    """Database representation of an event-to-notification rule."""

    __tablename__ = "notification_trigger"
    __table_args__ = (
        Index(
            "ix_notification_trigger_lookup",
            "tenant_id",
            "trigger_module",
            "trigger_event",
            "is_active",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    tenant_id = Column(Integer, nullable=False, index=True)
    trigger_name = Column(String(120), nullable=False)
    description = Column(Text, nullable=True)
    trigger_module = Column(String(60), nullable=False)
    trigger_event = Column(String(60), nullable=False)
    trigger_conditions = Column(JSON, nullable=True)
    notification_type = Column(String(60), nullable=False)
    severity = Column(String(20), nullable=False, default="INFO")
    title_template = Column(String(255), nullable=False)
    message_template = Column(Text, nullable=False)
    link_template = Column(String(500), nullable=True)
    recipient_type = Column(String(30), nullable=False)
    recipient_config = Column(JSON, nullable=False, default=dict)
    delivery_channels = Column(JSON, nullable=False, default=lambda: ["in_app"])
    delivery_delay = Column(Integer, nullable=False, default=0)
    batch_delivery = Column(Boolean, nullable=False, default=False)
    template_constants = Column(JSON, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_by = Column(Integer, nullable=False)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(
        DateTime,
        nullable=False,
        default=now_in_app_naive_datetime,
        onupdate=now_in_app_naive_datetime,
    )


__all__ = ["NotificationTriggerModel"]
