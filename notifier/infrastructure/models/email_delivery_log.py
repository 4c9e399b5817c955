"""SQLAlchemy model for email delivery attempts."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from notifier.infrastructure.database import Base
from notifier.utils import now_in_app_naive_datetime


class EmailDeliveryLogModel(Base):
    """One row per outbound email attempt."""

    __tablename__ = "email_delivery_log"

    id = Column(Integer, primary_key=True, index=True)
    tenant_id = Column(Integer, nullable=False, index=True)
    provider_id = Column(
        Integer,
        ForeignKey("email_provider_setting.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    notification_id = Column(Integer, nullable=True)
    recipient_email = Column(String(120), nullable=False)
    subject = Column(String(255), nullable=False)
    status = Column(String(20), nullable=False, index=True)
    provider_message_id = Column(String(255), nullable=True)
    error_message = Column(Text, nullable=True)
    sent_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)
    delivered_at = Column(DateTime, nullable=True)
    opened_at = Column(DateTime, nullable=True)
    clicked_at = Column(DateTime, nullable=True)

    provider = relationship("EmailProviderSettingModel", lazy="joined")


__all__ = ["EmailDeliveryLogModel"]
