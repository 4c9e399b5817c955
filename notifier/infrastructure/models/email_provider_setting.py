"""SQLAlchemy model for tenant email provider settings."""

from sqlalchemy import Boolean, Column, DateTime, Integer, JSON, String

from notifier.infrastructure.database import Base
from notifier.utils import now_in_app_naive_datetime


class EmailProviderSettingModel(Base):
    """Vendor credentials; at most one row per tenant has ``is_active`` set."""

    __tablename__ = "email_provider_setting"

    id = Column(Integer, primary_key=True, index=True)
    tenant_id = Column(Integer, nullable=False, index=True)
    provider = Column(String(20), nullable=False)
    is_active = Column(Boolean, nullable=False, default=False)
    from_email = Column(String(120), nullable=False)
    from_name = Column(String(120), nullable=False)
    reply_to_email = Column(String(120), nullable=True)
    api_key = Column(String(500), nullable=False)
    api_secret = Column(String(500), nullable=True)
    smtp_host = Column(String(255), nullable=True)
    smtp_port = Column(Integer, nullable=True)
    smtp_secure = Column(Boolean, nullable=True)
    config_data = Column(JSON, nullable=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(
        DateTime,
        nullable=False,
        default=now_in_app_naive_datetime,
        onupdate=now_in_app_naive_datetime,
    )


__all__ = ["EmailProviderSettingModel"]
