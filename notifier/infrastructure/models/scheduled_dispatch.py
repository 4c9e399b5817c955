"""SQLAlchemy model for delayed dispatch requests."""

from sqlalchemy import Column, DateTime, Integer, JSON, Text

from notifier.infrastructure.database import Base
from notifier.utils import now_in_app_naive_datetime


class ScheduledDispatchModel(Base):
    """Queue row deleted once its dispatch has succeeded."""

    __tablename__ = "scheduled_dispatch"

    id = Column(Integer, primary_key=True, index=True)
    tenant_id = Column(Integer, nullable=False, index=True)
    due_at = Column(DateTime, nullable=False, index=True)
    payload = Column(JSON, nullable=False)
    attempts = Column(Integer, nullable=False, default=0)
    last_error = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)


__all__ = ["ScheduledDispatchModel"]
