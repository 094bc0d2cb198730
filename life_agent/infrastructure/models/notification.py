"""SQLAlchemy model for persisted notifications."""

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Index, Integer, String, Text

from life_agent.infrastructure.database import Base
from life_agent.utils import storage_now


class NotificationModel(Base):
    """Database representation for user notifications."""

    __tablename__ = "notification"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    type = Column(String(30), nullable=False)
    title = Column(String(200), nullable=False)
    message = Column(Text, nullable=False, default="")
    status = Column(String(10), nullable=False, default="pending")
    entity_type = Column(String(20), nullable=True)
    entity_id = Column(Integer, nullable=True)
    scheduled_for = Column(DateTime, nullable=True)
    # ``metadata`` is reserved on declarative classes.
    metadata_ = Column("metadata", JSON, nullable=False, default=dict)
    created_at = Column(DateTime, nullable=False, default=storage_now)
    read_at = Column(DateTime, nullable=True)

    __table_args__ = (
        Index("ix_notification_user_status", "user_id", "status"),
        Index("ix_notification_status_scheduled", "status", "scheduled_for"),
    )


__all__ = ["NotificationModel"]
