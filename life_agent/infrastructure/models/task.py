"""SQLAlchemy model for user tasks."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text

from life_agent.infrastructure.database import Base
from life_agent.utils import storage_now


class TaskModel(Base):
    """Database representation of a task; only its due date matters here."""

    __tablename__ = "task"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    priority = Column(String(20), nullable=False, default="medium")
    due_date = Column(DateTime, nullable=True, index=True)
    is_completed = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=storage_now)


__all__ = ["TaskModel"]
