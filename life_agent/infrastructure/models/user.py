"""SQLAlchemy model for the user table."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String

from life_agent.infrastructure.database import Base
from life_agent.utils import storage_now


class UserModel(Base):
    """Database representation of an application user."""

    __tablename__ = "user"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(120), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, default=storage_now)
    last_login = Column(DateTime, nullable=True)


__all__ = ["UserModel"]
