"""SQLAlchemy model for browser push subscriptions."""

from sqlalchemy import BigInteger, Column, DateTime, ForeignKey, Integer, String

from life_agent.infrastructure.database import Base
from life_agent.utils import storage_now


class PushSubscriptionModel(Base):
    """One push endpoint per user; ``user_id`` is the upsert key."""

    __tablename__ = "push_subscription"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("user.id"), nullable=False, unique=True, index=True)
    endpoint = Column(String(1024), nullable=False)
    p256dh = Column(String(255), nullable=False)
    auth = Column(String(255), nullable=False)
    expiration_time = Column(BigInteger, nullable=True)
    created_at = Column(DateTime, nullable=False, default=storage_now)
    updated_at = Column(DateTime, nullable=True, onupdate=storage_now)


__all__ = ["PushSubscriptionModel"]
