"""Domain entity representing a browser push subscription."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass
class PushSubscription:
    """Push endpoint and encryption keys registered by one user."""

    id: int | None
    user_id: int
    endpoint: str
    p256dh: str
    auth: str
    expiration_time: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def to_subscription_info(self) -> dict[str, Any]:
        """Return the structure browsers produce from ``PushSubscription.toJSON()``."""

        return {
            "endpoint": self.endpoint,
            "expirationTime": self.expiration_time,
            "keys": {"p256dh": self.p256dh, "auth": self.auth},
        }


__all__ = ["PushSubscription"]
