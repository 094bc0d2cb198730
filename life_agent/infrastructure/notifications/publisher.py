"""Publish notification events on per-user realtime topics."""

from __future__ import annotations

import copy
import logging
from typing import Any, Protocol

from life_agent.domain.entities import Notification

from .manager import RealtimeConnectionManager

logger = logging.getLogger(__name__)

NEW_NOTIFICATION_EVENT = "new-notification"
NOTIFICATIONS_READ_EVENT = "notifications-read"


def user_topic(user_id: int) -> str:
    """Return the realtime topic that carries ``user_id``'s notifications."""

    return f"notifications:{user_id}"


class RealtimePublisher(Protocol):
    """Fire-and-forget pub/sub channel used to nudge connected clients."""

    async def publish(self, topic: str, event_name: str, payload: Any) -> None: ...


class WebSocketRealtimePublisher:
    """Deliver events to the websockets subscribed to a topic in this process."""

    def __init__(self, manager: RealtimeConnectionManager) -> None:
        self._manager = manager

    async def publish(self, topic: str, event_name: str, payload: Any) -> None:
        message = {"type": event_name, "data": copy.deepcopy(payload)}
        delivered = await self._manager.send_to_topic(topic, message)
        logger.debug("Published %s on %s to %s connection(s)", event_name, topic, delivered)


def serialize_notification(notification: Notification) -> dict[str, Any]:
    """Return the JSON representation shared by websocket events and push payloads."""

    return {
        "id": notification.id,
        "user_id": notification.user_id,
        "type": notification.type.value,
        "title": notification.title,
        "message": notification.message,
        "status": notification.status.value,
        "entity_type": notification.entity_type.value if notification.entity_type else None,
        "entity_id": notification.entity_id,
        "scheduled_for": _iso_or_none(notification.scheduled_for),
        "metadata": dict(notification.metadata or {}),
        "created_at": _iso_or_none(notification.created_at),
        "read_at": _iso_or_none(notification.read_at),
    }


def _iso_or_none(value) -> str | None:
    return value.isoformat() if value else None


__all__ = [
    "NEW_NOTIFICATION_EVENT",
    "NOTIFICATIONS_READ_EVENT",
    "RealtimePublisher",
    "WebSocketRealtimePublisher",
    "serialize_notification",
    "user_topic",
]
