"""Realtime and push notification adapters for the infrastructure layer."""

from .manager import RealtimeConnectionManager
from .publisher import (
    NEW_NOTIFICATION_EVENT,
    NOTIFICATIONS_READ_EVENT,
    RealtimePublisher,
    WebSocketRealtimePublisher,
    serialize_notification,
    user_topic,
)
from .push import PushTransport, WebPushTransport, build_push_payload

__all__ = [
    "NEW_NOTIFICATION_EVENT",
    "NOTIFICATIONS_READ_EVENT",
    "PushTransport",
    "RealtimeConnectionManager",
    "RealtimePublisher",
    "WebPushTransport",
    "WebSocketRealtimePublisher",
    "build_push_payload",
    "serialize_notification",
    "user_topic",
]
