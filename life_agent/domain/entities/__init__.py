"""Domain entities exposed by the application."""

from .dispatch_outcome import DeliveryOutcome, DispatchOutcome
from .notification import (
    UNREAD_STATUSES,
    EntityType,
    Notification,
    NotificationContent,
    NotificationStatus,
    NotificationType,
)
from .push_subscription import PushSubscription
from .task import Task
from .user import User

__all__ = [
    "DeliveryOutcome",
    "DispatchOutcome",
    "EntityType",
    "Notification",
    "NotificationContent",
    "NotificationStatus",
    "NotificationType",
    "PushSubscription",
    "Task",
    "UNREAD_STATUSES",
    "User",
]
