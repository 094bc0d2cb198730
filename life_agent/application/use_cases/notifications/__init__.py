"""Public helpers for creating, delivering and acknowledging notifications."""

from .dispatcher import EndpointGoneHook, NotificationDispatcher
from .read import (
    count_unread,
    list_notifications,
    list_unread,
    list_upcoming,
    mark_all_as_read,
    mark_as_read,
)

__all__ = [
    "EndpointGoneHook",
    "NotificationDispatcher",
    "count_unread",
    "list_notifications",
    "list_unread",
    "list_upcoming",
    "mark_all_as_read",
    "mark_as_read",
]
