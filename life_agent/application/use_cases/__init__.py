"""Aggregate application use cases."""

from .notifications import NotificationDispatcher
from .sweeps import generate_task_reminders, promote_due_notifications
from .users import authenticate_user, create_user

__all__ = [
    "NotificationDispatcher",
    "authenticate_user",
    "create_user",
    "generate_task_reminders",
    "promote_due_notifications",
]
