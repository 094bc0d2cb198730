"""ORM models used by the application infrastructure."""

from .notification import NotificationModel
from .push_subscription import PushSubscriptionModel
from .task import TaskModel
from .user import UserModel

__all__ = [
    "NotificationModel",
    "PushSubscriptionModel",
    "TaskModel",
    "UserModel",
]
