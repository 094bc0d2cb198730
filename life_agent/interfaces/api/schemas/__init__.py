from .auth import Token
from .cron import DueNotificationsSweepResponse, TaskRemindersSweepResponse
from .notification import (
    MarkAllReadResponse,
    NotificationCreate,
    NotificationEnvelope,
    NotificationList,
    NotificationRead,
    NotificationReadResponse,
    UnreadCountResponse,
)
from .push_subscription import (
    PushSubscriptionEnvelope,
    PushSubscriptionKeys,
    PushSubscriptionPayload,
    PushSubscriptionResult,
    VapidPublicKeyResponse,
)

__all__ = [
    "DueNotificationsSweepResponse",
    "MarkAllReadResponse",
    "NotificationCreate",
    "NotificationEnvelope",
    "NotificationList",
    "NotificationRead",
    "NotificationReadResponse",
    "PushSubscriptionEnvelope",
    "PushSubscriptionKeys",
    "PushSubscriptionPayload",
    "PushSubscriptionResult",
    "TaskRemindersSweepResponse",
    "Token",
    "UnreadCountResponse",
    "VapidPublicKeyResponse",
]
