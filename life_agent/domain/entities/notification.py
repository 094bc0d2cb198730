"""Domain entity representing a user notification."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class NotificationStatus(str, Enum):
    """Lifecycle states of a notification."""

    PENDING = "pending"
    SENT = "sent"
    READ = "read"


UNREAD_STATUSES = (NotificationStatus.PENDING, NotificationStatus.SENT)


class NotificationType(str, Enum):
    TASK_REMINDER = "task_reminder"
    HABIT_REMINDER = "habit_reminder"
    GOAL_DEADLINE = "goal_deadline"
    ACHIEVEMENT = "achievement"
    GENERAL = "general"
    SYSTEM = "system"


class EntityType(str, Enum):
    TASK = "task"
    GOAL = "goal"
    HABIT = "habit"


@dataclass
class NotificationContent:
    """Logical content of a notification before it is persisted."""

    title: str
    message: str = ""
    type: NotificationType = NotificationType.GENERAL
    entity_type: EntityType | None = None
    entity_id: int | None = None
    scheduled_for: datetime | None = None
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass
class Notification:
    """Information message delivered to a specific user."""

    id: int | None
    user_id: int
    type: NotificationType
    title: str
    message: str
    status: NotificationStatus = NotificationStatus.PENDING
    entity_type: EntityType | None = None
    entity_id: int | None = None
    scheduled_for: datetime | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
    created_at: datetime | None = None
    read_at: datetime | None = None

    @property
    def is_read(self) -> bool:
        return self.status is NotificationStatus.READ


__all__ = [
    "EntityType",
    "Notification",
    "NotificationContent",
    "NotificationStatus",
    "NotificationType",
    "UNREAD_STATUSES",
]
