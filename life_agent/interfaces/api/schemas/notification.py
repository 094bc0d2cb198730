"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from life_agent.domain.entities import (
    EntityType,
    Notification,
    NotificationContent,
    NotificationStatus,
    NotificationType,
)


class NotificationCreate(BaseModel):
    """Body of ``POST /notifications``.

    ``title`` is optional at the schema level so a missing title is reported
    as a 400 by the dispatcher rather than as a request validation error.
    """

    title: str | None = None
    message: str | None = None
    type: NotificationType = NotificationType.GENERAL
    entity_id: int | None = None
    entity_type: EntityType | None = None
    scheduled_for: datetime | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)

    def to_content(self) -> NotificationContent:
        return NotificationContent(
            title=self.title or "",
            message=self.message or "",
            type=self.type,
            entity_type=self.entity_type,
            entity_id=self.entity_id,
            scheduled_for=self.scheduled_for,
            metadata=dict(self.metadata),
        )


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    type: NotificationType
    title: str
    message: str
    status: NotificationStatus
    entity_type: EntityType | None = None
    entity_id: int | None = None
    scheduled_for: datetime | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime
    read_at: datetime | None = None

    @classmethod
    def from_entity(cls, notification: Notification) -> "NotificationRead":
        return cls.model_validate(notification)


class NotificationEnvelope(BaseModel):
    notification: NotificationRead


class NotificationList(BaseModel):
    notifications: list[NotificationRead]


class NotificationReadResponse(BaseModel):
    success: bool = True
    notification: NotificationRead


class MarkAllReadResponse(BaseModel):
    success: bool = True
    updated: int


class UnreadCountResponse(BaseModel):
    unread_count: int


__all__ = [
    "MarkAllReadResponse",
    "NotificationCreate",
    "NotificationEnvelope",
    "NotificationList",
    "NotificationRead",
    "NotificationReadResponse",
    "UnreadCountResponse",
]
