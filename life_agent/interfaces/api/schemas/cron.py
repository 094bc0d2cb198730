"""Responses of the time-triggered sweep endpoints."""

from pydantic import BaseModel, Field


class DueNotificationsSweepResponse(BaseModel):
    message: str
    processed: int
    processed_ids: list[int] = Field(default_factory=list)


class TaskRemindersSweepResponse(BaseModel):
    message: str
    users_scanned: int
    notifications_created: int
    suppressed: int = 0
