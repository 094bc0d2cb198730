"""Domain entity representing a user task."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Task:
    """To-do item whose due date drives reminder generation."""

    id: int | None
    user_id: int
    title: str
    description: str | None = None
    priority: str = "medium"
    due_date: datetime | None = None
    is_completed: bool = False
    created_at: datetime | None = None


__all__ = ["Task"]
