"""Time-triggered sweeps invoked by an external scheduler."""

from .due_notifications import DuePromotionResult, promote_due_notifications
from .task_reminders import (
    DAILY_SUMMARY_TITLE,
    DUE_SOON_TITLE,
    OVERDUE_TITLE,
    TaskReminderResult,
    generate_task_reminders,
)

__all__ = [
    "DAILY_SUMMARY_TITLE",
    "DUE_SOON_TITLE",
    "DuePromotionResult",
    "OVERDUE_TITLE",
    "TaskReminderResult",
    "generate_task_reminders",
    "promote_due_notifications",
]
