"""Sweep endpoints called by an external scheduler."""

from __future__ import annotations

from datetime import timedelta

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from life_agent.application.use_cases.notifications import NotificationDispatcher
from life_agent.application.use_cases.sweeps import (
    generate_task_reminders,
    promote_due_notifications,
)
from life_agent.config import Settings
from life_agent.infrastructure.database import get_db
from life_agent.interfaces.api.dependencies import (
    get_dispatcher,
    get_settings_from_app,
    require_cron_secret,
)
from life_agent.interfaces.api.schemas import (
    DueNotificationsSweepResponse,
    TaskRemindersSweepResponse,
)

router = APIRouter(
    prefix="/cron",
    tags=["cron"],
    dependencies=[Depends(require_cron_secret)],
)


@router.api_route(
    "/notifications",
    methods=["GET", "POST"],
    response_model=DueNotificationsSweepResponse,
)
def process_due_notifications(db: Session = Depends(get_db)) -> DueNotificationsSweepResponse:
    """Promote pending notifications whose scheduled time has passed."""

    result = promote_due_notifications(db)
    return DueNotificationsSweepResponse(
        message=f"Processed {result.processed} notifications",
        processed=result.processed,
        processed_ids=result.processed_ids,
    )


@router.api_route(
    "/tasks",
    methods=["GET", "POST"],
    response_model=TaskRemindersSweepResponse,
)
async def generate_reminders(
    db: Session = Depends(get_db),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
    settings: Settings = Depends(get_settings_from_app),
) -> TaskRemindersSweepResponse:
    """Create overdue, due-soon and daily-summary reminders for every active user."""

    suppression_window = None
    if settings.reminder_suppression_minutes:
        suppression_window = timedelta(minutes=settings.reminder_suppression_minutes)

    result = await generate_task_reminders(
        db, dispatcher, suppression_window=suppression_window
    )
    return TaskRemindersSweepResponse(
        message="Task notifications generated",
        users_scanned=result.users_scanned,
        notifications_created=result.notifications_created,
        suppressed=result.suppressed,
    )
