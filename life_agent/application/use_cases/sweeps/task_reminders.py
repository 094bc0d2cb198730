"""Derive reminder notifications from the state of every active user's tasks."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from functools import partial

from anyio import to_thread
from sqlalchemy.orm import Session

from life_agent.application.use_cases.notifications import NotificationDispatcher
from life_agent.domain.entities import EntityType, NotificationContent, NotificationType
from life_agent.infrastructure.repositories import (
    NotificationRepository,
    TaskRepository,
    UserRepository,
)
from life_agent.utils import day_bounds, ensure_timezone, now_in_timezone

logger = logging.getLogger(__name__)

DUE_SOON_WINDOW = timedelta(hours=1)

OVERDUE_TITLE = "You have overdue tasks!"
DUE_SOON_TITLE = "Task Due Soon"
DAILY_SUMMARY_TITLE = "Your Daily Summary"


@dataclass
class TaskReminderResult:
    users_scanned: int = 0
    notifications_created: int = 0
    suppressed: int = 0


class _ReminderRun:
    """State of one sweep over all active users."""

    def __init__(
        self,
        session: Session,
        dispatcher: NotificationDispatcher,
        *,
        now: datetime,
        suppression_window: timedelta | None,
    ) -> None:
        self.tasks = TaskRepository(session)
        self.notifications = NotificationRepository(session)
        self.dispatcher = dispatcher
        self.now = now
        self.suppression_window = suppression_window
        self.result = TaskReminderResult()

    async def scan_user(self, user_id: int) -> None:
        overdue = await to_thread.run_sync(
            partial(self.tasks.list_overdue, user_id, now=self.now)
        )
        if overdue:
            await self._emit(
                user_id,
                NotificationContent(
                    type=NotificationType.TASK_REMINDER,
                    title=OVERDUE_TITLE,
                    message=f"You have {len(overdue)} task(s) that are past their due date.",
                ),
            )

        due_soon = await to_thread.run_sync(
            partial(
                self.tasks.list_due_between,
                user_id,
                start=self.now,
                end=self.now + DUE_SOON_WINDOW,
            )
        )
        for task in due_soon:
            await self._emit(
                user_id,
                NotificationContent(
                    type=NotificationType.TASK_REMINDER,
                    title=DUE_SOON_TITLE,
                    message=f'Your task "{task.title}" is due in the next hour.',
                    entity_type=EntityType.TASK,
                    entity_id=task.id,
                ),
            )

        day_start, day_end = day_bounds(self.now, self.dispatcher.timezone)
        today = await to_thread.run_sync(
            partial(
                self.tasks.list_due_between,
                user_id,
                start=day_start,
                end=day_end,
                incomplete_only=False,
            )
        )
        if today:
            await self._emit(
                user_id,
                NotificationContent(
                    type=NotificationType.TASK_REMINDER,
                    title=DAILY_SUMMARY_TITLE,
                    message=f"You have {len(today)} tasks scheduled for today.",
                ),
            )

    async def _emit(self, user_id: int, content: NotificationContent) -> None:
        if await self._recently_sent(user_id, content):
            self.result.suppressed += 1
            logger.debug("Suppressed reminder %r for user %s", content.title, user_id)
            return
        await self.dispatcher.dispatch(user_id, content, now=self.now)
        self.result.notifications_created += 1

    async def _recently_sent(self, user_id: int, content: NotificationContent) -> bool:
        if not self.suppression_window:
            return False
        # Only the summaries are de-duplicated; per-task reminders share one title.
        if content.entity_id is not None:
            return False
        return await to_thread.run_sync(
            partial(
                self.notifications.exists_recent,
                user_id,
                title=content.title,
                since=self.now - self.suppression_window,
            )
        )


async def generate_task_reminders(
    session: Session,
    dispatcher: NotificationDispatcher,
    *,
    now: datetime | None = None,
    suppression_window: timedelta | None = None,
) -> TaskReminderResult:
    """Create overdue, due-soon and daily-summary reminders for every active user.

    Users are processed one after the other, with store reads run in worker
    threads. "Today" is the calendar day of ``now`` in the dispatcher's
    ``APP_TIMEZONE``. Without a ``suppression_window`` every run recreates the
    same reminders; with one, summaries already created inside the window are
    skipped.
    """

    tz = dispatcher.timezone
    now = ensure_timezone(now, tz) if now else now_in_timezone(tz)
    run = _ReminderRun(
        session, dispatcher, now=now, suppression_window=suppression_window
    )
    user_ids = await to_thread.run_sync(UserRepository(session).list_active_ids)
    for user_id in user_ids:
        await run.scan_user(user_id)
        run.result.users_scanned += 1

    logger.info(
        "Task reminder sweep scanned %s user(s), created %s notification(s), suppressed %s",
        run.result.users_scanned,
        run.result.notifications_created,
        run.result.suppressed,
    )
    return run.result


__all__ = [
    "DAILY_SUMMARY_TITLE",
    "DUE_SOON_TITLE",
    "DUE_SOON_WINDOW",
    "OVERDUE_TITLE",
    "TaskReminderResult",
    "generate_task_reminders",
]
