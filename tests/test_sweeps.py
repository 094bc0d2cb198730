"""Tests for the due-notification and task-reminder sweeps."""

from __future__ import annotations

import threading
from datetime import datetime, timedelta, timezone

import pytest

from conftest import FakePublisher
from life_agent.application.use_cases.notifications import NotificationDispatcher

from life_agent.application.use_cases.sweeps import (
    DAILY_SUMMARY_TITLE,
    DUE_SOON_TITLE,
    OVERDUE_TITLE,
    generate_task_reminders,
    promote_due_notifications,
)
from life_agent.domain.entities import (
    EntityType,
    Notification,
    NotificationStatus,
    NotificationType,
    Task,
)
from life_agent.infrastructure.repositories import (
    NotificationRepository,
    PushSubscriptionRepository,
    TaskRepository,
)

NOON = datetime(2026, 3, 15, 12, 0, tzinfo=timezone.utc)


def _pending(session, user_id: int, title: str, scheduled_for: datetime) -> Notification:
    return NotificationRepository(session).create(
        Notification(
            id=None,
            user_id=user_id,
            type=NotificationType.GENERAL,
            title=title,
            message="",
            status=NotificationStatus.PENDING,
            scheduled_for=scheduled_for,
            created_at=NOON - timedelta(days=1),
        )
    )


def _task(session, user_id: int, title: str, due_date: datetime, **overrides) -> Task:
    return TaskRepository(session).create(
        Task(id=None, user_id=user_id, title=title, due_date=due_date, **overrides)
    )


def test_due_promotion_only_moves_notifications_whose_time_has_come(session, make_user):
    user = make_user()
    due = _pending(session, user.id, "Due", NOON - timedelta(minutes=1))
    exactly_now = _pending(session, user.id, "Exactly now", NOON)
    future = _pending(session, user.id, "Future", NOON + timedelta(minutes=1))

    result = promote_due_notifications(session, now=NOON)

    assert sorted(result.processed_ids) == sorted([due.id, exactly_now.id])
    assert result.processed == 2
    repository = NotificationRepository(session)
    assert repository.get(due.id).status is NotificationStatus.SENT
    assert repository.get(exactly_now.id).status is NotificationStatus.SENT
    assert repository.get(future.id).status is NotificationStatus.PENDING


def test_due_promotion_with_nothing_due(session, make_user):
    user = make_user()
    _pending(session, user.id, "Future", NOON + timedelta(days=1))

    result = promote_due_notifications(session, now=NOON)

    assert result.processed == 0
    assert result.processed_ids == []


@pytest.mark.anyio
async def test_single_overdue_task_produces_one_overdue_summary(
    session, make_user, dispatcher
):
    user = make_user()
    _task(session, user.id, "File taxes", NOON - timedelta(days=1))

    result = await generate_task_reminders(session, dispatcher, now=NOON)

    notifications = NotificationRepository(session).list_for_user(user.id)
    assert result.notifications_created == 1
    assert len(notifications) == 1
    assert notifications[0].title == OVERDUE_TITLE
    assert "1 task(s)" in notifications[0].message
    assert notifications[0].type is NotificationType.TASK_REMINDER
    assert notifications[0].status is NotificationStatus.SENT


@pytest.mark.anyio
async def test_task_due_soon_is_linked_and_counted_in_daily_summary(
    session, make_user, dispatcher, publisher
):
    user = make_user()
    task = _task(session, user.id, "Call the dentist", NOON + timedelta(minutes=30))

    result = await generate_task_reminders(session, dispatcher, now=NOON)

    notifications = NotificationRepository(session).list_for_user(user.id)
    by_title = {notification.title: notification for notification in notifications}
    assert result.notifications_created == 2
    assert set(by_title) == {DUE_SOON_TITLE, DAILY_SUMMARY_TITLE}
    due_soon = by_title[DUE_SOON_TITLE]
    assert due_soon.entity_type is EntityType.TASK
    assert due_soon.entity_id == task.id
    assert 'Your task "Call the dentist"' in due_soon.message
    summary = by_title[DAILY_SUMMARY_TITLE]
    assert summary.entity_id is None
    assert summary.message == "You have 1 tasks scheduled for today."
    assert len(publisher.events) == 2


@pytest.mark.anyio
async def test_completed_and_inactive_tasks_are_ignored(session, make_user, dispatcher):
    active = make_user("active@example.com")
    inactive = make_user("inactive@example.com", is_active=False)
    _task(session, active.id, "Done", NOON - timedelta(days=2), is_completed=True)
    _task(session, inactive.id, "Ignored", NOON - timedelta(days=2))

    result = await generate_task_reminders(session, dispatcher, now=NOON)

    assert result.users_scanned == 1
    assert result.notifications_created == 0
    assert NotificationRepository(session).list_for_user(inactive.id) == []


@pytest.mark.anyio
async def test_reruns_repeat_reminders_unless_suppressed(session, make_user, dispatcher):
    user = make_user()
    _task(session, user.id, "Overdue", NOON - timedelta(days=1))

    await generate_task_reminders(session, dispatcher, now=NOON)
    await generate_task_reminders(session, dispatcher, now=NOON + timedelta(minutes=5))
    assert len(NotificationRepository(session).list_for_user(user.id)) == 2

    suppressed = await generate_task_reminders(
        session,
        dispatcher,
        now=NOON + timedelta(minutes=10),
        suppression_window=timedelta(minutes=30),
    )

    assert suppressed.notifications_created == 0
    assert suppressed.suppressed == 1
    assert len(NotificationRepository(session).list_for_user(user.id)) == 2


@pytest.mark.anyio
async def test_daily_summary_uses_the_dispatcher_timezone(
    session, make_user, settings, dispatcher
):
    user = make_user()
    tokyo = NotificationDispatcher(
        notifications=NotificationRepository(session),
        subscriptions=PushSubscriptionRepository(session),
        publisher=FakePublisher(),
        transport=None,
        settings=settings.model_copy(update={"app_timezone": "UTC+09:00"}),
    )
    # 23:30 UTC on the 15th is 08:30 on the 16th in UTC+9.
    late_evening = datetime(2026, 3, 15, 23, 30, tzinfo=timezone.utc)
    _task(
        session,
        user.id,
        "Dinner with friends",
        datetime(2026, 3, 16, 20, 0, tzinfo=timezone(timedelta(hours=9))),
    )

    in_utc = await generate_task_reminders(session, dispatcher, now=late_evening)
    assert in_utc.notifications_created == 0

    result = await generate_task_reminders(session, tokyo, now=late_evening)

    titles = [n.title for n in NotificationRepository(session).list_for_user(user.id)]
    assert result.notifications_created == 1
    assert titles == [DAILY_SUMMARY_TITLE]


@pytest.mark.anyio
async def test_task_queries_run_off_the_event_loop_thread(
    session, make_user, dispatcher, monkeypatch
):
    user = make_user()
    _task(session, user.id, "Water plants", NOON + timedelta(minutes=30))
    loop_thread = threading.get_ident()
    query_threads: list[int] = []
    list_due_between = TaskRepository.list_due_between

    def recording(self, *args, **kwargs):
        query_threads.append(threading.get_ident())
        return list_due_between(self, *args, **kwargs)

    monkeypatch.setattr(TaskRepository, "list_due_between", recording)

    result = await generate_task_reminders(session, dispatcher, now=NOON)

    assert result.notifications_created == 2
    assert len(query_threads) == 2
    assert loop_thread not in query_threads
