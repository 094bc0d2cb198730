"""Tests for listing and acknowledging notifications."""

from __future__ import annotations

from datetime import timedelta

import pytest
from sqlalchemy.exc import OperationalError

from life_agent.application.use_cases.notifications import (
    count_unread,
    list_notifications,
    list_unread,
    list_upcoming,
    mark_all_as_read,
    mark_as_read,
)
from life_agent.domain.entities import Notification, NotificationStatus, NotificationType
from life_agent.domain.errors import NotFoundError, StoreError
from life_agent.infrastructure.repositories import NotificationRepository
from life_agent.utils import now_in_timezone


def _store(session, user_id: int, title: str, **overrides) -> Notification:
    values = {
        "id": None,
        "user_id": user_id,
        "type": NotificationType.GENERAL,
        "title": title,
        "message": "",
        "status": NotificationStatus.SENT,
    }
    values.update(overrides)
    return NotificationRepository(session).create(Notification(**values))


def test_mark_as_read_sets_status_and_timestamp(session, make_user):
    user = make_user()
    stored = _store(session, user.id, "Hello")

    updated = mark_as_read(session, stored.id, requesting_user_id=user.id)

    assert updated.status is NotificationStatus.READ
    assert updated.read_at is not None
    assert list_unread(session, user.id) == []


def test_mark_as_read_is_idempotent(session, make_user):
    user = make_user()
    stored = _store(session, user.id, "Hello")
    first = mark_as_read(session, stored.id, requesting_user_id=user.id)

    second = mark_as_read(session, stored.id, requesting_user_id=user.id)

    assert second.status is NotificationStatus.READ
    assert second.read_at == first.read_at


def test_mark_as_read_hides_other_users_notifications(session, make_user):
    owner = make_user("owner@example.com")
    intruder = make_user("intruder@example.com")
    stored = _store(session, owner.id, "Private")

    with pytest.raises(NotFoundError):
        mark_as_read(session, stored.id, requesting_user_id=intruder.id)
    with pytest.raises(NotFoundError):
        mark_as_read(session, 9999, requesting_user_id=intruder.id)

    assert NotificationRepository(session).get(stored.id).status is NotificationStatus.SENT


def test_mark_all_as_read_only_touches_the_callers_unread(session, make_user):
    user = make_user("user@example.com")
    other = make_user("other@example.com")
    _store(session, user.id, "Pending", status=NotificationStatus.PENDING)
    _store(session, user.id, "Sent")
    _store(session, user.id, "Already read", status=NotificationStatus.READ)
    foreign = _store(session, other.id, "Someone else's")

    updated = mark_all_as_read(session, user.id)

    assert updated == 2
    assert count_unread(session, user.id) == 0
    assert NotificationRepository(session).get(foreign.id).status is NotificationStatus.SENT
    assert mark_all_as_read(session, user.id) == 0


def test_list_unread_is_newest_first(session, make_user):
    user = make_user()
    now = now_in_timezone()
    _store(session, user.id, "Oldest", created_at=now - timedelta(hours=2))
    _store(session, user.id, "Newest", created_at=now)
    _store(session, user.id, "Middle", created_at=now - timedelta(hours=1))
    _store(session, user.id, "Read", status=NotificationStatus.READ)

    titles = [notification.title for notification in list_unread(session, user.id)]

    assert titles == ["Newest", "Middle", "Oldest"]
    assert len(list_notifications(session, user.id)) == 4
    assert len(list_notifications(session, user.id, limit=2)) == 2


def test_list_upcoming_returns_future_pending_soonest_first(session, make_user):
    user = make_user()
    now = now_in_timezone()
    _store(
        session,
        user.id,
        "In two hours",
        status=NotificationStatus.PENDING,
        scheduled_for=now + timedelta(hours=2),
    )
    _store(
        session,
        user.id,
        "In one hour",
        status=NotificationStatus.PENDING,
        scheduled_for=now + timedelta(hours=1),
    )
    _store(
        session,
        user.id,
        "Past due",
        status=NotificationStatus.PENDING,
        scheduled_for=now - timedelta(hours=1),
    )

    titles = [n.title for n in list_upcoming(session, user.id, now=now)]

    assert titles == ["In one hour", "In two hours"]


def test_store_failure_during_bulk_read_rolls_back(session, make_user, monkeypatch):
    user = make_user()
    stored = _store(session, user.id, "Hello")

    def fail_commit():
        raise OperationalError("UPDATE notification", {}, Exception("disk I/O error"))

    monkeypatch.setattr(session, "commit", fail_commit)
    with pytest.raises(StoreError):
        mark_all_as_read(session, user.id)
    monkeypatch.undo()

    assert NotificationRepository(session).get(stored.id).status is NotificationStatus.SENT
