"""Use cases for listing and acknowledging notifications."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy.orm import Session

from life_agent.domain.entities import Notification
from life_agent.domain.errors import NotFoundError
from life_agent.infrastructure.repositories import NotificationRepository
from life_agent.utils import now_in_timezone

_NOT_FOUND_MESSAGE = "Notification not found"


def mark_as_read(
    session: Session,
    notification_id: int,
    *,
    requesting_user_id: int,
    now: datetime | None = None,
) -> Notification:
    """Acknowledge one notification owned by ``requesting_user_id``.

    Missing rows and rows owned by another user raise the same
    :class:`NotFoundError`. Re-acknowledging a read notification returns it
    unchanged.
    """

    repository = NotificationRepository(session)
    notification = repository.get(notification_id)
    if notification is None or notification.user_id != requesting_user_id:
        raise NotFoundError(_NOT_FOUND_MESSAGE)
    if notification.is_read:
        return notification

    updated = repository.mark_read(
        notification_id, user_id=requesting_user_id, read_at=now
    )
    if updated is None:
        raise NotFoundError(_NOT_FOUND_MESSAGE)
    return updated


def mark_all_as_read(session: Session, user_id: int, *, now: datetime | None = None) -> int:
    """Acknowledge every unread notification of ``user_id`` and return the count."""

    return NotificationRepository(session).mark_all_read(user_id, read_at=now)


def list_unread(session: Session, user_id: int) -> Sequence[Notification]:
    """Return pending and sent notifications of ``user_id``, newest first."""

    return NotificationRepository(session).list_unread_for_user(user_id)


def list_notifications(
    session: Session, user_id: int, *, limit: int | None = None
) -> Sequence[Notification]:
    return NotificationRepository(session).list_for_user(user_id, limit=limit)


def list_upcoming(
    session: Session, user_id: int, *, now: datetime | None = None, limit: int = 10
) -> Sequence[Notification]:
    """Return pending notifications scheduled from ``now`` on, soonest first."""

    return NotificationRepository(session).list_upcoming_for_user(
        user_id, now=now or now_in_timezone(), limit=limit
    )


def count_unread(session: Session, user_id: int) -> int:
    return NotificationRepository(session).count_unread(user_id)


__all__ = [
    "count_unread",
    "list_notifications",
    "list_unread",
    "list_upcoming",
    "mark_all_as_read",
    "mark_as_read",
]
