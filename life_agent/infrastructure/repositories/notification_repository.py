"""Persistence helpers for notification entities."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import Iterable

from sqlalchemy import func
from sqlalchemy.orm import Query, Session

from life_agent.domain.entities import (
    UNREAD_STATUSES,
    EntityType,
    Notification,
    NotificationStatus,
    NotificationType,
)
from life_agent.infrastructure.models import NotificationModel
from life_agent.utils import ensure_timezone, now_in_timezone, to_storage_datetime

from .base import store_operation

_UNREAD_VALUES = [status.value for status in UNREAD_STATUSES]


class NotificationRepository:
    """Provide CRUD operations for :class:`Notification` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, notification_id: int) -> Notification | None:
        with store_operation(self.session, "load notification"):
            model = self.session.get(NotificationModel, notification_id)
        return self._to_entity(model) if model else None

    def list_for_user(
        self,
        user_id: int,
        *,
        limit: int | None = None,
    ) -> Sequence[Notification]:
        query = self._newest_first(
            self.session.query(NotificationModel).filter(
                NotificationModel.user_id == user_id
            )
        )
        if limit is not None:
            query = query.limit(limit)
        with store_operation(self.session, "list notifications"):
            return [self._to_entity(model) for model in query.all()]

    def list_unread_for_user(
        self, user_id: int, *, limit: int | None = None
    ) -> Sequence[Notification]:
        query = self._newest_first(
            self.session.query(NotificationModel)
            .filter(NotificationModel.user_id == user_id)
            .filter(NotificationModel.status.in_(_UNREAD_VALUES))
        )
        if limit is not None:
            query = query.limit(limit)
        with store_operation(self.session, "list unread notifications"):
            return [self._to_entity(model) for model in query.all()]

    def list_upcoming_for_user(
        self, user_id: int, *, now: datetime, limit: int = 10
    ) -> Sequence[Notification]:
        query = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.user_id == user_id)
            .filter(NotificationModel.status == NotificationStatus.PENDING.value)
            .filter(NotificationModel.scheduled_for >= to_storage_datetime(now))
            .order_by(NotificationModel.scheduled_for.asc(), NotificationModel.id.asc())
            .limit(limit)
        )
        with store_operation(self.session, "list upcoming notifications"):
            return [self._to_entity(model) for model in query.all()]

    def count_unread(self, user_id: int) -> int:
        with store_operation(self.session, "count unread notifications"):
            return (
                self.session.query(func.count(NotificationModel.id))
                .filter(NotificationModel.user_id == user_id)
                .filter(NotificationModel.status.in_(_UNREAD_VALUES))
                .scalar()
            ) or 0

    def exists_recent(self, user_id: int, *, title: str, since: datetime) -> bool:
        """Return ``True`` when ``user_id`` got a notification titled ``title`` after ``since``."""

        with store_operation(self.session, "look up recent notifications"):
            match = (
                self.session.query(NotificationModel.id)
                .filter(NotificationModel.user_id == user_id)
                .filter(NotificationModel.title == title)
                .filter(NotificationModel.created_at >= to_storage_datetime(since))
                .first()
            )
        return match is not None

    def create(self, notification: Notification) -> Notification:
        model = NotificationModel()
        self._apply_entity_to_model(model, notification)
        with store_operation(self.session, "create notification"):
            self.session.add(model)
            self.session.commit()
            self.session.refresh(model)
        return self._to_entity(model)

    def mark_read(
        self, notification_id: int, *, user_id: int, read_at: datetime | None = None
    ) -> Notification | None:
        """Move one owned notification to ``read``; already-read rows are left untouched."""

        when = to_storage_datetime(read_at or now_in_timezone())
        with store_operation(self.session, "mark notification as read"):
            self.session.query(NotificationModel).filter(
                NotificationModel.id == notification_id,
                NotificationModel.user_id == user_id,
                NotificationModel.status.in_(_UNREAD_VALUES),
            ).update(
                {
                    NotificationModel.status: NotificationStatus.READ.value,
                    NotificationModel.read_at: when,
                },
                synchronize_session=False,
            )
            self.session.commit()
        return self.get(notification_id)

    def mark_all_read(self, user_id: int, *, read_at: datetime | None = None) -> int:
        """Mark every unread notification of ``user_id`` in a single statement."""

        when = to_storage_datetime(read_at or now_in_timezone())
        with store_operation(self.session, "mark all notifications as read"):
            updated = (
                self.session.query(NotificationModel)
                .filter(
                    NotificationModel.user_id == user_id,
                    NotificationModel.status.in_(_UNREAD_VALUES),
                )
                .update(
                    {
                        NotificationModel.status: NotificationStatus.READ.value,
                        NotificationModel.read_at: when,
                    },
                    synchronize_session=False,
                )
            )
            self.session.commit()
        return updated

    def list_due_pending_ids(self, *, now: datetime) -> list[int]:
        """Return ids of pending notifications scheduled at or before ``now``."""

        with store_operation(self.session, "list due notifications"):
            rows = (
                self.session.query(NotificationModel.id)
                .filter(NotificationModel.status == NotificationStatus.PENDING.value)
                .filter(NotificationModel.scheduled_for <= to_storage_datetime(now))
                .order_by(NotificationModel.id)
                .all()
            )
        return [row[0] for row in rows]

    def mark_sent(self, notification_ids: Iterable[int]) -> int:
        """Promote the given pending notifications to ``sent`` in one transaction."""

        ids = [notification_id for notification_id in notification_ids if notification_id is not None]
        if not ids:
            return 0
        with store_operation(self.session, "mark notifications as sent"):
            updated = (
                self.session.query(NotificationModel)
                .filter(
                    NotificationModel.id.in_(ids),
                    NotificationModel.status == NotificationStatus.PENDING.value,
                )
                .update(
                    {NotificationModel.status: NotificationStatus.SENT.value},
                    synchronize_session=False,
                )
            )
            self.session.commit()
        return updated

    @staticmethod
    def _newest_first(query: Query) -> Query:
        return query.order_by(
            NotificationModel.created_at.desc(), NotificationModel.id.desc()
        )

    @staticmethod
    def _apply_entity_to_model(
        model: NotificationModel,
        notification: Notification,
    ) -> None:
        model.created_at = to_storage_datetime(
            notification.created_at or now_in_timezone()
        )
        model.user_id = notification.user_id
        model.type = NotificationType(notification.type).value
        model.title = notification.title
        model.message = notification.message or ""
        model.status = NotificationStatus(notification.status).value
        model.entity_type = (
            EntityType(notification.entity_type).value if notification.entity_type else None
        )
        model.entity_id = notification.entity_id
        model.scheduled_for = to_storage_datetime(notification.scheduled_for)
        model.metadata_ = dict(notification.metadata or {})
        model.read_at = to_storage_datetime(notification.read_at)

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            user_id=model.user_id,
            type=NotificationType(model.type),
            title=model.title,
            message=model.message or "",
            status=NotificationStatus(model.status),
            entity_type=EntityType(model.entity_type) if model.entity_type else None,
            entity_id=model.entity_id,
            scheduled_for=ensure_timezone(model.scheduled_for),
            metadata=dict(model.metadata_ or {}),
            created_at=ensure_timezone(model.created_at),
            read_at=ensure_timezone(model.read_at),
        )


__all__ = ["NotificationRepository"]
