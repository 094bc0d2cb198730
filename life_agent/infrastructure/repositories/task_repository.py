"""Read-side persistence helpers for tasks."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy.orm import Session

from life_agent.domain.entities import Task
from life_agent.infrastructure.models import TaskModel
from life_agent.utils import ensure_timezone, to_storage_datetime

from .base import store_operation


class TaskRepository:
    """Query tasks by due date for reminder generation."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, task: Task) -> Task:
        model = TaskModel(
            user_id=task.user_id,
            title=task.title,
            description=task.description,
            priority=task.priority,
            due_date=to_storage_datetime(task.due_date),
            is_completed=task.is_completed,
        )
        with store_operation(self.session, "create task"):
            self.session.add(model)
            self.session.commit()
            self.session.refresh(model)
        return self._to_entity(model)

    def list_overdue(self, user_id: int, *, now: datetime) -> Sequence[Task]:
        """Return incomplete tasks whose due date is strictly before ``now``."""

        with store_operation(self.session, "list overdue tasks"):
            query = (
                self.session.query(TaskModel)
                .filter(TaskModel.user_id == user_id)
                .filter(TaskModel.is_completed.is_(False))
                .filter(TaskModel.due_date < to_storage_datetime(now))
                .order_by(TaskModel.due_date, TaskModel.id)
            )
            return [self._to_entity(model) for model in query.all()]

    def list_due_between(
        self,
        user_id: int,
        *,
        start: datetime,
        end: datetime,
        incomplete_only: bool = True,
    ) -> Sequence[Task]:
        """Return tasks due within ``[start, end]`` (both inclusive)."""

        with store_operation(self.session, "list tasks by due date"):
            query = (
                self.session.query(TaskModel)
                .filter(TaskModel.user_id == user_id)
                .filter(TaskModel.due_date >= to_storage_datetime(start))
                .filter(TaskModel.due_date <= to_storage_datetime(end))
            )
            if incomplete_only:
                query = query.filter(TaskModel.is_completed.is_(False))
            query = query.order_by(TaskModel.due_date, TaskModel.id)
            return [self._to_entity(model) for model in query.all()]

    @staticmethod
    def _to_entity(model: TaskModel) -> Task:
        return Task(
            id=model.id,
            user_id=model.user_id,
            title=model.title,
            description=model.description,
            priority=model.priority,
            due_date=ensure_timezone(model.due_date),
            is_completed=model.is_completed,
            created_at=ensure_timezone(model.created_at),
        )


__all__ = ["TaskRepository"]
