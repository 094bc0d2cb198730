"""Persistence layer for user data."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy.orm import Session

from life_agent.domain.entities import User
from life_agent.infrastructure.models import UserModel
from life_agent.utils import ensure_timezone, to_storage_datetime

from .base import store_operation


class UserRepository:
    """Provide the user lookups needed by authentication and the sweeper."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_email(self, email: str) -> User | None:
        with store_operation(self.session, "load user by email"):
            model = (
                self.session.query(UserModel)
                .filter(UserModel.email == email.strip().lower())
                .first()
            )
        return self._to_entity(model) if model else None

    def list_active_ids(self) -> Sequence[int]:
        with store_operation(self.session, "list active users"):
            rows = (
                self.session.query(UserModel.id)
                .filter(UserModel.is_active.is_(True))
                .order_by(UserModel.id)
                .all()
            )
        return [row[0] for row in rows]

    def create(self, user: User) -> User:
        model = UserModel(
            name=user.name,
            email=user.email.strip().lower(),
            password=user.password,
            is_active=user.is_active,
        )
        if user.created_at is not None:
            model.created_at = to_storage_datetime(user.created_at)
        with store_operation(self.session, "create user"):
            self.session.add(model)
            self.session.commit()
            self.session.refresh(model)
        return self._to_entity(model)

    def record_login(self, user_id: int, when: datetime) -> None:
        with store_operation(self.session, "record login"):
            self.session.query(UserModel).filter(UserModel.id == user_id).update(
                {UserModel.last_login: to_storage_datetime(when)},
                synchronize_session=False,
            )
            self.session.commit()

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            name=model.name,
            email=model.email,
            password=model.password,
            is_active=model.is_active,
            created_at=ensure_timezone(model.created_at),
            last_login=ensure_timezone(model.last_login),
        )


__all__ = ["UserRepository"]
