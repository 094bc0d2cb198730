"""Persistence helpers for browser push subscriptions."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from life_agent.domain.entities import PushSubscription
from life_agent.infrastructure.models import PushSubscriptionModel
from life_agent.utils import ensure_timezone, storage_now

from .base import store_operation


class PushSubscriptionRepository:
    """Store at most one subscription per user (last writer wins)."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_for_user(self, user_id: int) -> PushSubscription | None:
        with store_operation(self.session, "load push subscription"):
            model = self._get_model(user_id)
        return self._to_entity(model) if model else None

    def list_for_user(self, user_id: int) -> Sequence[PushSubscription]:
        with store_operation(self.session, "list push subscriptions"):
            models = (
                self.session.query(PushSubscriptionModel)
                .filter(PushSubscriptionModel.user_id == user_id)
                .order_by(PushSubscriptionModel.id)
                .all()
            )
        return [self._to_entity(model) for model in models]

    def upsert(self, subscription: PushSubscription) -> PushSubscription:
        """Insert ``subscription`` or overwrite the user's existing one."""

        with store_operation(self.session, "save push subscription"):
            model = self._get_model(subscription.user_id)
            if model is None:
                model = PushSubscriptionModel(user_id=subscription.user_id)
                self.session.add(model)
            else:
                model.updated_at = storage_now()
            model.endpoint = subscription.endpoint
            model.p256dh = subscription.p256dh
            model.auth = subscription.auth
            model.expiration_time = subscription.expiration_time
            self.session.commit()
            self.session.refresh(model)
        return self._to_entity(model)

    def delete_for_user(self, user_id: int, *, endpoint: str | None = None) -> bool:
        """Delete the user's subscription, optionally only if it matches ``endpoint``."""

        with store_operation(self.session, "delete push subscription"):
            query = self.session.query(PushSubscriptionModel).filter(
                PushSubscriptionModel.user_id == user_id
            )
            if endpoint is not None:
                query = query.filter(PushSubscriptionModel.endpoint == endpoint)
            deleted = query.delete(synchronize_session=False)
            self.session.commit()
        return deleted > 0

    def _get_model(self, user_id: int) -> PushSubscriptionModel | None:
        return (
            self.session.query(PushSubscriptionModel)
            .filter(PushSubscriptionModel.user_id == user_id)
            .first()
        )

    @staticmethod
    def _to_entity(model: PushSubscriptionModel) -> PushSubscription:
        return PushSubscription(
            id=model.id,
            user_id=model.user_id,
            endpoint=model.endpoint,
            p256dh=model.p256dh,
            auth=model.auth,
            expiration_time=model.expiration_time,
            created_at=ensure_timezone(model.created_at),
            updated_at=ensure_timezone(model.updated_at),
        )


__all__ = ["PushSubscriptionRepository"]
