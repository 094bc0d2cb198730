"""Use cases for the single push subscription each user may register."""

from __future__ import annotations

from sqlalchemy.orm import Session

from life_agent.domain.entities import PushSubscription
from life_agent.domain.errors import NotFoundError, ValidationError
from life_agent.infrastructure.repositories import PushSubscriptionRepository


def subscribe(
    session: Session,
    *,
    user_id: int,
    endpoint: str | None,
    p256dh: str | None,
    auth: str | None,
    expiration_time: int | None = None,
) -> PushSubscription:
    """Register the browser subscription of ``user_id``, replacing any previous one."""

    endpoint = (endpoint or "").strip()
    if not endpoint:
        raise ValidationError("Subscription endpoint is required")
    if not endpoint.startswith("https://"):
        raise ValidationError("Subscription endpoint must be an https URL")
    if not p256dh or not auth:
        raise ValidationError("Subscription keys 'p256dh' and 'auth' are required")

    return PushSubscriptionRepository(session).upsert(
        PushSubscription(
            id=None,
            user_id=user_id,
            endpoint=endpoint,
            p256dh=p256dh,
            auth=auth,
            expiration_time=expiration_time,
        )
    )


def get_subscription(session: Session, *, user_id: int) -> PushSubscription | None:
    return PushSubscriptionRepository(session).get_for_user(user_id)


def unsubscribe(session: Session, *, user_id: int, endpoint: str | None = None) -> None:
    """Remove the subscription of ``user_id``.

    When ``endpoint`` is given only a matching subscription is removed, so a
    stale browser cannot delete the registration of a newer one.
    """

    deleted = PushSubscriptionRepository(session).delete_for_user(
        user_id, endpoint=endpoint
    )
    if not deleted:
        raise NotFoundError("Push subscription not found")
