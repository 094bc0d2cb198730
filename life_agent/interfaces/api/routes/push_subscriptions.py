"""Endpoints for registering the caller's browser push subscription."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from life_agent.application.use_cases.push_subscriptions import (
    get_subscription,
    subscribe,
    unsubscribe,
)
from life_agent.config import Settings
from life_agent.domain.entities import User
from life_agent.infrastructure.database import get_db
from life_agent.interfaces.api.dependencies import (
    get_current_active_user,
    get_settings_from_app,
)
from life_agent.interfaces.api.schemas import (
    PushSubscriptionEnvelope,
    PushSubscriptionPayload,
    PushSubscriptionResult,
    VapidPublicKeyResponse,
)

router = APIRouter(prefix="/push-subscriptions", tags=["push-subscriptions"])


@router.get("/vapid-public-key", response_model=VapidPublicKeyResponse)
def get_vapid_public_key(
    settings: Settings = Depends(get_settings_from_app),
) -> VapidPublicKeyResponse:
    """Return the key browsers pass to ``pushManager.subscribe``."""

    return VapidPublicKeyResponse(public_key=settings.vapid_public_key)


@router.post("", response_model=PushSubscriptionResult)
def save_subscription(
    payload: PushSubscriptionPayload,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> PushSubscriptionResult:
    """Store the caller's subscription, replacing any earlier one."""

    subscribe(
        db,
        user_id=current_user.id,
        endpoint=payload.endpoint,
        p256dh=payload.keys.p256dh,
        auth=payload.keys.auth,
        expiration_time=payload.expiration_time,
    )
    return PushSubscriptionResult(message="Subscription saved successfully")


@router.get("", response_model=PushSubscriptionEnvelope)
def read_subscription(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> PushSubscriptionEnvelope:
    subscription = get_subscription(db, user_id=current_user.id)
    if subscription is None:
        return PushSubscriptionEnvelope(subscription=None)
    return PushSubscriptionEnvelope(
        subscription=PushSubscriptionPayload.from_entity(subscription)
    )


@router.delete("", response_model=PushSubscriptionResult)
def delete_subscription(
    endpoint: str | None = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> PushSubscriptionResult:
    """Remove the caller's subscription; ``endpoint`` restricts it to a matching one."""

    unsubscribe(db, user_id=current_user.id, endpoint=endpoint)
    return PushSubscriptionResult(message="Subscription removed successfully")
