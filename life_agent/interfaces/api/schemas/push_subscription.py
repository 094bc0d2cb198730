"""Schemas for browser push subscriptions."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from life_agent.domain.entities import PushSubscription


class PushSubscriptionKeys(BaseModel):
    p256dh: str | None = None
    auth: str | None = None


class PushSubscriptionPayload(BaseModel):
    """The object produced by ``PushSubscription.toJSON()`` in the browser."""

    model_config = ConfigDict(populate_by_name=True)

    endpoint: str | None = None
    expiration_time: int | None = Field(default=None, alias="expirationTime")
    keys: PushSubscriptionKeys = Field(default_factory=PushSubscriptionKeys)

    @classmethod
    def from_entity(cls, subscription: PushSubscription) -> "PushSubscriptionPayload":
        return cls(
            endpoint=subscription.endpoint,
            expiration_time=subscription.expiration_time,
            keys=PushSubscriptionKeys(p256dh=subscription.p256dh, auth=subscription.auth),
        )


class PushSubscriptionEnvelope(BaseModel):
    subscription: PushSubscriptionPayload | None = None


class PushSubscriptionResult(BaseModel):
    success: bool = True
    message: str


class VapidPublicKeyResponse(BaseModel):
    public_key: str | None = None


__all__ = [
    "PushSubscriptionEnvelope",
    "PushSubscriptionKeys",
    "PushSubscriptionPayload",
    "PushSubscriptionResult",
    "VapidPublicKeyResponse",
]
