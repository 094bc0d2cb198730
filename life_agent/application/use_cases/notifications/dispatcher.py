"""Persist, announce and push a notification to its owner.

The three steps have decreasing criticality, so each one has its own failure
boundary:

1. The durable write. A failure raises :class:`StoreError` and nothing else
   happens.
2. The realtime announce on ``notifications:{user_id}``. Failures are logged
   and recorded in the outcome.
3. The push fan-out to every subscription of the owner, run concurrently.
   Each endpoint failure is logged and recorded on its own.

Notifications scheduled in the future are only persisted (as ``pending``);
the due-notification sweep promotes them later.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from datetime import datetime, tzinfo
from typing import Any

import anyio
from anyio import to_thread

from life_agent.config import Settings
from life_agent.domain.entities import (
    DeliveryOutcome,
    DispatchOutcome,
    Notification,
    NotificationContent,
    NotificationStatus,
    NotificationType,
    PushSubscription,
)
from life_agent.domain.errors import DeliveryError, ValidationError
from life_agent.infrastructure.notifications import (
    NEW_NOTIFICATION_EVENT,
    PushTransport,
    RealtimePublisher,
    build_push_payload,
    serialize_notification,
    user_topic,
)
from life_agent.infrastructure.repositories import (
    NotificationRepository,
    PushSubscriptionRepository,
)
from life_agent.utils import ensure_timezone, now_in_timezone, resolve_timezone

logger = logging.getLogger(__name__)

EndpointGoneHook = Callable[[PushSubscription], None]


class NotificationDispatcher:
    """Orchestrate persist → publish → push for a single notification."""

    def __init__(
        self,
        *,
        notifications: NotificationRepository,
        subscriptions: PushSubscriptionRepository,
        publisher: RealtimePublisher | None,
        transport: PushTransport | None,
        settings: Settings,
        on_endpoint_gone: EndpointGoneHook | None = None,
    ) -> None:
        self._notifications = notifications
        self._subscriptions = subscriptions
        self._publisher = publisher
        self._transport = transport
        self._settings = settings
        self._timezone = resolve_timezone(settings.app_timezone)
        self._on_endpoint_gone = on_endpoint_gone

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def timezone(self) -> tzinfo:
        """The ``APP_TIMEZONE`` of this dispatcher's settings."""

        return self._timezone

    async def dispatch(
        self,
        owner_id: int,
        content: NotificationContent,
        *,
        now: datetime | None = None,
    ) -> DispatchOutcome:
        """Create ``content`` for ``owner_id`` and deliver it on every channel."""

        title = (content.title or "").strip()
        if not title:
            raise ValidationError("Notification title is required")

        tz = self._timezone
        now = ensure_timezone(now, tz) if now else now_in_timezone(tz)
        scheduled_for = ensure_timezone(content.scheduled_for, tz)
        deferred = scheduled_for is not None and scheduled_for > now

        notification = Notification(
            id=None,
            user_id=owner_id,
            type=NotificationType(content.type),
            title=title,
            message=content.message or "",
            status=NotificationStatus.PENDING if deferred else NotificationStatus.SENT,
            entity_type=content.entity_type,
            entity_id=content.entity_id,
            scheduled_for=scheduled_for,
            metadata=dict(content.metadata or {}),
            created_at=now,
        )
        # Repositories block on the database, so they run in worker threads.
        saved = await to_thread.run_sync(self._notifications.create, notification)
        outcome = DispatchOutcome(notification=saved, deferred=deferred)
        if deferred:
            logger.info(
                "Notification %s for user %s scheduled for %s",
                saved.id,
                owner_id,
                scheduled_for.isoformat(),
            )
            return outcome

        outcome.published = await self._announce(saved)
        outcome.deliveries = await self._push(saved)
        return outcome

    async def _announce(self, notification: Notification) -> bool:
        if self._publisher is None:
            return False
        try:
            await self._publisher.publish(
                user_topic(notification.user_id),
                NEW_NOTIFICATION_EVENT,
                serialize_notification(notification),
            )
        except Exception:
            logger.exception(
                "Failed to publish notification %s to user %s",
                notification.id,
                notification.user_id,
            )
            return False
        return True

    async def _push(self, notification: Notification) -> list[DeliveryOutcome]:
        if self._transport is None:
            return []
        try:
            subscriptions = await to_thread.run_sync(
                self._subscriptions.list_for_user, notification.user_id
            )
        except Exception:
            logger.exception(
                "Failed to load push subscriptions for user %s", notification.user_id
            )
            return []
        if not subscriptions:
            return []

        payload = build_push_payload(notification, self._settings)
        return await self.deliver_to_all(subscriptions, payload)

    async def deliver_to_all(
        self, subscriptions: Sequence[PushSubscription], payload: dict[str, Any]
    ) -> list[DeliveryOutcome]:
        """Push ``payload`` to every subscription concurrently and wait for all of them."""

        outcomes: list[DeliveryOutcome | None] = [None] * len(subscriptions)

        async def deliver(index: int, subscription: PushSubscription) -> None:
            outcomes[index] = await self._deliver_one(subscription, payload)

        async with anyio.create_task_group() as task_group:
            for index, subscription in enumerate(subscriptions):
                task_group.start_soon(deliver, index, subscription)

        # Hooks may touch the store, so they run one at a time after the fan-out.
        for subscription, outcome in zip(subscriptions, outcomes):
            if outcome is not None and outcome.endpoint_gone:
                await self._notify_endpoint_gone(subscription)

        return [outcome for outcome in outcomes if outcome is not None]

    async def _deliver_one(
        self, subscription: PushSubscription, payload: dict[str, Any]
    ) -> DeliveryOutcome:
        assert self._transport is not None
        try:
            await self._transport.send(subscription, payload)
        except DeliveryError as exc:
            logger.warning(
                "Push delivery to %s for user %s failed (status %s): %s",
                subscription.endpoint,
                subscription.user_id,
                exc.status_code,
                exc.message,
            )
            return DeliveryOutcome(
                endpoint=subscription.endpoint,
                success=False,
                status_code=exc.status_code,
                endpoint_gone=exc.endpoint_gone,
                error=exc.message,
            )
        except Exception as exc:
            logger.exception(
                "Unexpected error pushing to %s for user %s",
                subscription.endpoint,
                subscription.user_id,
            )
            return DeliveryOutcome(
                endpoint=subscription.endpoint, success=False, error=str(exc)
            )
        return DeliveryOutcome(endpoint=subscription.endpoint, success=True)

    async def _notify_endpoint_gone(self, subscription: PushSubscription) -> None:
        if self._on_endpoint_gone is None:
            return
        try:
            await to_thread.run_sync(self._on_endpoint_gone, subscription)
        except Exception:
            logger.exception(
                "Endpoint-gone hook failed for subscription %s", subscription.id
            )


__all__ = ["EndpointGoneHook", "NotificationDispatcher"]
