"""Web Push delivery to browser subscriptions (VAPID signed)."""

from __future__ import annotations

import json
import logging
from functools import partial
from typing import Any, Protocol

from anyio import to_thread
from pywebpush import WebPushException, webpush
from requests import RequestException

from life_agent.config import Settings
from life_agent.domain.entities import Notification, PushSubscription
from life_agent.domain.errors import DeliveryError

logger = logging.getLogger(__name__)

_GONE_STATUS_CODES = frozenset({404, 410})


class PushTransport(Protocol):
    """Encrypt and transmit one payload to one subscription.

    Implementations raise :class:`DeliveryError` when the push service
    rejects the message or cannot be reached.
    """

    async def send(self, subscription: PushSubscription, payload: dict[str, Any]) -> None: ...


class WebPushTransport:
    """Send push messages with :func:`pywebpush.webpush` in a worker thread."""

    def __init__(
        self,
        *,
        vapid_private_key: str,
        vapid_subject: str,
        ttl: int = 86_400,
        timeout: float = 10.0,
    ) -> None:
        self._vapid_private_key = vapid_private_key
        self._vapid_subject = vapid_subject
        self._ttl = ttl
        self._timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "WebPushTransport | None":
        """Build a transport, or return ``None`` when VAPID keys are not configured."""

        if not settings.push_enabled:
            logger.warning("VAPID keys are not configured. Push notifications are disabled.")
            return None
        return cls(
            vapid_private_key=settings.vapid_private_key or "",
            vapid_subject=settings.vapid_subject or "",
            ttl=settings.push_ttl_seconds,
            timeout=settings.push_timeout_seconds,
        )

    async def send(self, subscription: PushSubscription, payload: dict[str, Any]) -> None:
        call = partial(
            webpush,
            subscription_info=subscription.to_subscription_info(),
            data=json.dumps(payload),
            vapid_private_key=self._vapid_private_key,
            # pywebpush adds ``aud``/``exp`` to the claims dict, so build a fresh one per call.
            vapid_claims={"sub": self._vapid_subject},
            ttl=self._ttl,
            timeout=self._timeout,
        )
        try:
            await to_thread.run_sync(call)
        except WebPushException as exc:
            status_code = getattr(exc.response, "status_code", None)
            raise DeliveryError(
                f"Push service rejected the message: {exc.message}",
                status_code=status_code,
                endpoint_gone=status_code in _GONE_STATUS_CODES,
            ) from exc
        except RequestException as exc:
            raise DeliveryError(f"Push service unreachable: {exc}") from exc


def build_push_payload(notification: Notification, settings: Settings) -> dict[str, Any]:
    """Return the JSON body the service worker turns into a system notification."""

    return {
        "title": notification.title,
        "body": notification.message,
        "icon": settings.push_icon,
        "tag": f"notification-{notification.id}",
        "data": {
            "url": settings.push_click_url,
            "notification_id": notification.id,
            "type": notification.type.value,
        },
    }


__all__ = ["PushTransport", "WebPushTransport", "build_push_payload"]
