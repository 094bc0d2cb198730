"""Tests for the pywebpush based transport."""

from __future__ import annotations

import json

import pytest
from pywebpush import WebPushException
from requests import ConnectionError as RequestsConnectionError

from life_agent.config import Settings
from life_agent.domain.entities import (
    Notification,
    NotificationStatus,
    NotificationType,
    PushSubscription,
)
from life_agent.domain.errors import DeliveryError
from life_agent.infrastructure.notifications import WebPushTransport, build_push_payload
from life_agent.infrastructure.notifications import push as push_module

pytestmark = pytest.mark.anyio

SUBSCRIPTION = PushSubscription(
    id=1,
    user_id=3,
    endpoint="https://push.example.com/abc",
    p256dh="p256dh-key",
    auth="auth-key",
)


class _Response:
    def __init__(self, status_code: int) -> None:
        self.status_code = status_code


def _transport() -> WebPushTransport:
    return WebPushTransport(
        vapid_private_key="private-key",
        vapid_subject="mailto:admin@example.com",
        ttl=60,
        timeout=2.5,
    )


async def test_send_signs_and_posts_the_payload(monkeypatch):
    calls = []
    monkeypatch.setattr(push_module, "webpush", lambda **kwargs: calls.append(kwargs))

    await _transport().send(SUBSCRIPTION, {"title": "Hello"})

    assert len(calls) == 1
    call = calls[0]
    assert call["subscription_info"] == {
        "endpoint": "https://push.example.com/abc",
        "expirationTime": None,
        "keys": {"p256dh": "p256dh-key", "auth": "auth-key"},
    }
    assert json.loads(call["data"]) == {"title": "Hello"}
    assert call["vapid_private_key"] == "private-key"
    assert call["vapid_claims"] == {"sub": "mailto:admin@example.com"}
    assert call["ttl"] == 60
    assert call["timeout"] == 2.5


@pytest.mark.parametrize(("status_code", "gone"), [(410, True), (404, True), (500, False)])
async def test_push_service_errors_become_delivery_errors(monkeypatch, status_code, gone):
    def reject(**kwargs):
        raise WebPushException("Push failed", response=_Response(status_code))

    monkeypatch.setattr(push_module, "webpush", reject)

    with pytest.raises(DeliveryError) as excinfo:
        await _transport().send(SUBSCRIPTION, {"title": "Hello"})

    assert excinfo.value.status_code == status_code
    assert excinfo.value.endpoint_gone is gone


async def test_unreachable_push_service(monkeypatch):
    def unreachable(**kwargs):
        raise RequestsConnectionError("connection refused")

    monkeypatch.setattr(push_module, "webpush", unreachable)

    with pytest.raises(DeliveryError) as excinfo:
        await _transport().send(SUBSCRIPTION, {"title": "Hello"})

    assert excinfo.value.status_code is None
    assert excinfo.value.endpoint_gone is False


def test_transport_is_disabled_without_vapid_keys(settings):
    assert WebPushTransport.from_settings(settings) is None


def test_transport_is_built_from_complete_settings(settings):
    configured = settings.model_copy(
        update={
            "vapid_public_key": "public-key",
            "vapid_private_key": "private-key",
            "vapid_subject": "mailto:admin@example.com",
        }
    )

    assert isinstance(WebPushTransport.from_settings(configured), WebPushTransport)


def test_incomplete_vapid_settings_are_rejected():
    with pytest.raises(ValueError):
        Settings(_env_file=None, vapid_public_key="public-key", vapid_private_key=None)


def test_push_payload_shape(settings):
    notification = Notification(
        id=12,
        user_id=3,
        type=NotificationType.GOAL_DEADLINE,
        title="Goal deadline",
        message="Run a marathon is due tomorrow",
        status=NotificationStatus.SENT,
    )

    payload = build_push_payload(notification, settings)

    assert payload == {
        "title": "Goal deadline",
        "body": "Run a marathon is due tomorrow",
        "icon": "/icon-192x192.png",
        "tag": "notification-12",
        "data": {"url": "/dashboard", "notification_id": 12, "type": "goal_deadline"},
    }
