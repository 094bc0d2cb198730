"""Tests for registering and removing push subscriptions."""

from __future__ import annotations

import pytest

from life_agent.application.use_cases.push_subscriptions import (
    get_subscription,
    subscribe,
    unsubscribe,
)
from life_agent.domain.errors import NotFoundError, ValidationError
from life_agent.infrastructure.repositories import PushSubscriptionRepository


def _subscribe(session, user_id: int, endpoint: str):
    return subscribe(
        session,
        user_id=user_id,
        endpoint=endpoint,
        p256dh=f"p256dh-{endpoint[-1]}",
        auth=f"auth-{endpoint[-1]}",
    )


def test_second_subscription_overwrites_the_first(session, make_user):
    user = make_user()

    first = _subscribe(session, user.id, "https://push.example.com/1")
    second = _subscribe(session, user.id, "https://push.example.com/2")

    stored = PushSubscriptionRepository(session).list_for_user(user.id)
    assert len(stored) == 1
    assert stored[0].id == first.id == second.id
    assert stored[0].endpoint == "https://push.example.com/2"
    assert stored[0].p256dh == "p256dh-2"
    assert stored[0].updated_at is not None


def test_subscriptions_are_scoped_per_user(session, make_user):
    alice = make_user("alice@example.com")
    bob = make_user("bob@example.com")
    _subscribe(session, alice.id, "https://push.example.com/a")
    _subscribe(session, bob.id, "https://push.example.com/b")

    assert get_subscription(session, user_id=alice.id).endpoint == "https://push.example.com/a"
    assert get_subscription(session, user_id=bob.id).endpoint == "https://push.example.com/b"


@pytest.mark.parametrize(
    ("endpoint", "p256dh", "auth"),
    [
        (None, "key", "secret"),
        ("   ", "key", "secret"),
        ("http://push.example.com/insecure", "key", "secret"),
        ("https://push.example.com/1", None, "secret"),
        ("https://push.example.com/1", "key", ""),
    ],
)
def test_subscribe_rejects_incomplete_payloads(session, make_user, endpoint, p256dh, auth):
    user = make_user()

    with pytest.raises(ValidationError):
        subscribe(session, user_id=user.id, endpoint=endpoint, p256dh=p256dh, auth=auth)

    assert get_subscription(session, user_id=user.id) is None


def test_unsubscribe_with_stale_endpoint_keeps_the_current_one(session, make_user):
    user = make_user()
    _subscribe(session, user.id, "https://push.example.com/2")

    with pytest.raises(NotFoundError):
        unsubscribe(session, user_id=user.id, endpoint="https://push.example.com/1")
    assert get_subscription(session, user_id=user.id) is not None

    unsubscribe(session, user_id=user.id, endpoint="https://push.example.com/2")
    assert get_subscription(session, user_id=user.id) is None

    with pytest.raises(NotFoundError):
        unsubscribe(session, user_id=user.id)
