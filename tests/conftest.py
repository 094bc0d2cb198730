"""Shared fixtures: an isolated SQLite database and in-memory delivery fakes."""

from __future__ import annotations

from typing import Any

import pytest

from life_agent.application.use_cases.notifications import NotificationDispatcher
from life_agent.config import Settings
from life_agent.domain.entities import PushSubscription, User
from life_agent.infrastructure.database import Database
from life_agent.infrastructure.repositories import (
    NotificationRepository,
    PushSubscriptionRepository,
    UserRepository,
)
from life_agent.infrastructure.security import get_password_hash

TEST_PASSWORD = "StrongPass123"


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        database_url=f"sqlite:///{tmp_path / 'life_agent_test.db'}",
        secret_key="test-secret",
        debug=True,
        cron_secret=None,
        vapid_public_key=None,
        vapid_private_key=None,
        vapid_subject=None,
    )


@pytest.fixture
def database(settings: Settings):
    database = Database.from_settings(settings)
    database.initialize()
    yield database
    database.dispose()


@pytest.fixture
def session(database: Database):
    session = database.session()
    yield session
    session.close()


@pytest.fixture
def make_user(session):
    """Insert a user and return the stored entity."""

    def _make_user(
        email: str = "user@example.com",
        *,
        name: str = "Test User",
        is_active: bool = True,
        password: str = TEST_PASSWORD,
    ) -> User:
        return UserRepository(session).create(
            User(
                id=None,
                name=name,
                email=email,
                password=get_password_hash(password),
                is_active=is_active,
            )
        )

    return _make_user


class FakePublisher:
    """Record realtime events instead of sending them."""

    def __init__(self, *, fail: bool = False) -> None:
        self.fail = fail
        self.events: list[tuple[str, str, Any]] = []

    async def publish(self, topic: str, event_name: str, payload: Any) -> None:
        if self.fail:
            raise RuntimeError("realtime channel unavailable")
        self.events.append((topic, event_name, payload))


class FakePushTransport:
    """Record push payloads; endpoints listed in ``failures`` raise instead."""

    def __init__(self, failures: dict[str, Exception] | None = None) -> None:
        self.failures = dict(failures or {})
        self.sent: list[tuple[str, dict[str, Any]]] = []

    async def send(self, subscription: PushSubscription, payload: dict[str, Any]) -> None:
        error = self.failures.get(subscription.endpoint)
        if error is not None:
            raise error
        self.sent.append((subscription.endpoint, payload))


class FakeSubscriptions:
    """Stand-in subscription store that can hold several endpoints per user."""

    def __init__(self, subscriptions: list[PushSubscription] | None = None) -> None:
        self.subscriptions = list(subscriptions or [])

    def list_for_user(self, user_id: int) -> list[PushSubscription]:
        return [s for s in self.subscriptions if s.user_id == user_id]


@pytest.fixture
def publisher() -> FakePublisher:
    return FakePublisher()


@pytest.fixture
def transport() -> FakePushTransport:
    return FakePushTransport()


@pytest.fixture
def dispatcher(session, publisher, transport, settings) -> NotificationDispatcher:
    return NotificationDispatcher(
        notifications=NotificationRepository(session),
        subscriptions=PushSubscriptionRepository(session),
        publisher=publisher,
        transport=transport,
        settings=settings,
    )


@pytest.fixture
def build_dispatcher(session, settings):
    """Return a factory for dispatchers with custom channels and subscription lists."""

    def _build(
        *,
        endpoints: dict[int, list[str]] | None = None,
        publisher: Any = None,
        transport: Any = None,
        on_endpoint_gone=None,
    ) -> NotificationDispatcher:
        subscriptions = [
            PushSubscription(
                id=index,
                user_id=user_id,
                endpoint=endpoint,
                p256dh="p256dh-key",
                auth="auth-key",
            )
            for user_id, user_endpoints in (endpoints or {}).items()
            for index, endpoint in enumerate(user_endpoints, start=1)
        ]
        return NotificationDispatcher(
            notifications=NotificationRepository(session),
            subscriptions=FakeSubscriptions(subscriptions),
            publisher=publisher,
            transport=transport,
            settings=settings,
            on_endpoint_gone=on_endpoint_gone,
        )

    return _build
