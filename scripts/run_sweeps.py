"""Run the notification sweeps once, for cron or another external scheduler."""

from __future__ import annotations

import argparse
import logging
from datetime import timedelta

import anyio

from life_agent.application.use_cases.notifications import NotificationDispatcher
from life_agent.application.use_cases.sweeps import (
    generate_task_reminders,
    promote_due_notifications,
)
from life_agent.config import get_settings
from life_agent.domain.errors import StoreError
from life_agent.infrastructure.database import Database
from life_agent.infrastructure.notifications import WebPushTransport
from life_agent.infrastructure.repositories import (
    NotificationRepository,
    PushSubscriptionRepository,
)

logger = logging.getLogger("life_agent.sweeps")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "sweep",
        choices=("notifications", "tasks", "all"),
        nargs="?",
        default="all",
        help="Which sweep to run (default: all)",
    )
    return parser.parse_args()


async def run(sweep: str) -> None:
    settings = get_settings()
    database = Database.from_settings(settings)
    database.initialize()
    session = database.session()
    try:
        if sweep in ("notifications", "all"):
            promoted = promote_due_notifications(session)
            print(f"Promoted {promoted.processed} due notification(s)")

        if sweep in ("tasks", "all"):
            # No websocket listeners live in this process, so only push is used.
            dispatcher = NotificationDispatcher(
                notifications=NotificationRepository(session),
                subscriptions=PushSubscriptionRepository(session),
                publisher=None,
                transport=WebPushTransport.from_settings(settings),
                settings=settings,
            )
            window = None
            if settings.reminder_suppression_minutes:
                window = timedelta(minutes=settings.reminder_suppression_minutes)
            reminders = await generate_task_reminders(
                session, dispatcher, suppression_window=window
            )
            print(
                f"Scanned {reminders.users_scanned} user(s), "
                f"created {reminders.notifications_created} reminder(s)"
            )
    finally:
        session.close()
        database.dispose()


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=get_settings().log_level.upper())
    try:
        anyio.run(run, args.sweep)
    except StoreError as exc:
        logger.error("Sweep aborted: %s", exc.message)
        raise SystemExit(1) from exc


if __name__ == "__main__":
    main()
