"""Promote scheduled notifications whose time has come."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime

from sqlalchemy.orm import Session

from life_agent.infrastructure.repositories import NotificationRepository
from life_agent.utils import ensure_timezone, now_in_timezone

logger = logging.getLogger(__name__)


@dataclass
class DuePromotionResult:
    processed_ids: list[int] = field(default_factory=list)

    @property
    def processed(self) -> int:
        return len(self.processed_ids)


def promote_due_notifications(
    session: Session, *, now: datetime | None = None
) -> DuePromotionResult:
    """Move ``pending`` notifications with ``scheduled_for <= now`` to ``sent``.

    The update is a single batch; if it fails the store is rolled back, no
    notification is marked and :class:`StoreError` propagates.
    """

    now = ensure_timezone(now) if now else now_in_timezone()
    repository = NotificationRepository(session)
    due_ids = repository.list_due_pending_ids(now=now)
    if not due_ids:
        logger.info("No pending notifications due at %s", now.isoformat())
        return DuePromotionResult()

    repository.mark_sent(due_ids)
    logger.info("Promoted %s due notification(s) to sent", len(due_ids))
    return DuePromotionResult(processed_ids=due_ids)


__all__ = ["DuePromotionResult", "promote_due_notifications"]
