"""Shared helpers for repositories."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from life_agent.domain.errors import StoreError

logger = logging.getLogger(__name__)


@contextmanager
def store_operation(session: Session, description: str) -> Iterator[None]:
    """Translate SQLAlchemy failures into :class:`StoreError`.

    The session is rolled back first so a failed batch leaves no partial
    writes behind and the session stays usable.
    """

    try:
        yield
    except SQLAlchemyError as exc:
        session.rollback()
        logger.error("Store operation failed (%s): %s", description, exc)
        raise StoreError(f"Failed to {description}") from exc


__all__ = ["store_operation"]
