"""Database configuration and session management."""

from __future__ import annotations

from collections.abc import Generator

import logging

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from life_agent.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""


class Database:
    """Engine and session factory for one configured database.

    Instances are built by the application factory (or a script) and passed
    to whoever needs a session; there is no module-level engine.
    """

    def __init__(self, url: str, *, echo: bool = False) -> None:
        connect_args: dict[str, object] = {}
        if url.startswith("sqlite"):
            # Sessions are created in FastAPI's threadpool and used from the event loop.
            connect_args["check_same_thread"] = False
        self.url = url
        self.engine: Engine = create_engine(
            url, pool_pre_ping=True, echo=echo, connect_args=connect_args
        )
        self._session_factory = sessionmaker(
            bind=self.engine, autoflush=False, expire_on_commit=False
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(settings.database_url)

    def session(self) -> Session:
        """Return a new session bound to this database."""

        return self._session_factory()

    def initialize(self) -> None:
        """Ensure all ORM models have corresponding database tables."""

        from life_agent.infrastructure import models  # noqa: F401  # ensure models are imported

        Base.metadata.create_all(bind=self.engine, checkfirst=True)
        logger.debug("Database schema ensured for %s", self.engine.url.render_as_string())

    def dispose(self) -> None:
        self.engine.dispose()


def get_db(request: Request) -> Generator[Session, None, None]:
    """Yield a session from the application's database and close it afterwards."""

    database: Database = request.app.state.database
    db = database.session()
    try:
        yield db
    finally:
        db.close()


__all__ = ["Base", "Database", "get_db"]
