"""Database engine and session management.

SQLite is the default backend: a file under ``{root}/.querystudy/`` for
the CLI, a temporary file in tests. Any SQLAlchemy URL works; the SQLite
pragmas are only applied when the dialect is SQLite.

Unlike a short-lived Core-only tool, the queries here rely on the ORM
session: identity map, relationship loading, and synchronization after
bulk statements.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker

from querystudy.infrastructure.database.models import Base

if TYPE_CHECKING:
    from collections.abc import Iterator

    from querystudy.config.settings import QueryStudySettings

logger = logging.getLogger(__name__)


def _sqlite_file(url: str) -> Path | None:
    """Return the database file for a file-backed SQLite URL, else None."""
    parsed = make_url(url)
    if parsed.get_backend_name() != "sqlite":
        return None
    if not parsed.database or parsed.database == ":memory:":
        return None
    return Path(parsed.database)


def create_db_engine(url: str) -> Engine:
    """Create an engine; SQLite gets foreign keys (and WAL for files).

    Statement logging is switched on by ``configure_logging(sql_echo=True)``.
    """
    engine = create_engine(url)

    if engine.dialect.name == "sqlite":
        use_wal = _sqlite_file(url) is not None

        @event.listens_for(engine, "connect")
        def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
            cursor = dbapi_conn.cursor()
            if use_wal:
                cursor.execute("PRAGMA journal_mode=WAL")
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


def init_database(url: str) -> Engine:
    """Create the engine and every mapped table.

    For file-backed SQLite the parent directory is created first.
    Safe to call on an existing database.
    """
    db_file = _sqlite_file(url)
    if db_file is not None:
        db_file.parent.mkdir(parents=True, exist_ok=True)

    engine = create_db_engine(url)
    Base.metadata.create_all(engine)
    logger.debug("Database ready at %s", engine.url.render_as_string(hide_password=True))
    return engine


class Database:
    """Engine plus session factory, injected into repositories and services.

    Sessions keep loaded attributes after commit so results can be read
    once the ``with`` block has closed.
    """

    def __init__(self, url: str) -> None:
        self._engine = init_database(url)
        self._sessions = sessionmaker(self._engine, expire_on_commit=False)

    @classmethod
    def from_settings(cls, settings: QueryStudySettings) -> Database:
        return cls(settings.resolved_database_url)

    @property
    def engine(self) -> Engine:
        """The underlying SQLAlchemy engine."""
        return self._engine

    @contextmanager
    def session(self) -> Iterator[Session]:
        """A plain session for reads; nothing is committed."""
        with self._sessions() as session:
            yield session

    @contextmanager
    def transaction(self) -> Iterator[Session]:
        """A session that commits on success and rolls back on exception.

        Usage::

            with db.transaction() as session:
                session.add(Member("member5", 50))
        """
        with self._sessions.begin() as session:
            yield session

    def close(self) -> None:
        self._engine.dispose()
