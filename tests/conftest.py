"""Shared pytest fixtures for querystudy tests."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from click.testing import CliRunner
from sqlalchemy.orm import Session

from querystudy.infrastructure.database.engine import Database
from querystudy.infrastructure.database.seed import seed_sample_data
from querystudy.infrastructure.repositories.member import MemberQueryRepository


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def db(tmp_path: Path) -> Iterator[Database]:
    """Empty SQLite database with the schema created."""
    database = Database(f"sqlite:///{tmp_path / 'test.db'}")
    try:
        yield database
    finally:
        database.close()


@pytest.fixture
def seeded_db(db: Database) -> Database:
    """Database holding teamA (member1/10, member2/20) and teamB (member3/30, member4/40)."""
    with db.transaction() as session:
        seed_sample_data(session)
    return db


@pytest.fixture
def session(seeded_db: Database) -> Iterator[Session]:
    """Open session on the seeded database; uncommitted work is discarded."""
    with seeded_db.session() as s:
        yield s


@pytest.fixture
def repo(session: Session) -> MemberQueryRepository:
    return MemberQueryRepository(session)


@pytest.fixture
def _isolated_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run the CLI from an empty temp directory with no config overrides.

    Use via ``@pytest.mark.usefixtures("_isolated_root")``. The default
    database then lands in ``tmp_path/.querystudy/``.
    """
    for var in ("QUERYSTUDY_CONFIG", "QUERYSTUDY_DATABASE_URL", "QUERYSTUDY_ROOT"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
