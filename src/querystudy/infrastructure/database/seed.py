"""Sample data shared by the CLI ``init`` command and the tests.

teamA: member1 (10), member2 (20)
teamB: member3 (30), member4 (40)
"""

from __future__ import annotations

import logging

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from querystudy.infrastructure.database.models import Member, Team

logger = logging.getLogger(__name__)

SAMPLE_TEAMS: tuple[str, ...] = ("teamA", "teamB")
SAMPLE_MEMBERS: tuple[tuple[str, int, str], ...] = (
    ("member1", 10, "teamA"),
    ("member2", 20, "teamA"),
    ("member3", 30, "teamB"),
    ("member4", 40, "teamB"),
)


def seed_sample_data(session: Session) -> int:
    """Insert the sample teams and members unless members already exist.

    The caller owns the transaction. Returns the number of members added.
    """
    existing = session.scalar(select(func.count(Member.id))) or 0
    if existing:
        logger.debug("Skipping seed: %d members already present", existing)
        return 0

    teams = {name: Team(name) for name in SAMPLE_TEAMS}
    members = [Member(username, age, teams[team]) for username, age, team in SAMPLE_MEMBERS]
    session.add_all([*teams.values(), *members])
    session.flush()
    logger.debug("Seeded %d teams and %d members", len(teams), len(members))
    return len(members)
