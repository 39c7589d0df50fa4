"""SQLAlchemy ORM mapping for the team/member schema.

Relationships:
    Team 1--* Member  (members.team_id foreign key, nullable)

A member without a team is valid; the outer-join and theta-join queries
depend on that.
"""

from __future__ import annotations

from sqlalchemy import ForeignKey, Integer, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Shared declarative base for all ORM models."""

    pass


class Team(Base):
    __tablename__ = "teams"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)

    members: Mapped[list[Member]] = relationship(back_populates="team")

    def __init__(self, name: str) -> None:
        self.name = name

    def __repr__(self) -> str:
        return f"Team(id={self.id!r}, name={self.name!r})"


class Member(Base):
    """A team member.

    ``Member("alice")`` is a member aged 0 with no team. Passing a team
    attaches the member to ``team.members`` through the back reference.
    """

    __tablename__ = "members"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str | None] = mapped_column(Text, index=True)
    age: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    team_id: Mapped[int | None] = mapped_column(ForeignKey("teams.id"), index=True)

    team: Mapped[Team | None] = relationship(back_populates="members")

    def __init__(self, username: str | None, age: int = 0, team: Team | None = None) -> None:
        self.username = username
        self.age = age
        if team is not None:
            self.change_team(team)

    def change_team(self, team: Team) -> None:
        """Move this member to *team*; both sides of the association follow."""
        self.team = team

    # No team here: rendering it would trigger a lazy load.
    def __repr__(self) -> str:
        return f"Member(id={self.id!r}, username={self.username!r}, age={self.age!r})"

