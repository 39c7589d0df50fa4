"""Read and bulk-write queries over members and teams.

The repository is bound to one ORM session. Every query is built with
``select()`` / ``update()`` / ``delete()``; the one exception is
:meth:`MemberQueryRepository.find_by_username_textual`, which maps a
hand-written SQL string onto ``Member`` for comparison.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, TypeVar

from sqlalchemy import String, case, cast, delete, func, inspect, literal, select, text, update
from sqlalchemy.exc import MultipleResultsFound
from sqlalchemy.orm import Bundle, aliased, contains_eager

from querystudy.domain.dto import MemberDto, UserDto, bind_fields
from querystudy.domain.errors import NonUniqueResultError
from querystudy.infrastructure.database.models import Member, Team
from querystudy.infrastructure.repositories.predicates import present, search_filter

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from sqlalchemy import Select
    from sqlalchemy.orm import Session
    from sqlalchemy.sql.elements import ColumnElement

    from querystudy.domain.search import MemberSearch

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Age brackets shared by the searched CASE projections.
_YOUNG = (0, 20)
_MIDDLE = (21, 30)


class DtoBundle(Bundle):
    """Bundle that builds a DTO positionally from its columns.

    The columns must be listed in the DTO's constructor order.
    """

    def __init__(self, dto_cls: type[Any], *exprs: Any) -> None:
        super().__init__(dto_cls.__name__, *exprs)
        self.dto_cls = dto_cls

    def create_row_processor(
        self,
        query: Any,
        procs: Sequence[Callable[[Any], Any]],
        labels: Sequence[str],
    ) -> Callable[[Any], Any]:
        dto_cls = self.dto_cls

        def proc(row: Any) -> Any:
            return dto_cls(*(p(row) for p in procs))

        return proc


def relationship_loaded(entity: object, attribute: str) -> bool:
    """Whether *attribute* on *entity* is populated (no lazy load pending)."""
    return attribute not in inspect(entity).unloaded


class MemberQueryRepository:
    """Encapsulates the member/team queries."""

    def __init__(self, session: Session) -> None:
        self._session = session

    # ------------------------------------------------------------------
    # Single-result lookups
    # ------------------------------------------------------------------

    def find_by_username_textual(self, username: str) -> Member | None:
        """Hand-written SQL, mapped onto ``Member`` rows."""
        stmt = select(Member).from_statement(
            text(
                "SELECT id, username, age, team_id FROM members WHERE username = :username"
            ).bindparams(username=username)
        )
        return self._fetch_one(stmt, f"username={username!r}")

    def find_by_username(self, username: str) -> Member | None:
        return self._fetch_one(
            select(Member).where(Member.username == username),
            f"username={username!r}",
        )

    def find_one(self, *conditions: ColumnElement[bool]) -> Member | None:
        """The member matching every condition (conditions are ANDed)."""
        return self._fetch_one(select(Member).where(*conditions), "conditions")

    def _fetch_one(self, stmt: Select[Any], description: str) -> Any:
        try:
            return self._session.scalars(stmt).one_or_none()
        except MultipleResultsFound as exc:
            raise NonUniqueResultError(description) from exc

    # ------------------------------------------------------------------
    # Dynamic search
    # ------------------------------------------------------------------

    def search(self, search: MemberSearch) -> list[Member]:
        """Apply the folded filter for *search*; no filter matches everyone."""
        stmt = select(Member)
        condition = search_filter(search)
        if condition is not None:
            stmt = stmt.where(condition)
        return list(self._session.scalars(stmt.order_by(Member.id)))

    def search_where(self, *conditions: ColumnElement[bool] | None) -> list[Member]:
        """Apply each present condition; ``None`` entries are ignored."""
        stmt = select(Member).where(*present(conditions)).order_by(Member.id)
        return list(self._session.scalars(stmt))

    # ------------------------------------------------------------------
    # Ordering and aggregation
    # ------------------------------------------------------------------

    def ordered_by_age_desc_username_nulls_last(self) -> list[Member]:
        stmt = select(Member).order_by(
            Member.age.desc(),
            Member.username.desc().nulls_last(),
        )
        return list(self._session.scalars(stmt))

    def average_age_by_team(self) -> list[tuple[str, float]]:
        stmt = (
            select(Team.name, func.avg(Member.age).label("avg_age"))
            .select_from(Member)
            .join(Member.team)
            .group_by(Team.name)
            .order_by(Team.name)
        )
        return [(row.name, float(row.avg_age)) for row in self._session.execute(stmt)]

    # ------------------------------------------------------------------
    # Joins
    # ------------------------------------------------------------------

    def members_of_team(self, team_name: str) -> list[Member]:
        stmt = (
            select(Member)
            .join(Member.team)
            .where(Team.name == team_name)
            .order_by(Member.id)
        )
        return list(self._session.scalars(stmt))

    def members_named_like_teams(self) -> list[Member]:
        """Theta join: members whose username equals some team's name."""
        stmt = select(Member).where(Member.username == Team.name).order_by(Member.id)
        return list(self._session.scalars(stmt))

    def members_with_team_filtered_on(self, team_name: str) -> list[tuple[Member, Team | None]]:
        """Every member, paired with its team only when that team is *team_name*."""
        stmt = (
            select(Member, Team)
            .outerjoin(Member.team.and_(Team.name == team_name))
            .order_by(Member.id)
        )
        return [(member, team) for member, team in self._session.execute(stmt)]

    def fetch_with_team(self, username: str) -> Member | None:
        """Load the member and its team in one statement."""
        stmt = (
            select(Member)
            .join(Member.team)
            .options(contains_eager(Member.team))
            .where(Member.username == username)
        )
        return self._fetch_one(stmt, f"username={username!r}")

    def find_without_fetch(self, username: str) -> Member | None:
        """Load the member only; its team stays lazy."""
        return self.find_by_username(username)

    # ------------------------------------------------------------------
    # Subqueries
    # ------------------------------------------------------------------

    def oldest_members(self) -> list[Member]:
        sub = aliased(Member, name="member_sub")
        stmt = (
            select(Member)
            .where(Member.age == select(func.max(sub.age)).scalar_subquery())
            .order_by(Member.id)
        )
        return list(self._session.scalars(stmt))

    def members_at_least_average_age(self) -> list[Member]:
        sub = aliased(Member, name="member_sub")
        stmt = (
            select(Member)
            .where(Member.age >= select(func.avg(sub.age)).scalar_subquery())
            .order_by(Member.id)
        )
        return list(self._session.scalars(stmt))

    def members_in_ages_over(self, age: int) -> list[Member]:
        sub = aliased(Member, name="member_sub")
        stmt = (
            select(Member)
            .where(Member.age.in_(select(sub.age).where(sub.age > age)))
            .order_by(Member.id)
        )
        return list(self._session.scalars(stmt))

    def usernames_with_average_age(self) -> list[tuple[str | None, float]]:
        sub = aliased(Member, name="member_sub")
        avg_age = select(func.avg(sub.age)).scalar_subquery().label("avg_age")
        stmt = select(Member.username, avg_age).order_by(Member.id)
        return [(row.username, float(row.avg_age)) for row in self._session.execute(stmt)]

    # ------------------------------------------------------------------
    # CASE expressions, constants, string functions
    # ------------------------------------------------------------------

    def age_labels(self) -> list[str]:
        label = case({10: "ten", 20: "twenty"}, value=Member.age, else_="other")
        return list(self._session.scalars(select(label).order_by(Member.id)))

    def age_brackets(self) -> list[str]:
        bracket = case(
            (Member.age.between(*_YOUNG), "0-20"),
            (Member.age.between(*_MIDDLE), "21-30"),
            else_="other",
        )
        return list(self._session.scalars(select(bracket).order_by(Member.id)))

    def ranked_by_age_bracket(self) -> list[tuple[str | None, int, int]]:
        """(username, age, rank), highest rank first."""
        rank = case(
            (Member.age.between(*_YOUNG), 2),
            (Member.age.between(*_MIDDLE), 1),
            else_=3,
        ).label("rank")
        stmt = select(Member.username, Member.age, rank).order_by(rank.desc(), Member.id)
        return [(row.username, row.age, row.rank) for row in self._session.execute(stmt)]

    def usernames_with_constant(self, value: str = "Y") -> list[tuple[str | None, str]]:
        stmt = select(Member.username, literal(value).label("constant")).order_by(Member.id)
        return [(row.username, row.constant) for row in self._session.execute(stmt)]

    def username_age_labels(self) -> list[str]:
        """``username_age`` strings, e.g. ``member1_10``."""
        label = Member.username.concat("_").concat(cast(Member.age, String))
        return list(self._session.scalars(select(label).order_by(Member.id)))

    def replaced_usernames(self, old: str, new: str) -> list[str]:
        stmt = select(func.replace(Member.username, old, new)).order_by(Member.id)
        return list(self._session.scalars(stmt))

    def first_username_upper(self) -> str | None:
        stmt = select(func.upper(Member.username)).order_by(Member.id).limit(1)
        return self._session.scalars(stmt).first()

    # ------------------------------------------------------------------
    # DTO projections
    # ------------------------------------------------------------------

    def project(self, dto_cls: type[T], *columns: Any) -> list[T]:
        """Project rows onto *dto_cls* by matching column labels to field names."""
        stmt = select(*columns).order_by(Member.id)
        return [bind_fields(dto_cls, row) for row in self._session.execute(stmt).mappings()]

    def member_dtos_by_fields(self) -> list[MemberDto]:
        return self.project(MemberDto, Member.username, Member.age)

    def user_dtos_by_alias(self) -> list[UserDto]:
        """``username`` as ``name``; ``age`` is the oldest member's age."""
        sub = aliased(Member, name="member_sub")
        return self.project(
            UserDto,
            Member.username.label("name"),
            select(func.max(sub.age)).scalar_subquery().label("age"),
        )

    def member_dtos_by_constructor(self) -> list[MemberDto]:
        bundle = DtoBundle(MemberDto, Member.username, Member.age)
        return list(self._session.scalars(select(bundle).order_by(Member.id)))

    # ------------------------------------------------------------------
    # Bulk operations
    # ------------------------------------------------------------------

    def bulk_increment_age(self, delta: int = 1) -> int:
        """Add *delta* to every member's age in one UPDATE."""
        result = self._session.execute(update(Member).values(age=Member.age + delta))
        count = int(result.rowcount)  # type: ignore[attr-defined]
        logger.debug("Bulk age update by %+d touched %d members", delta, count)
        return count

    def bulk_delete_older_than(self, age: int) -> int:
        """Delete every member strictly older than *age* in one DELETE."""
        result = self._session.execute(delete(Member).where(Member.age > age))
        count = int(result.rowcount)  # type: ignore[attr-defined]
        logger.debug("Bulk delete of members older than %d removed %d", age, count)
        return count
