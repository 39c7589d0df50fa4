"""MemberService: the CLI-facing surface over MemberQueryRepository.

Read operations use ``self._db.session()``; seeding and bulk statements
run inside ``self._db.transaction()`` so they commit together or not
at all.
"""

from __future__ import annotations

import logging
from dataclasses import asdict
from typing import TYPE_CHECKING, Any

from sqlalchemy.exc import SQLAlchemyError

from querystudy.domain.dto import MemberDto, UserDto
from querystudy.domain.errors import ProjectionError
from querystudy.domain.search import MemberSearch, ProjectionShape, SearchStrategy
from querystudy.infrastructure.database.seed import seed_sample_data
from querystudy.infrastructure.repositories.member import MemberQueryRepository
from querystudy.infrastructure.repositories.predicates import search_conditions
from querystudy.services.base import BaseService
from querystudy.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from querystudy.infrastructure.database.models import Member

logger = logging.getLogger(__name__)


def _member_row(member: Member) -> dict[str, Any]:
    return {
        "id": member.id,
        "username": member.username,
        "age": member.age,
        "team": member.team.name if member.team is not None else None,
    }


def _database_error(op: str, exc: SQLAlchemyError) -> ServiceResult:
    logger.warning("%s failed: %s", op, exc)
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code="DATABASE_ERROR", message=str(exc)),
    )


class MemberService(BaseService):
    """Seeding, search, projections, and bulk updates for members."""

    def seed(self) -> ServiceResult:
        """Insert the sample teams and members into an empty database."""
        op = "seed"
        try:
            with self._db.transaction() as session:
                inserted = seed_sample_data(session)
        except SQLAlchemyError as exc:
            return _database_error(op, exc)

        warnings = [] if inserted else ["Members already present; seed skipped"]
        return ServiceResult(ok=True, op=op, data={"inserted": inserted}, warnings=warnings)

    def search(
        self,
        *,
        username: str | None = None,
        age: int | None = None,
        strategy: str = SearchStrategy.FOLD,
    ) -> ServiceResult:
        """Find members matching every given filter.

        Args:
            username: Exact username, or None for no username filter.
            age: Exact age, or None for no age filter.
            strategy: ``"fold"`` combines the filters into one condition
                before querying; ``"where"`` hands the per-filter conditions
                to the query, which skips the absent ones.
        """
        op = "search"
        try:
            mode = SearchStrategy(strategy)
        except ValueError:
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(
                    code="INVALID_STRATEGY",
                    message=f"Unknown search strategy: {strategy!r}",
                    detail={"allowed": [s.value for s in SearchStrategy]},
                ),
            )

        params = MemberSearch(username=username, age=age)
        try:
            with self._db.session() as session:
                repo = MemberQueryRepository(session)
                if mode is SearchStrategy.FOLD:
                    members = repo.search(params)
                else:
                    members = repo.search_where(*search_conditions(params))
                items = [_member_row(m) for m in members]
        except SQLAlchemyError as exc:
            return _database_error(op, exc)

        logger.debug("search %s matched %d members", params.model_dump(), len(items))
        return ServiceResult(
            ok=True,
            op=op,
            data={"count": len(items), "items": items},
            meta={"strategy": mode.value, "filters": params.model_dump(exclude_none=True)},
        )

    def team_stats(self) -> ServiceResult:
        """Average member age per team."""
        op = "team_stats"
        try:
            with self._db.session() as session:
                rows = MemberQueryRepository(session).average_age_by_team()
        except SQLAlchemyError as exc:
            return _database_error(op, exc)

        items = [{"team": name, "avg_age": avg} for name, avg in rows]
        return ServiceResult(ok=True, op=op, data={"count": len(items), "items": items})

    def age_brackets(self) -> ServiceResult:
        """Members ranked by age bracket, plus the per-member CASE labels.

        ``items`` is in rank order; ``brackets`` and ``labels`` follow
        member id order.
        """
        op = "age_brackets"
        try:
            with self._db.session() as session:
                repo = MemberQueryRepository(session)
                ranked = repo.ranked_by_age_bracket()
                brackets = repo.age_brackets()
                labels = repo.age_labels()
        except SQLAlchemyError as exc:
            return _database_error(op, exc)

        items = [
            {"username": username, "age": age, "rank": rank} for username, age, rank in ranked
        ]
        return ServiceResult(
            ok=True,
            op=op,
            data={"count": len(items), "items": items, "brackets": brackets, "labels": labels},
        )

    def project(self, shape: str = ProjectionShape.MEMBER) -> ServiceResult:
        """Project every member onto a DTO.

        ``member`` binds columns to MemberDto by name, ``user`` aliases
        them onto UserDto, ``constructor`` builds MemberDto positionally.
        """
        op = "project"
        try:
            kind = ProjectionShape(shape)
        except ValueError:
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(
                    code="INVALID_SHAPE",
                    message=f"Unknown projection shape: {shape!r}",
                    detail={"allowed": [s.value for s in ProjectionShape]},
                ),
            )

        try:
            with self._db.session() as session:
                repo = MemberQueryRepository(session)
                dtos: list[MemberDto] | list[UserDto]
                if kind is ProjectionShape.USER:
                    dtos = repo.user_dtos_by_alias()
                elif kind is ProjectionShape.CONSTRUCTOR:
                    dtos = repo.member_dtos_by_constructor()
                else:
                    dtos = repo.member_dtos_by_fields()
        except ProjectionError as exc:
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(
                    code="PROJECTION_FAILED",
                    message=str(exc),
                    detail={"dto": exc.dto_name, "labels": exc.labels},
                ),
            )
        except SQLAlchemyError as exc:
            return _database_error(op, exc)

        items = [asdict(dto) for dto in dtos]
        return ServiceResult(
            ok=True,
            op=op,
            data={"count": len(items), "items": items},
            meta={"shape": kind.value},
        )

    def bulk_age_up(self, delta: int = 1) -> ServiceResult:
        """Add *delta* to every member's age in a single statement."""
        op = "bulk_age_up"
        try:
            with self._db.transaction() as session:
                count = MemberQueryRepository(session).bulk_increment_age(delta)
        except SQLAlchemyError as exc:
            return _database_error(op, exc)
        return ServiceResult(ok=True, op=op, data={"updated": count, "delta": delta})

    def bulk_delete_older(self, age: int) -> ServiceResult:
        """Delete every member older than *age* in a single statement."""
        op = "bulk_delete_older"
        try:
            with self._db.transaction() as session:
                count = MemberQueryRepository(session).bulk_delete_older_than(age)
        except SQLAlchemyError as exc:
            return _database_error(op, exc)
        return ServiceResult(ok=True, op=op, data={"deleted": count, "older_than": age})
