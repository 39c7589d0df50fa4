"""Dynamic predicate assembly for member searches.

Each helper turns one optional parameter into an equality condition, or
``None`` when the parameter is absent. :func:`conjoin` folds whatever is
present into a single AND condition. Both search strategies use it:

* fold: :func:`build_filter` returns one combined condition (or ``None``
  for "no filter") that the query applies with a single ``where``.
* where: the caller passes the per-parameter results straight to
  :meth:`MemberQueryRepository.search_where`, which drops the ``None``
  entries before applying them.

Everything here is pure: no session, no I/O.
"""

from __future__ import annotations

import functools
from collections.abc import Iterable
from typing import TYPE_CHECKING

from sqlalchemy import and_

from querystudy.infrastructure.database.models import Member

if TYPE_CHECKING:
    from sqlalchemy.sql.elements import ColumnElement

    from querystudy.domain.search import MemberSearch


def username_eq(username: str | None) -> ColumnElement[bool] | None:
    return Member.username == username if username is not None else None


def age_eq(age: int | None) -> ColumnElement[bool] | None:
    return Member.age == age if age is not None else None


def present(conditions: Iterable[ColumnElement[bool] | None]) -> list[ColumnElement[bool]]:
    """Drop absent conditions, keeping the order of the rest."""
    return [c for c in conditions if c is not None]


def conjoin(conditions: Iterable[ColumnElement[bool] | None]) -> ColumnElement[bool] | None:
    """AND together every present condition; ``None`` if none are present."""
    kept = present(conditions)
    if not kept:
        return None
    return functools.reduce(and_, kept)


def build_filter(
    username: str | None = None,
    age: int | None = None,
) -> ColumnElement[bool] | None:
    """Combined equality filter over the given parameters.

    Returns ``None`` when both are absent, which the query layer reads as
    "match every member".
    """
    return conjoin((username_eq(username), age_eq(age)))


def search_conditions(search: MemberSearch) -> tuple[ColumnElement[bool] | None, ...]:
    """Per-parameter conditions for *search*, ``None`` where absent."""
    return (username_eq(search.username), age_eq(search.age))


def search_filter(search: MemberSearch) -> ColumnElement[bool] | None:
    """Folded filter for *search*."""
    return build_filter(search.username, search.age)
