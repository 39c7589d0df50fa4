"""Projection targets.

Both DTOs are immutable value objects. ``MemberDto`` mirrors the member's
own column names, so it can be filled either by field name or positionally.
``UserDto`` renames ``username`` to ``name``; projecting into it needs the
query to alias its columns.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any, TypeVar

from querystudy.domain.errors import ProjectionError

T = TypeVar("T")


@dataclass(frozen=True)
class MemberDto:
    username: str | None
    age: int


@dataclass(frozen=True)
class UserDto:
    name: str | None
    age: int


def bind_fields(dto_cls: type[T], row: Mapping[str, Any]) -> T:
    """Build *dto_cls* from a labelled row, matching labels to field names.

    Every DTO field must be present among the labels, and no extra labels
    are allowed. Raises :class:`ProjectionError` otherwise.
    """
    expected = [f.name for f in fields(dto_cls)]  # type: ignore[arg-type]
    labels = list(row.keys())
    if sorted(labels) != sorted(expected):
        raise ProjectionError(dto_cls.__name__, labels, expected)
    return dto_cls(**{name: row[name] for name in expected})
