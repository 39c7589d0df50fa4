"""Search parameters and selection enums."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel


class SearchStrategy(StrEnum):
    """How optional filters are combined before reaching the query."""

    FOLD = "fold"
    WHERE = "where"


class ProjectionShape(StrEnum):
    """DTO projection variants offered by the CLI."""

    MEMBER = "member"
    USER = "user"
    CONSTRUCTOR = "constructor"


class MemberSearch(BaseModel):
    """Optional member filters.

    ``None`` means "no filter on this field". Falsy values such as ``0``
    or ``""`` are real filter values.
    """

    model_config = {"frozen": True}

    username: str | None = None
    age: int | None = None
