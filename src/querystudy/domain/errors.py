"""Exception hierarchy for query and projection failures."""

from __future__ import annotations


class QueryStudyError(Exception):
    """Base class for errors raised by querystudy itself."""


class NonUniqueResultError(QueryStudyError):
    """A single-result query matched more than one row."""

    def __init__(self, description: str) -> None:
        super().__init__(f"Expected at most one result for {description}")
        self.description = description


class ProjectionError(QueryStudyError):
    """Row labels could not be bound to the fields of a DTO."""

    def __init__(self, dto_name: str, labels: list[str], expected: list[str]) -> None:
        super().__init__(
            f"Cannot project columns {labels} onto {dto_name}; expected fields {expected}"
        )
        self.dto_name = dto_name
        self.labels = labels
        self.expected = expected
