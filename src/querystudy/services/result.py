"""The value every MemberService method returns.

Services never raise for expected failures (bad strategy, unknown DTO
shape, database errors); they return ``ok=False`` with a stable
``ServiceError.code`` that the CLI prints and maps to exit status 1.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """Why an operation failed.

    ``code`` is one of ``INVALID_STRATEGY``, ``INVALID_SHAPE``,
    ``PROJECTION_FAILED`` or ``DATABASE_ERROR``.
    """

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one service operation.

    Attributes:
        ok: False when ``error`` is set.
        op: Operation name, used to pick a renderer (``"search"``, ``"seed"``...).
        data: Payload; list-shaped operations put their rows under ``items``.
        warnings: Non-fatal notes, e.g. a skipped seed.
        error: Set when ``ok`` is False.
        meta: How the result was produced (search strategy, projection shape).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @property
    def items(self) -> list[dict[str, Any]]:
        """Rows of a list-shaped result; empty for everything else."""
        items = self.data.get("items")
        return items if isinstance(items, list) else []
