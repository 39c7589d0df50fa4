"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, querystudy.toml only contains
overrides. An empty file (or no file at all) is a valid configuration.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

DEFAULT_DB_RELPATH = Path(".querystudy") / "querystudy.db"


class DatabaseConfig(BaseModel):
    """[database] section."""

    model_config = {"frozen": True}

    url: str | None = None
    echo: bool = False

    def resolve_url(self, root: Path) -> str:
        """Return the configured URL, or a SQLite file under *root*."""
        if self.url:
            return self.url
        return f"sqlite:///{root / DEFAULT_DB_RELPATH}"


class SeedConfig(BaseModel):
    """[seed] section."""

    model_config = {"frozen": True}

    enabled: bool = True


class QueryStudyConfig(BaseModel):
    """Top-level querystudy.toml model."""

    model_config = {"frozen": True}

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    seed: SeedConfig = Field(default_factory=SeedConfig)
