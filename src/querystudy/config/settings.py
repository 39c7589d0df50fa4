"""One settings object for the CLI: flags, environment, and TOML merged.

Highest priority first:

1. CLI flags (``--json``, ``--database-url`` ...), passed as init kwargs
2. ``QUERYSTUDY_*`` environment variables, ``__`` for nested keys
   (``QUERYSTUDY_DATABASE__ECHO=1``)
3. ``querystudy.toml``, found by :func:`querystudy.config.discovery.find_config`
4. Defaults on the section models
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from querystudy.config.discovery import find_config
from querystudy.config.models import DatabaseConfig, SeedConfig


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Settings source over an already located TOML file (or none)."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._values: dict[str, Any] = _read_toml(toml_path) if toml_path else {}

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._values.get(field_name), field_name, field_name in self._values

    def __call__(self) -> dict[str, Any]:
        return self._values


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as fh:
            return tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        raise click.ClickException(f"Invalid TOML in {path}: {exc}") from exc


# pydantic-settings builds sources from the class, so the TOML path located
# by from_cli() is handed over per thread for the duration of __init__.
_pending = threading.local()


class QueryStudySettings(BaseSettings):
    """Settings for one ``querystudy`` invocation.

    Attributes:
        root: Directory holding ``querystudy.toml`` (the CWD when there is
            none); the default SQLite file lives under it.
        config_path: The TOML file that was read, if any.
        database_url: ``--database-url``; wins over ``[database] url``.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "QUERYSTUDY_",
        "env_nested_delimiter": "__",
    }

    root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False
    database_url: str | None = None

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    seed: SeedConfig = Field(default_factory=SeedConfig)

    @property
    def resolved_database_url(self) -> str:
        """``--database-url``, then ``[database] url``, then the default SQLite file."""
        return self.database_url or self.database.resolve_url(self.root)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        toml_path = getattr(_pending, "toml_path", None)
        return init_settings, env_settings, TomlSettingsSource(settings_cls, toml_path)

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        root: Path | None = None,
        **cli_flags: Any,
    ) -> QueryStudySettings:
        """Build settings for a CLI run.

        An explicit *config_path* is used as given (ignored if it is not a
        file); otherwise the TOML is searched for upward from *root* or the
        CWD. Without an explicit *root* the TOML's directory becomes the
        root. Flags whose value is ``None`` are left out so they cannot
        mask environment or TOML values.
        """
        if config_path:
            toml_path: Path | None = Path(config_path)
            if not toml_path.is_file():
                toml_path = None
        else:
            toml_path = find_config(root)

        if root is None:
            root = toml_path.parent if toml_path else Path.cwd()

        overrides = {name: value for name, value in cli_flags.items() if value is not None}
        _pending.toml_path = toml_path
        try:
            return cls(root=root, config_path=toml_path, **overrides)
        finally:
            _pending.toml_path = None
