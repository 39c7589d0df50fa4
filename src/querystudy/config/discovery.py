"""Locating and reading ``querystudy.toml``.

The file is looked up the way git finds ``.git/``: in the starting
directory, then in each parent. ``QUERYSTUDY_CONFIG`` short-circuits the
search; ``--config`` bypasses it entirely (see ``QueryStudySettings.from_cli``).
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path

from querystudy.config.models import QueryStudyConfig

CONFIG_FILENAME = "querystudy.toml"
CONFIG_ENV_VAR = "QUERYSTUDY_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the nearest ``querystudy.toml`` at or above *start* (default: cwd).

    When ``QUERYSTUDY_CONFIG`` is set, only that file is considered; a
    missing file there means no config rather than falling back to the walk.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override)
        return path if path.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def load_config(path: Path | None = None, cwd: Path | None = None) -> QueryStudyConfig:
    """Validate the TOML at *path* (or the one found from *cwd*).

    No file yields the all-defaults config.
    """
    path = path or find_config(cwd)
    if path is None:
        return QueryStudyConfig()
    with path.open("rb") as fh:
        return QueryStudyConfig.model_validate(tomllib.load(fh))
