"""Tests for config discovery and loading."""

from pathlib import Path

import pytest

from querystudy.config.discovery import CONFIG_ENV_VAR, CONFIG_FILENAME, find_config, load_config
from querystudy.config.models import QueryStudyConfig


@pytest.fixture(autouse=True)
def _no_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)


class TestFindConfig:
    def test_finds_in_current_dir(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text("[database]\necho = true\n")
        assert find_config(tmp_path) == config_file

    def test_walks_up(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text("")
        child = tmp_path / "a" / "b" / "c"
        child.mkdir(parents=True)
        assert find_config(child) == config_file

    def test_returns_none_when_not_found(self, tmp_path: Path) -> None:
        child = tmp_path / "empty"
        child.mkdir()
        assert find_config(child) is None

    def test_env_var_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        config_file = tmp_path / "custom.toml"
        config_file.write_text("")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(config_file))
        assert find_config(tmp_path / "elsewhere") == config_file

    def test_env_var_missing_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "nope.toml"))
        assert find_config(tmp_path) is None


class TestLoadConfig:
    def test_loads_from_file(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text('[database]\nurl = "sqlite://"\necho = true\n')
        cfg = load_config(config_file)
        assert cfg.database.url == "sqlite://"
        assert cfg.database.echo is True
        assert cfg.seed.enabled is True  # default

    def test_returns_defaults_when_no_file(self, tmp_path: Path) -> None:
        assert load_config(cwd=tmp_path) == QueryStudyConfig()

    def test_empty_file_returns_defaults(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text("")
        assert load_config(config_file) == QueryStudyConfig()


class TestDatabaseConfig:
    def test_default_url_under_root(self, tmp_path: Path) -> None:
        url = QueryStudyConfig().database.resolve_url(tmp_path)
        assert url == f"sqlite:///{tmp_path / '.querystudy' / 'querystudy.db'}"

    def test_explicit_url_wins(self, tmp_path: Path) -> None:
        cfg = QueryStudyConfig.model_validate({"database": {"url": "sqlite://"}})
        assert cfg.database.resolve_url(tmp_path) == "sqlite://"

    def test_frozen(self) -> None:
        cfg = QueryStudyConfig()
        with pytest.raises(Exception):
            cfg.seed.enabled = False  # type: ignore[misc]
