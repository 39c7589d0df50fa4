"""Tests for the root querystudy CLI."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from querystudy import __version__
from querystudy.cli import cli


def test_cli_help(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "querystudy" in result.output


def test_cli_version(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


@pytest.mark.usefixtures("_isolated_root")
def test_cli_no_args(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, [])
    assert result.exit_code == 0
    assert "Usage" in result.output


@pytest.mark.parametrize("flag", ["--json", "-q", "-v", "--log-json"])
def test_global_flags_accepted(cli_runner: CliRunner, flag: str) -> None:
    result = cli_runner.invoke(cli, [flag, "--version"])
    assert result.exit_code == 0


@pytest.mark.parametrize("name", ["init", "query", "bulk"])
def test_commands_registered(name: str) -> None:
    assert name in cli.commands


@pytest.mark.parametrize("name", ["search", "teams", "dto", "grades"])
def test_query_subcommands_registered(name: str) -> None:
    assert name in cli.commands["query"].commands  # type: ignore[attr-defined]


@pytest.mark.usefixtures("_isolated_root")
class TestDatabaseSelection:
    def test_default_database_under_cwd(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(cli, ["init"])
        assert result.exit_code == 0, result.output
        assert (tmp_path / ".querystudy" / "querystudy.db").exists()

    def test_database_url_option(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        url = f"sqlite:///{tmp_path / 'other.db'}"
        result = cli_runner.invoke(cli, ["--database-url", url, "init"])
        assert result.exit_code == 0, result.output
        assert (tmp_path / "other.db").exists()
        assert not (tmp_path / ".querystudy").exists()

    def test_config_file(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        config = tmp_path / "study.toml"
        config.write_text(f'[database]\nurl = "sqlite:///{tmp_path / "from-config.db"}"\n')
        result = cli_runner.invoke(cli, ["-c", str(config), "--json", "init"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["data"]["inserted"] == 4
        assert (tmp_path / "from-config.db").exists()

    def test_invalid_config(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "querystudy.toml").write_text("[database\n")
        result = cli_runner.invoke(cli, ["init"])
        assert result.exit_code != 0
        assert "Invalid TOML" in result.output
