"""Tests for the init command."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from querystudy.cli import cli


@pytest.mark.usefixtures("_isolated_root")
class TestInitCommand:
    def test_seeds_sample_data(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "init"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["ok"] is True
        assert data["op"] == "seed"
        assert data["data"]["inserted"] == 4

    def test_second_init_warns(self, cli_runner: CliRunner) -> None:
        cli_runner.invoke(cli, ["init"])
        result = cli_runner.invoke(cli, ["init"])
        assert result.exit_code == 0
        assert "WARNING: Members already present" in result.output

    def test_second_init_json_keeps_warning_in_payload(self, cli_runner: CliRunner) -> None:
        cli_runner.invoke(cli, ["init"])
        result = cli_runner.invoke(cli, ["--json", "init"])
        data = json.loads(result.output)
        assert data["data"]["inserted"] == 0
        assert data["warnings"]

    def test_no_seed(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "init", "--no-seed"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["op"] == "init"
        assert data["data"]["seeded"] is False
        search = json.loads(cli_runner.invoke(cli, ["--json", "query", "search"]).output)
        assert search["data"]["count"] == 0

    def test_seed_disabled_in_config(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "querystudy.toml").write_text("[seed]\nenabled = false\n")
        result = cli_runner.invoke(cli, ["--json", "init"])
        assert json.loads(result.output)["data"]["seeded"] is False

    def test_rich_output(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["init"])
        assert result.exit_code == 0
        assert "OK" in result.output
        assert "inserted: 4" in result.output

    def test_help_shows_examples(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["init", "--help"])
        assert "querystudy init --no-seed" in result.output
