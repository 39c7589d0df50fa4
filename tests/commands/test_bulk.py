"""Tests for bulk CLI commands."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from querystudy.cli import cli


@pytest.mark.usefixtures("_isolated_root")
class TestBulkCommands:
    @pytest.fixture(autouse=True)
    def _seed(self, _isolated_root: None, cli_runner: CliRunner) -> None:
        assert cli_runner.invoke(cli, ["init"]).exit_code == 0

    def test_age_up_then_delete_older(self, cli_runner: CliRunner) -> None:
        updated = cli_runner.invoke(cli, ["--json", "bulk", "age-up"])
        assert updated.exit_code == 0, updated.output
        assert json.loads(updated.output)["data"] == {"updated": 4, "delta": 1}

        deleted = cli_runner.invoke(cli, ["--json", "bulk", "delete-older", "--age", "18"])
        assert deleted.exit_code == 0, deleted.output
        assert json.loads(deleted.output)["data"] == {"deleted": 3, "older_than": 18}

        search = cli_runner.invoke(cli, ["--json", "query", "search"])
        items = json.loads(search.output)["data"]["items"]
        assert [(i["username"], i["age"]) for i in items] == [("member1", 11)]

    def test_age_up_delta(self, cli_runner: CliRunner) -> None:
        cli_runner.invoke(cli, ["bulk", "age-up", "--delta", "5"])
        search = cli_runner.invoke(cli, ["--json", "query", "search", "--age", "15"])
        assert json.loads(search.output)["data"]["count"] == 1

    def test_delete_older_requires_age(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["bulk", "delete-older"])
        assert result.exit_code == 2

    def test_rich_output(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["bulk", "delete-older", "--age", "100"])
        assert result.exit_code == 0
        assert "deleted: 0" in result.output
