"""Tests for the rules CLI group."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from provcheck.cli import cli


@pytest.mark.usefixtures("_isolated_project")
class TestRulesCommands:
    def test_list(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["rules", "list"])
        assert result.exit_code == 0
        assert "app-quantity-validation" in result.stdout
        assert "5 of 5 enabled" in result.stdout

    def test_list_json(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "rules", "list"])
        data = json.loads(result.stdout)
        assert data["data"]["count"] == 5

    def test_disable_then_list(self, cli_runner: CliRunner, project_root: Path) -> None:
        result = cli_runner.invoke(cli, ["rules", "disable", "model-count-validation"])
        assert result.exit_code == 0
        assert (project_root / ".provcheck" / "rules.json").is_file()

        listed = json.loads(cli_runner.invoke(cli, ["--json", "rules", "list"]).stdout)
        enabled = {i["id"]: i["enabled"] for i in listed["data"]["items"]}
        assert enabled["model-count-validation"] is False
        assert listed["data"]["enabled_count"] == 4

    def test_enable(self, cli_runner: CliRunner) -> None:
        cli_runner.invoke(cli, ["rules", "disable", "entitlement-date-gap-validation"])
        result = cli_runner.invoke(cli, ["--json", "rules", "enable", "entitlement-date-gap-validation"])
        assert json.loads(result.stdout)["data"]["enabled"] is True

    def test_unknown_rule(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["rules", "enable", "nope"])
        assert result.exit_code == 1
        assert "Unknown rule id: nope" in result.stderr

    def test_reset(self, cli_runner: CliRunner) -> None:
        cli_runner.invoke(cli, ["rules", "disable", "model-count-validation"])
        result = cli_runner.invoke(cli, ["--json", "rules", "reset"])
        assert result.exit_code == 0
        assert all(json.loads(result.stdout)["data"]["enabled"].values())

    def test_custom_store_from_config(self, cli_runner: CliRunner, project_root: Path) -> None:
        (project_root / "provcheck.toml").write_text(
            '[store]\npath = "state/shared.json"\nkey = "team"\n', encoding="utf-8"
        )
        cli_runner.invoke(cli, ["rules", "disable", "model-count-validation"])
        document = json.loads((project_root / "state" / "shared.json").read_text(encoding="utf-8"))
        assert document["team"]["enabled_rules"]["model-count-validation"] is False
