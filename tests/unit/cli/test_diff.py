"""Unit tests for diff command."""

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from typer.testing import CliRunner
from wingetctl.cli.main import app

runner = CliRunner()


@pytest.fixture
def packages_file(tmp_path: Path) -> Path:
    """Package list with one install, one upgrade and one skip."""
    path = tmp_path / "packages.txt"
    path.write_text("A.App\nMozilla.Firefox=firefox\nGit.Git=|/VERYSILENT\n")
    return path


class TestDiffCommand:
    """Tests for the diff command."""

    def test_diff_help(self) -> None:
        """Diff command shows help."""
        result = runner.invoke(app, ["diff", "--help"])

        assert result.exit_code == 0
        assert "--json" in result.stdout

    def test_missing_package_list(self, tmp_path: Path) -> None:
        """A missing package list exits with 1."""
        result = runner.invoke(app, ["diff", "-c", str(tmp_path / "nope.txt")])

        assert result.exit_code == 1
        assert "Package list not found" in (result.stdout + result.stderr)

    def test_default_package_list_location(self) -> None:
        """Without --config the XDG package list is used."""
        result = runner.invoke(app, ["diff"])

        assert result.exit_code == 1
        assert "Package list not found" in (result.stdout + result.stderr)

    def test_diff_shows_plan(
        self,
        packages_file: Path,
        manager_factory: type,
        mock_winget_list_output: str,
        mock_winget_upgrade_output: str,
    ) -> None:
        """The plan table lists every package and the summary counts."""
        manager = manager_factory(
            installed=mock_winget_list_output, upgradable=mock_winget_upgrade_output
        )

        with patch("wingetctl.cli.commands.diff.create_manager", return_value=manager):
            result = runner.invoke(app, ["diff", "-c", str(packages_file)])

        assert result.exit_code == 0
        assert "A.App" in result.stdout
        assert "Mozilla.Firefox" in result.stdout
        assert "1 to install" in result.stdout
        assert "1 to upgrade" in result.stdout
        assert "1 up to date" in result.stdout
        assert manager.calls == []
        assert manager.query_count == 2

    def test_diff_json(
        self,
        packages_file: Path,
        manager_factory: type,
        mock_winget_list_output: str,
        mock_winget_upgrade_output: str,
    ) -> None:
        """JSON output has the plan in file order."""
        manager = manager_factory(
            installed=mock_winget_list_output, upgradable=mock_winget_upgrade_output
        )

        with patch("wingetctl.cli.commands.diff.create_manager", return_value=manager):
            result = runner.invoke(app, ["diff", "-c", str(packages_file), "--json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["in_sync"] is False
        assert data["summary"] == {"install": 1, "upgrade": 1, "skip": 1, "total": 3}
        assert [e["action"] for e in data["entries"]] == ["install", "upgrade", "skip"]
        assert data["entries"][1]["conflicting_process"] == "firefox"
        assert data["entries"][2]["custom_arguments"] is True

    def test_diff_in_sync(
        self, tmp_path: Path, manager_factory: type, mock_winget_list_output: str
    ) -> None:
        """An in-sync system is reported as such."""
        path = tmp_path / "packages.txt"
        path.write_text("Git.Git\n7zip.7zip\n")
        manager = manager_factory(installed=mock_winget_list_output)

        with patch("wingetctl.cli.commands.diff.create_manager", return_value=manager):
            result = runner.invoke(app, ["diff", "-c", str(path)])

        assert result.exit_code == 0
        assert "up to date" in result.stdout
