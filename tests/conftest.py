"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from pathlib import Path

import pytest
from wingetctl.managers.base import PackageManager
from wingetctl.utils.shell import BoundedResult, CommandResult


class FakeManager(PackageManager):
    """In-memory package manager recording every call."""

    def __init__(
        self,
        installed: str = "",
        upgradable: str = "",
        results: dict[str, BoundedResult] | None = None,
    ) -> None:
        self.installed = installed
        self.upgradable = upgradable
        self.results = results or {}
        self.calls: list[tuple[str, str, list[str]]] = []
        self.query_count = 0
        self.launch_error: OSError | None = None

    @property
    def name(self) -> str:
        return "fake"

    def is_available(self) -> bool:
        return True

    def list_installed(self, timeout: float) -> CommandResult:
        self.query_count += 1
        return CommandResult(stdout=self.installed, stderr="", returncode=0)

    def list_upgradable(self, timeout: float) -> CommandResult:
        self.query_count += 1
        return CommandResult(stdout=self.upgradable, stderr="", returncode=0)

    def silent_args(self) -> list[str]:
        return ["--silent"]

    def override_args(self, arguments: str) -> list[str]:
        return ["--override", arguments]

    def install(self, package_id: str, args: list[str], timeout: float) -> BoundedResult:
        return self._run("install", package_id, args)

    def upgrade(self, package_id: str, args: list[str], timeout: float) -> BoundedResult:
        return self._run("upgrade", package_id, args)

    def _run(self, command: str, package_id: str, args: list[str]) -> BoundedResult:
        self.calls.append((command, package_id, args))
        if self.launch_error is not None:
            raise self.launch_error
        return self.results.get(package_id, BoundedResult(returncode=0))


@pytest.fixture
def fake_manager() -> FakeManager:
    """Package manager double with nothing installed."""
    return FakeManager()


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point config and state directories into the test's tmp_path."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_STATE_HOME", str(tmp_path / "state"))
    return tmp_path


@pytest.fixture
def mock_winget_list_output() -> str:
    """Sample `winget list` output for testing."""
    return """Name                       Id                         Version      Available  Source
-----------------------------------------------------------------------------------------
Mozilla Firefox (x64 en-US) Mozilla.Firefox           128.0        129.0      winget
Git                        Git.Git                    2.45.1                  winget
Notepad++ (64-bit x64)     Notepad++.Notepad++        8.6.7                   winget
Visual Studio Code         Microsoft.VisualStudioCode 1.90.0                  winget
7-Zip 23.01 (x64)          7zip.7zip                  23.01                   winget"""


@pytest.fixture
def mock_winget_upgrade_output() -> str:
    """Sample `winget upgrade` output for testing."""
    return """Name                        Id              Version Available Source
-----------------------------------------------------------------------
Mozilla Firefox (x64 en-US) Mozilla.Firefox 128.0   129.0     winget
1 upgrades available."""


@pytest.fixture
def manager_factory() -> type[FakeManager]:
    """Class for building package manager doubles with custom state."""
    return FakeManager
