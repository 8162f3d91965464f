"""winget package manager implementation.

Queries and mutates installed software with the Windows Package Manager.
"""

import logging

from wingetctl.managers.base import PackageManager
from wingetctl.utils.shell import (
    BoundedResult,
    CommandResult,
    command_exists,
    run_bounded,
    run_command,
)

logger = logging.getLogger(__name__)


class WingetManager(PackageManager):
    """Package manager backed by the winget CLI.

    Attributes:
        executable: winget binary name or path.
        tail_lines: Output lines kept from install/upgrade runs.
    """

    _AGREEMENT_FLAGS: tuple[str, ...] = (
        "--accept-package-agreements",
        "--accept-source-agreements",
    )
    # Some upgrades are only listed when unknown versions are included
    _UPGRADE_FLAGS: tuple[str, ...] = ("--include-unknown", "--force")

    def __init__(self, executable: str = "winget", tail_lines: int = 10) -> None:
        """Initialize the manager.

        Args:
            executable: winget binary name or path.
            tail_lines: Output lines kept from install/upgrade runs.
        """
        self.executable = executable
        self.tail_lines = tail_lines

    @property
    def name(self) -> str:
        """Return winget as the package manager name."""
        return "winget"

    def is_available(self) -> bool:
        """Check if winget is available."""
        return command_exists(self.executable)

    def list_installed(self, timeout: float) -> CommandResult:
        """Run ``winget list``."""
        return self._query(["list", "--accept-source-agreements"], timeout)

    def list_upgradable(self, timeout: float) -> CommandResult:
        """Run ``winget upgrade`` without a package, which lists upgrades."""
        return self._query(
            ["upgrade", "--include-unknown", "--accept-source-agreements"],
            timeout,
        )

    def silent_args(self) -> list[str]:
        """Return the winget silent flag."""
        return ["--silent"]

    def override_args(self, arguments: str) -> list[str]:
        """Return the winget override flag with its payload."""
        return ["--override", arguments]

    def install(self, package_id: str, args: list[str], timeout: float) -> BoundedResult:
        """Run ``winget install`` for one package."""
        return self._mutate("install", package_id, args, timeout)

    def upgrade(self, package_id: str, args: list[str], timeout: float) -> BoundedResult:
        """Run ``winget upgrade`` for one package."""
        return self._mutate("upgrade", package_id, [*self._UPGRADE_FLAGS, *args], timeout)

    def build_command(self, command: str, package_id: str, args: list[str]) -> list[str]:
        """Build the full argument list for a mutating winget command.

        Args:
            command: winget subcommand ('install' or 'upgrade').
            package_id: Exact catalog identifier.
            args: Additional arguments appended after the base arguments.

        Returns:
            Argument list starting with the executable.
        """
        return [
            self.executable,
            command,
            "--id",
            package_id,
            "--exact",
            *self._AGREEMENT_FLAGS,
            *args,
        ]

    def _query(self, args: list[str], timeout: float) -> CommandResult:
        """Run a read-only winget query."""
        logger.debug("Querying winget: %s", " ".join(args))
        return run_command([self.executable, *args], timeout=timeout)

    def _mutate(
        self,
        command: str,
        package_id: str,
        args: list[str],
        timeout: float,
    ) -> BoundedResult:
        """Run a mutating winget command under a hard timeout."""
        full_args = self.build_command(command, package_id, args)
        logger.info("Executing winget %s for %s (timeout=%.0fs)", command, package_id, timeout)
        logger.debug("Command line: %r", full_args)
        return run_bounded(full_args, timeout=timeout, tail_lines=self.tail_lines)
