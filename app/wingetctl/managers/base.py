"""Abstract base class for package managers.

This module defines the PackageManager interface the reconciliation
engine talks to: two bulk queries and two mutating operations.
"""

from abc import ABC, abstractmethod

from wingetctl.utils.shell import BoundedResult, CommandResult


class PackageManager(ABC):
    """Abstract base class for package managers.

    None of the operations raise on a non-zero exit code; the caller
    decides success or failure from the returned result.

    Example:
        >>> manager = WingetManager()
        >>> if manager.is_available():
        ...     result = manager.install("Mozilla.Firefox", manager.silent_args(), 600)
        ...     print(result.returncode)
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return a human-readable package manager name."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check if this package manager is available on the system."""

    @abstractmethod
    def list_installed(self, timeout: float) -> CommandResult:
        """List installed packages in a single bulk query.

        Raises:
            FileNotFoundError: If the package manager is not installed.
            subprocess.TimeoutExpired: If the query exceeds the timeout.
        """

    @abstractmethod
    def list_upgradable(self, timeout: float) -> CommandResult:
        """List packages with an available upgrade in a single bulk query.

        Raises:
            FileNotFoundError: If the package manager is not installed.
            subprocess.TimeoutExpired: If the query exceeds the timeout.
        """

    @abstractmethod
    def silent_args(self) -> list[str]:
        """Arguments requesting a silent install from the package manager."""

    @abstractmethod
    def override_args(self, arguments: str) -> list[str]:
        """Arguments passing a raw string through to the installer.

        Override mode replaces the silent flag; the override string itself
        is responsible for silencing the installer.
        """

    @abstractmethod
    def install(self, package_id: str, args: list[str], timeout: float) -> BoundedResult:
        """Install a package by exact identifier.

        Args:
            package_id: Catalog identifier.
            args: Silent or override arguments.
            timeout: Seconds before the process is killed.

        Raises:
            FileNotFoundError: If the package manager is not installed.
            OSError: If the process cannot be started.
        """

    @abstractmethod
    def upgrade(self, package_id: str, args: list[str], timeout: float) -> BoundedResult:
        """Upgrade a package by exact identifier.

        Args:
            package_id: Catalog identifier.
            args: Silent or override arguments.
            timeout: Seconds before the process is killed.

        Raises:
            FileNotFoundError: If the package manager is not installed.
            OSError: If the process cannot be started.
        """
