"""Running-process lookup and termination.

Wraps the operating system's own tools (tasklist/taskkill on Windows,
pgrep/pkill elsewhere) instead of reimplementing process enumeration.
"""

import logging
import subprocess
import sys

from wingetctl.utils.shell import run_command

logger = logging.getLogger(__name__)


class ProcessController:
    """Find and forcibly terminate processes by executable name.

    Attributes:
        windows: Whether Windows tooling and '.exe' image names are used.
    """

    # Timeout for a single lookup or kill command
    _COMMAND_TIMEOUT: float = 15.0

    def __init__(self, windows: bool | None = None) -> None:
        """Initialize the controller.

        Args:
            windows: Force Windows or POSIX behaviour. None detects the
                current platform.
        """
        self.windows = sys.platform == "win32" if windows is None else windows

    def image_name(self, name: str) -> str:
        """Return the executable image name used to match a process.

        Windows image names carry an extension; a bare name gets '.exe'.
        """
        if self.windows and "." not in name:
            return f"{name}.exe"
        return name

    def is_running(self, name: str) -> bool:
        """Check if a process with the given name is running.

        Lookup failures are reported as "not running".

        Args:
            name: Process name, with or without extension.

        Returns:
            True if at least one matching process exists.
        """
        image = self.image_name(name)
        if self.windows:
            args = ["tasklist", "/FI", f"IMAGENAME eq {image}", "/NH"]
        else:
            args = ["pgrep", "-x", image]

        try:
            result = run_command(args, timeout=self._COMMAND_TIMEOUT)
        except (FileNotFoundError, OSError, subprocess.TimeoutExpired) as e:
            logger.warning("Could not query running processes for %s: %s", image, e)
            return False

        if self.windows:
            # tasklist exits 0 and prints an INFO line when nothing matches
            return image.lower() in result.stdout.lower()
        return result.success

    def terminate(self, name: str) -> bool:
        """Forcibly terminate every process with the given name.

        Terminating a process that is no longer running counts as success.

        Args:
            name: Process name, with or without extension.

        Returns:
            True if no matching process remains, False otherwise.
        """
        image = self.image_name(name)
        if self.windows:
            args = ["taskkill", "/F", "/IM", image]
        else:
            args = ["pkill", "-KILL", "-x", image]

        try:
            result = run_command(args, timeout=self._COMMAND_TIMEOUT)
        except (FileNotFoundError, OSError, subprocess.TimeoutExpired) as e:
            logger.warning("Could not terminate %s: %s", image, e)
            return False

        logger.debug(
            "Terminate %s exited with %d: %s",
            image,
            result.returncode,
            (result.stdout or result.stderr).strip(),
        )
        if result.success:
            return True
        return not self.is_running(name)
