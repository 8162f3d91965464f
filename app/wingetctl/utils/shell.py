"""Shell execution utilities.

Provides subprocess execution with proper error handling. Commands are
always launched from an argument list, never from a concatenated string.
"""

import logging
import shutil
import subprocess
from collections import deque
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Result of a shell command execution.

    Attributes:
        stdout: Standard output from the command.
        stderr: Standard error from the command.
        returncode: Exit code of the command.
    """

    stdout: str
    stderr: str
    returncode: int

    @property
    def success(self) -> bool:
        """Check if command executed successfully."""
        return self.returncode == 0


@dataclass(frozen=True, slots=True)
class BoundedResult:
    """Result of a command run under a hard timeout.

    Attributes:
        returncode: Exit code, or None if the command was killed on timeout.
        timed_out: Whether the timeout was exceeded.
        output_tail: Last lines of combined stdout/stderr.
    """

    returncode: int | None
    timed_out: bool = False
    output_tail: tuple[str, ...] = field(default_factory=tuple)

    @property
    def success(self) -> bool:
        """Check if command exited with code 0 before the timeout."""
        return not self.timed_out and self.returncode == 0


def run_command(
    args: list[str],
    *,
    check: bool = False,
    timeout: float | None = 60.0,
    cwd: str | None = None,
) -> CommandResult:
    """Execute a shell command and return the result.

    Args:
        args: Command and arguments to execute.
        check: If True, raise CalledProcessError on non-zero exit.
        timeout: Maximum time in seconds to wait for command.
        cwd: Working directory for the command. If None, uses current directory.

    Returns:
        CommandResult with stdout, stderr, and returncode.

    Raises:
        subprocess.CalledProcessError: If check=True and command fails.
        subprocess.TimeoutExpired: If command exceeds timeout.
        FileNotFoundError: If command executable is not found.
    """
    result = subprocess.run(
        args,
        capture_output=True,
        text=True,
        encoding="utf-8",
        errors="replace",
        check=check,
        timeout=timeout,
        cwd=cwd,
    )
    return CommandResult(
        stdout=result.stdout,
        stderr=result.stderr,
        returncode=result.returncode,
    )


def run_bounded(
    args: list[str],
    *,
    timeout: float,
    tail_lines: int = 10,
) -> BoundedResult:
    """Execute a command, killing it if it runs longer than the timeout.

    Stdout and stderr are merged. The child is killed and reaped on every
    exit path, including KeyboardInterrupt while waiting, so no orphaned
    process survives this call.

    Args:
        args: Command and arguments to execute.
        timeout: Maximum time in seconds to wait for the command.
        tail_lines: Number of trailing output lines to keep.

    Returns:
        BoundedResult with the exit code, timeout flag, and output tail.

    Raises:
        FileNotFoundError: If command executable is not found.
        OSError: If the command cannot be started.
    """
    process = subprocess.Popen(
        args,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        stdin=subprocess.DEVNULL,
        text=True,
        encoding="utf-8",
        errors="replace",
    )
    timed_out = False
    try:
        try:
            output, _ = process.communicate(timeout=timeout)
        except subprocess.TimeoutExpired:
            timed_out = True
            logger.warning("Command exceeded %.0fs timeout, killing: %s", timeout, args[0])
            process.kill()
            output = _drain(process)
    finally:
        if process.poll() is None:
            process.kill()
            process.wait()

    return BoundedResult(
        returncode=None if timed_out else process.returncode,
        timed_out=timed_out,
        output_tail=tail(output or "", tail_lines),
    )


def tail(output: str, lines: int) -> tuple[str, ...]:
    """Return the last non-blank lines of command output.

    Args:
        output: Raw command output.
        lines: Maximum number of lines to return.

    Returns:
        Tuple of at most ``lines`` stripped lines, oldest first.
    """
    if lines <= 0:
        return ()
    kept: deque[str] = deque(maxlen=lines)
    for line in output.splitlines():
        line = line.rstrip()
        if line.strip():
            kept.append(line)
    return tuple(kept)


def command_exists(name: str) -> bool:
    """Check if a command exists in the system PATH.

    Args:
        name: Command name to check.

    Returns:
        True if command exists, False otherwise.
    """
    return shutil.which(name) is not None


def _drain(process: subprocess.Popen[str], timeout: float = 5.0) -> str:
    """Collect remaining output from a killed process.

    Grandchildren that inherited the pipe can keep it open after the
    direct child dies, so the read is bounded as well.
    """
    try:
        output, _ = process.communicate(timeout=timeout)
    except subprocess.TimeoutExpired:
        logger.debug("Output pipe still open after kill, discarding remaining output")
        return ""
    return output or ""
