"""Unit tests for shell execution utilities."""

import subprocess
import sys
import time
from unittest.mock import MagicMock, patch

import pytest
from wingetctl.utils.shell import (
    BoundedResult,
    CommandResult,
    command_exists,
    run_bounded,
    run_command,
    tail,
)


class TestRunCommand:
    """Tests for run_command function."""

    @patch("wingetctl.utils.shell.subprocess.run")
    def test_returns_command_result(self, mock_run: MagicMock) -> None:
        """run_command wraps the subprocess result."""
        mock_run.return_value = MagicMock(stdout="out", stderr="err", returncode=2)

        result = run_command(["winget", "list"])

        assert result == CommandResult(stdout="out", stderr="err", returncode=2)
        assert result.success is False

    @patch("wingetctl.utils.shell.subprocess.run")
    def test_passes_timeout(self, mock_run: MagicMock) -> None:
        """run_command forwards the timeout and decodes as UTF-8."""
        mock_run.return_value = MagicMock(stdout="", stderr="", returncode=0)

        run_command(["winget", "list"], timeout=12)

        kwargs = mock_run.call_args.kwargs
        assert kwargs["timeout"] == 12
        assert kwargs["encoding"] == "utf-8"
        assert kwargs["errors"] == "replace"

    @patch(
        "wingetctl.utils.shell.subprocess.run",
        side_effect=subprocess.TimeoutExpired(cmd="winget", timeout=1),
    )
    def test_timeout_propagates(self, mock_run: MagicMock) -> None:
        """run_command lets TimeoutExpired propagate."""
        with pytest.raises(subprocess.TimeoutExpired):
            run_command(["winget", "list"], timeout=1)


class TestRunBounded:
    """Tests for run_bounded against real child processes."""

    def test_exit_code_and_output(self) -> None:
        """Exit code and merged output tail are captured."""
        result = run_bounded(
            [
                sys.executable,
                "-c",
                "import sys; print('out'); print('err', file=sys.stderr); sys.exit(3)",
            ],
            timeout=30,
        )

        assert result.returncode == 3
        assert result.timed_out is False
        assert set(result.output_tail) == {"out", "err"}

    def test_success(self) -> None:
        """A clean exit is a success."""
        result = run_bounded([sys.executable, "-c", "pass"], timeout=30)

        assert result.success is True
        assert result.returncode == 0

    def test_timeout_kills_child(self) -> None:
        """A child exceeding the timeout is killed promptly."""
        started = time.monotonic()

        result = run_bounded(
            [sys.executable, "-c", "import time; print('busy', flush=True); time.sleep(60)"],
            timeout=0.5,
        )

        assert result.timed_out is True
        assert result.returncode is None
        assert result.success is False
        assert time.monotonic() - started < 30

    def test_missing_executable(self) -> None:
        """A missing executable raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            run_bounded(["definitely-not-a-real-command-xyz"], timeout=5)

    def test_tail_lines_limit(self) -> None:
        """Only the last lines are kept."""
        result = run_bounded(
            [sys.executable, "-c", "for i in range(50): print(i)"],
            timeout=30,
            tail_lines=3,
        )

        assert result.output_tail == ("47", "48", "49")


class TestTail:
    """Tests for tail function."""

    def test_keeps_last_lines(self) -> None:
        """tail keeps the last N lines in order."""
        assert tail("a\nb\nc\nd\n", 2) == ("c", "d")

    def test_skips_blank_lines(self) -> None:
        """Blank lines and trailing whitespace are dropped."""
        assert tail("a  \n\n   \nb\r\n", 5) == ("a", "b")

    def test_zero_lines(self) -> None:
        """A zero limit yields nothing."""
        assert tail("a\nb", 0) == ()


class TestBoundedResult:
    """Tests for BoundedResult."""

    def test_timed_out_is_not_success(self) -> None:
        """A timeout is never a success even with exit code 0."""
        assert BoundedResult(returncode=0, timed_out=True).success is False


class TestCommandExists:
    """Tests for command_exists function."""

    @patch("wingetctl.utils.shell.shutil.which", return_value="/usr/bin/winget")
    def test_found(self, mock_which: MagicMock) -> None:
        """command_exists is True when which finds the command."""
        assert command_exists("winget") is True

    @patch("wingetctl.utils.shell.shutil.which", return_value=None)
    def test_missing(self, mock_which: MagicMock) -> None:
        """command_exists is False when which finds nothing."""
        assert command_exists("winget") is False


class TestRunBoundedInterrupt:
    """Tests for child cleanup when waiting is interrupted."""

    def test_interrupt_kills_and_reaps_child(self) -> None:
        """Ctrl+C while waiting kills the child before propagating."""
        real_popen = subprocess.Popen
        spawned: list[subprocess.Popen[str]] = []

        def spawn(*args: object, **kwargs: object) -> subprocess.Popen[str]:
            process = real_popen(*args, **kwargs)  # type: ignore[call-overload]
            spawned.append(process)
            return process

        with (
            patch("wingetctl.utils.shell.subprocess.Popen", side_effect=spawn),
            patch.object(real_popen, "communicate", side_effect=KeyboardInterrupt),
        ):
            with pytest.raises(KeyboardInterrupt):
                run_bounded([sys.executable, "-c", "import time; time.sleep(60)"], timeout=30)

        process = spawned[0]
        assert process.returncode is not None
        assert process.poll() is not None
        if process.stdout is not None:
            process.stdout.close()

    def test_interrupt_with_mocked_process(self) -> None:
        """kill() and wait() are called when the child is still running."""
        process = MagicMock()
        process.communicate.side_effect = KeyboardInterrupt
        process.poll.return_value = None

        with patch("wingetctl.utils.shell.subprocess.Popen", return_value=process):
            with pytest.raises(KeyboardInterrupt):
                run_bounded(["winget", "install"], timeout=30)

        process.kill.assert_called_once()
        process.wait.assert_called_once()
