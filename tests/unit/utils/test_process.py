"""Unit tests for process lookup and termination."""

import subprocess
from unittest.mock import patch

import pytest
from wingetctl.utils.process import ProcessController
from wingetctl.utils.shell import CommandResult


def _result(returncode: int = 0, stdout: str = "") -> CommandResult:
    """Create a test CommandResult."""
    return CommandResult(stdout=stdout, stderr="", returncode=returncode)


class TestImageName:
    """Tests for image name normalization."""

    def test_windows_appends_exe(self) -> None:
        """Bare names get '.exe' on Windows."""
        assert ProcessController(windows=True).image_name("firefox") == "firefox.exe"

    def test_windows_keeps_extension(self) -> None:
        """Names with an extension are unchanged."""
        assert ProcessController(windows=True).image_name("Code.exe") == "Code.exe"

    def test_posix_unchanged(self) -> None:
        """POSIX names are used as-is."""
        assert ProcessController(windows=False).image_name("firefox") == "firefox"


class TestWindowsController:
    """Tests for the tasklist/taskkill backend."""

    @pytest.fixture
    def controller(self) -> ProcessController:
        """Create a Windows ProcessController."""
        return ProcessController(windows=True)

    def test_is_running_found(self, controller: ProcessController) -> None:
        """A tasklist row with the image name means running."""
        with patch("wingetctl.utils.process.run_command") as mock_run:
            mock_run.return_value = _result(stdout="firefox.exe   1234 Console  1  300,000 K")

            assert controller.is_running("firefox") is True

        args = mock_run.call_args[0][0]
        assert args == ["tasklist", "/FI", "IMAGENAME eq firefox.exe", "/NH"]

    def test_is_running_not_found(self, controller: ProcessController) -> None:
        """tasklist's INFO line means not running."""
        with patch("wingetctl.utils.process.run_command") as mock_run:
            mock_run.return_value = _result(
                stdout="INFO: No tasks are running which match the specified criteria."
            )

            assert controller.is_running("firefox") is False

    def test_terminate(self, controller: ProcessController) -> None:
        """terminate force-kills by image name."""
        with patch("wingetctl.utils.process.run_command") as mock_run:
            mock_run.return_value = _result()

            assert controller.terminate("firefox") is True

        assert mock_run.call_args[0][0] == ["taskkill", "/F", "/IM", "firefox.exe"]


class TestPosixController:
    """Tests for the pgrep/pkill backend."""

    @pytest.fixture
    def controller(self) -> ProcessController:
        """Create a POSIX ProcessController."""
        return ProcessController(windows=False)

    def test_is_running_uses_exit_code(self, controller: ProcessController) -> None:
        """pgrep exit code 0 means running, 1 means not."""
        with patch("wingetctl.utils.process.run_command") as mock_run:
            mock_run.return_value = _result(returncode=0, stdout="1234\n")
            assert controller.is_running("firefox") is True

            mock_run.return_value = _result(returncode=1)
            assert controller.is_running("firefox") is False

        assert mock_run.call_args[0][0] == ["pgrep", "-x", "firefox"]

    def test_terminate(self, controller: ProcessController) -> None:
        """terminate sends SIGKILL by exact name."""
        with patch("wingetctl.utils.process.run_command") as mock_run:
            mock_run.return_value = _result()

            assert controller.terminate("firefox") is True

        assert mock_run.call_args[0][0] == ["pkill", "-KILL", "-x", "firefox"]

    def test_terminate_failure_checks_again(self, controller: ProcessController) -> None:
        """A failed kill is a success if the process is gone anyway."""
        with patch("wingetctl.utils.process.run_command") as mock_run:
            mock_run.side_effect = [_result(returncode=1), _result(returncode=1)]

            assert controller.terminate("firefox") is True

        assert mock_run.call_count == 2

    def test_terminate_failure_still_running(self, controller: ProcessController) -> None:
        """A failed kill with the process still present is a failure."""
        with patch("wingetctl.utils.process.run_command") as mock_run:
            mock_run.side_effect = [_result(returncode=1), _result(returncode=0)]

            assert controller.terminate("firefox") is False

    @pytest.mark.parametrize(
        "error",
        [FileNotFoundError("pgrep"), subprocess.TimeoutExpired(cmd="pgrep", timeout=15)],
    )
    def test_tool_errors_are_not_fatal(
        self, controller: ProcessController, error: Exception
    ) -> None:
        """Lookup and kill tool failures return False instead of raising."""
        with patch("wingetctl.utils.process.run_command", side_effect=error):
            assert controller.is_running("firefox") is False
            assert controller.terminate("firefox") is False
