"""Unit tests for conflicting process resolution."""

import logging
from unittest.mock import MagicMock

import pytest
from wingetctl.core.conflicts import ConflictResolution, ConflictResolver, derive_process_name
from wingetctl.models.package import PackageSpec
from wingetctl.utils.process import ProcessController


@pytest.fixture
def controller() -> MagicMock:
    """ProcessController double with nothing running."""
    mock = MagicMock(spec=ProcessController)
    mock.is_running.return_value = False
    mock.terminate.return_value = True
    return mock


@pytest.fixture
def sleep() -> MagicMock:
    """Sleep double so tests never wait."""
    return MagicMock()


class TestDeriveProcessName:
    """Tests for derive_process_name heuristic."""

    @pytest.mark.parametrize(
        ("package_id", "expected"),
        [
            ("Vendor.AppName", "AppName"),
            ("Microsoft.VisualStudioCode", "VisualStudioCode"),
            ("A.B.C", "C"),
            ("NoSeparator", None),
            ("Trailing.", None),
        ],
    )
    def test_derive(self, package_id: str, expected: str | None) -> None:
        """The segment after the last dot is used."""
        assert derive_process_name(package_id) == expected


class TestConflictResolver:
    """Tests for ConflictResolver.resolve."""

    def test_explicit_process_wins(self, controller: MagicMock, sleep: MagicMock) -> None:
        """A configured process name is used instead of the heuristic."""
        resolver = ConflictResolver(controller, sleep=sleep)

        assert resolver.target_process(PackageSpec(id="Vendor.App", conflicting_process="X")) == "X"

    def test_heuristic_used_when_unset(self, controller: MagicMock, sleep: MagicMock) -> None:
        """Without a configured name the id-derived name is checked."""
        resolver = ConflictResolver(controller, sleep=sleep)

        result = resolver.resolve(PackageSpec(id="Vendor.App"))

        assert result == ConflictResolution.NOT_RUNNING
        controller.is_running.assert_called_once_with("App")

    def test_heuristic_disabled(self, controller: MagicMock, sleep: MagicMock) -> None:
        """Disabling the heuristic makes unset specs a no-op."""
        resolver = ConflictResolver(controller, use_heuristic=False, sleep=sleep)

        result = resolver.resolve(PackageSpec(id="Vendor.App"))

        assert result == ConflictResolution.NO_PROCESS
        controller.is_running.assert_not_called()

    def test_no_resolvable_name(self, controller: MagicMock, sleep: MagicMock) -> None:
        """An id without separator and no configured name is a no-op."""
        resolver = ConflictResolver(controller, sleep=sleep)

        assert resolver.resolve(PackageSpec(id="git")) == ConflictResolution.NO_PROCESS
        controller.is_running.assert_not_called()

    def test_running_process_is_terminated(self, controller: MagicMock, sleep: MagicMock) -> None:
        """A running process is killed and the grace period waited."""
        controller.is_running.return_value = True
        resolver = ConflictResolver(controller, grace_period=1.5, sleep=sleep)

        result = resolver.resolve(PackageSpec(id="B.App", conflicting_process="BProc"))

        assert result == ConflictResolution.TERMINATED
        controller.terminate.assert_called_once_with("BProc")
        sleep.assert_called_once_with(1.5)

    def test_zero_grace_period_does_not_sleep(
        self, controller: MagicMock, sleep: MagicMock
    ) -> None:
        """A grace period of 0 skips the wait."""
        controller.is_running.return_value = True
        resolver = ConflictResolver(controller, grace_period=0, sleep=sleep)

        resolver.resolve(PackageSpec(id="B.App", conflicting_process="BProc"))

        sleep.assert_not_called()

    def test_termination_failure_is_not_fatal(
        self,
        controller: MagicMock,
        sleep: MagicMock,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """A failed termination returns a status and logs a warning."""
        controller.is_running.return_value = True
        controller.terminate.return_value = False
        resolver = ConflictResolver(controller, sleep=sleep)

        with caplog.at_level(logging.WARNING, logger="wingetctl.core.conflicts"):
            result = resolver.resolve(PackageSpec(id="B.App", conflicting_process="BProc"))

        assert result == ConflictResolution.TERMINATION_FAILED
        assert "Could not terminate BProc" in caplog.text
        sleep.assert_not_called()
