"""Utility modules for wingetctl.

This module exports commonly used utility functions.
"""

from wingetctl.utils.formatting import (
    console,
    err_console,
    print_error,
    print_info,
    print_success,
    print_warning,
)
from wingetctl.utils.process import ProcessController
from wingetctl.utils.shell import (
    BoundedResult,
    CommandResult,
    command_exists,
    run_bounded,
    run_command,
)

__all__ = [
    "BoundedResult",
    "CommandResult",
    "ProcessController",
    "command_exists",
    "console",
    "err_console",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
    "run_bounded",
    "run_command",
]
