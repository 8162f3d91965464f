"""Package list parsing.

The package list is a line-oriented UTF-8 text file::

    # comment
    Vendor.App
    Vendor.App=ProcessName
    Vendor.App=ProcessName|--custom --install --args

Blank lines and lines starting with '#' are ignored. Lines that do not
match the grammar are skipped with a warning instead of aborting the run.
Parsing is purely structural: argument quoting is handled by the executor.
"""

import logging
import re
from collections.abc import Iterable
from pathlib import Path

from wingetctl.models.package import PackageSpec

logger = logging.getLogger(__name__)

# Characters that can never be part of a package identifier
_INVALID_ID = re.compile(r"[\s|=]")


class PackageListError(Exception):
    """Base exception for package list errors."""


class PackageListNotFoundError(PackageListError):
    """Raised when the package list file does not exist."""


class MalformedLineError(PackageListError):
    """Raised when a single line does not match the package list grammar."""


def _optional(value: str | None) -> str | None:
    """Trim a value, normalizing empty strings to None."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def parse_line(line: str, line_number: int | None = None) -> PackageSpec | None:
    """Parse a single package list line.

    Args:
        line: Raw line without trailing newline.
        line_number: Line number used for diagnostics.

    Returns:
        PackageSpec for a package line, None for blank and comment lines.

    Raises:
        MalformedLineError: If the line has no valid package identifier.
    """
    stripped = line.strip()
    if not stripped or stripped.startswith("#"):
        return None

    package_id, sep, rhs = stripped.partition("=")
    package_id = package_id.strip()

    if not package_id:
        raise MalformedLineError("missing package id before '='")
    if _INVALID_ID.search(package_id):
        raise MalformedLineError(f"invalid package id {package_id!r}")

    process_name: str | None = None
    arguments: str | None = None
    if sep:
        process_part, _, args_part = rhs.partition("|")
        process_name = _optional(process_part)
        arguments = _optional(args_part)

    return PackageSpec(
        id=package_id,
        conflicting_process=process_name,
        install_arguments=arguments,
        line_number=line_number,
    )


def parse_lines(lines: Iterable[str], source: str = "<input>") -> list[PackageSpec]:
    """Parse package list lines, preserving their order.

    Malformed lines are logged and skipped.

    Args:
        lines: Lines of the package list.
        source: Name of the input used in warnings.

    Returns:
        List of PackageSpec in input order. Duplicates are kept.
    """
    specs: list[PackageSpec] = []

    for line_number, line in enumerate(lines, start=1):
        try:
            spec = parse_line(line.rstrip("\r\n"), line_number)
        except MalformedLineError as e:
            logger.warning("Skipping malformed line %s:%d: %s", source, line_number, e)
            continue
        if spec is not None:
            specs.append(spec)

    return specs


def load_packages(path: Path) -> list[PackageSpec]:
    """Load and parse a package list file.

    Args:
        path: Path to the package list.

    Returns:
        List of PackageSpec in file order.

    Raises:
        PackageListNotFoundError: If the file doesn't exist.
        PackageListError: If the file cannot be read.
    """
    if not path.is_file():
        raise PackageListNotFoundError(f"Package list not found: {path}")

    try:
        # utf-8-sig drops the BOM that Windows editors like to add
        text = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise PackageListError(f"Failed to read package list {path}: {e}") from e

    specs = parse_lines(text.splitlines(), source=str(path))
    logger.debug("Loaded %d package(s) from %s", len(specs), path)
    return specs


PACKAGE_LIST_TEMPLATE = """\
# wingetctl package list
#
# One package per line, using the exact winget package id:
#
#   Vendor.App                      install or upgrade silently
#   Vendor.App=ProcessName          stop ProcessName before install/upgrade
#   Vendor.App=ProcessName|ARGS     pass ARGS to the installer instead of --silent
#   Vendor.App=|ARGS                custom ARGS without a process to stop
#
# Single quotes in ARGS are turned into double quotes, so paths with
# spaces can be written as: /DIR='C:\\Program Files\\App'
"""
