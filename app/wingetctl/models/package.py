"""Package models for the declarative package list.

This module defines the immutable record produced for every package
line in the package list file.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class PackageSpec:
    """A package the machine should have installed and up to date.

    Attributes:
        id: Package identifier in the package manager catalog
            (e.g., 'Mozilla.Firefox').
        conflicting_process: Name of a running process to terminate before
            installing or upgrading. None disables the explicit check.
        install_arguments: Raw installer arguments that replace the default
            silent flag. None means the default silent install is used.
        line_number: Line in the package list this spec was read from.
    """

    id: str
    conflicting_process: str | None = field(default=None)
    install_arguments: str | None = field(default=None)
    line_number: int | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        """Validate package data after initialization."""
        if not self.id or self.id != self.id.strip():
            msg = f"Package id must be non-empty and trimmed, got {self.id!r}"
            raise ValueError(msg)

    @property
    def has_override(self) -> bool:
        """Check if custom installer arguments are configured."""
        return self.install_arguments is not None
