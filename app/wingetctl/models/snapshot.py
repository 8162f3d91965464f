"""System snapshot model.

The snapshot holds the raw text of the two bulk package-manager queries
captured once per run. Membership tests match package identifiers as
whole tokens so that ``Foo.Bar`` never matches an installed ``Foo.BarBaz``.
"""

import re
from dataclasses import dataclass, field
from datetime import UTC, datetime

# Characters that may appear inside a package identifier. A match must not
# be directly preceded or followed by one of them.
_ID_CHARS = r"\w.\-+"


def contains_identifier(text: str, package_id: str) -> bool:
    """Check whether a package identifier appears as a whole token in text.

    Matching is case-insensitive because catalog identifiers are.

    Args:
        text: Raw package-manager output.
        package_id: Identifier to look for.

    Returns:
        True if the identifier appears bounded by non-identifier characters.
    """
    if not text or not package_id:
        return False
    pattern = rf"(?<![{_ID_CHARS}]){re.escape(package_id)}(?![{_ID_CHARS}])"
    return re.search(pattern, text, flags=re.IGNORECASE) is not None


@dataclass(frozen=True, slots=True)
class SystemSnapshot:
    """State of the machine captured before any mutation.

    Attributes:
        installed_text: Output of the list-installed query ("" if it failed).
        upgradable_text: Output of the list-upgradable query ("" if it failed).
        captured_at: ISO format UTC timestamp of the capture.
    """

    installed_text: str
    upgradable_text: str
    captured_at: str = field(default_factory=lambda: datetime.now(UTC).isoformat())

    def is_installed(self, package_id: str) -> bool:
        """Check if a package is listed as installed."""
        return contains_identifier(self.installed_text, package_id)

    def is_upgradable(self, package_id: str) -> bool:
        """Check if a package is listed as having an upgrade available."""
        return contains_identifier(self.upgradable_text, package_id)

    @property
    def is_empty(self) -> bool:
        """Check if neither query produced any output."""
        return not self.installed_text.strip() and not self.upgradable_text.strip()
