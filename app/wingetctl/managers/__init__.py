"""Package manager backends.

This module exports the package manager interface and its winget
implementation.
"""

from wingetctl.managers.base import PackageManager
from wingetctl.managers.winget import WingetManager

__all__ = ["PackageManager", "WingetManager"]
