"""wingetctl - Declarative package reconciliation for winget."""

__version__ = "0.1.0"
