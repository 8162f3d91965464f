"""Data models for wingetctl.

This module exports the core data structures used throughout the application.
"""

from wingetctl.models.action import ActionType, ExecutionOutcome, OutcomeStatus, PlanEntry
from wingetctl.models.history import FailureRecord, RunRecord, create_run_record
from wingetctl.models.package import PackageSpec
from wingetctl.models.snapshot import SystemSnapshot, contains_identifier

__all__ = [
    "ActionType",
    "ExecutionOutcome",
    "FailureRecord",
    "OutcomeStatus",
    "PackageSpec",
    "PlanEntry",
    "RunRecord",
    "SystemSnapshot",
    "contains_identifier",
    "create_run_record",
]
