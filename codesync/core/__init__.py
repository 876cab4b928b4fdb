"""
Core reconciliation logic for codesync.
"""

from codesync.core.errors import (
    ConfigFileError,
    ConfigFileMissing,
    ExtensionOperationError,
    InstallError,
    MissingSnapshot,
    SyncError,
    ToolUnavailable,
    UninstallError,
)
from codesync.core.executor import ExecutionReport, Outcome, ReconciliationExecutor
from codesync.core.reconciler import ReconciliationPlan, plan_reconciliation, reconcile

__all__ = [
    "ConfigFileError",
    "ConfigFileMissing",
    "ExecutionReport",
    "ExtensionOperationError",
    "InstallError",
    "MissingSnapshot",
    "Outcome",
    "ReconciliationExecutor",
    "ReconciliationPlan",
    "SyncError",
    "ToolUnavailable",
    "UninstallError",
    "plan_reconciliation",
    "reconcile",
]
