"""
codesync - Editor settings, key bindings and extensions synchronization
"""

from codesync.cli import cli
from codesync.core import ReconciliationExecutor, ReconciliationPlan, reconcile

__version__ = "0.1.0"
__all__ = [
    "cli",
    "ReconciliationExecutor",
    "ReconciliationPlan",
    "reconcile",
]
