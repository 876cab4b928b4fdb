"""
Extension Reconciliation
========================

Computes the changes needed to make the live extension set match a saved snapshot.
"""

from collections.abc import Iterable
from typing import NamedTuple

from codesync.core.errors import MissingSnapshot

ExtensionSet = frozenset[str]


class ReconciliationPlan(NamedTuple):
    """Extensions to install and to uninstall."""

    install: ExtensionSet
    uninstall: ExtensionSet

    @property
    def is_empty(self) -> bool:
        """True when nothing needs to change."""
        return not self.install and not self.uninstall

    @property
    def install_order(self) -> list[str]:
        return sorted(self.install)

    @property
    def uninstall_order(self) -> list[str]:
        return sorted(self.uninstall)


def reconcile(live: Iterable[str], saved: Iterable[str]) -> ReconciliationPlan:
    """Split the symmetric difference of two extension sets into a plan.

    Args:
        live: Extensions currently installed
        saved: Extensions recorded in the snapshot

    Returns:
        ReconciliationPlan: install = saved - live, uninstall = live - saved
    """
    live_set = frozenset(live)
    saved_set = frozenset(saved)
    return ReconciliationPlan(
        install=saved_set - live_set,
        uninstall=live_set - saved_set,
    )


def plan_reconciliation(live: Iterable[str], saved: Iterable[str]) -> ReconciliationPlan:
    """Reconcile after rejecting an empty snapshot.

    Raises:
        MissingSnapshot: If the saved set has no entries
    """
    saved_set = frozenset(saved)
    if not saved_set:
        raise MissingSnapshot("`extensions` file is empty")
    return reconcile(live, saved_set)
