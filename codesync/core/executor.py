"""
Reconciliation Executor
=======================

Turns a reconciliation plan into installs and uninstalls on the live machine.

The operator confirms the plan first. Installs run concurrently and all of them
settle before any uninstall starts; uninstalls then run concurrently as well.
A failing operation is logged and recorded but never stops the rest of the batch.
"""

import asyncio
from collections.abc import Callable
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict

from codesync.core.errors import ExtensionOperationError
from codesync.core.reconciler import ReconciliationPlan
from codesync.utils.rich_console import get_console, get_console_logger

AFFIRMATIVE = "y"

logger = get_console_logger()


class Outcome(str, Enum):
    """Terminal state of a reconciliation run."""

    NOOP = "noop"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class Action(str, Enum):
    INSTALL = "install"
    UNINSTALL = "uninstall"


class OperationResult(BaseModel):
    """Result of one install or uninstall attempt."""

    model_config = ConfigDict(frozen=True)

    extension: str
    action: Action
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ExecutionReport(BaseModel):
    """Outcome of a run plus every attempted operation."""

    model_config = ConfigDict(frozen=True)

    outcome: Outcome
    results: tuple[OperationResult, ...] = ()

    @property
    def failures(self) -> list[OperationResult]:
        return [result for result in self.results if not result.ok]

    def exit_code(self, strict: bool = False) -> int:
        """Process exit code for this report.

        Failed operations only change the exit code in strict mode.
        """
        if strict and self.failures:
            return 1
        return 0


def format_plan(plan: ReconciliationPlan) -> str:
    """Render the confirmation text for a plan."""
    install = plan.install_order
    uninstall = plan.uninstall_order
    parts = [
        f"📦 Extensions to install ({len(install)}):\n" + "".join(f"{ext}\n" for ext in install)
        if install
        else "📦 Nothing to install\n",
        "---\n",
        f"♻ Extensions to uninstall ({len(uninstall)}):\n" + "".join(f"{ext}\n" for ext in uninstall)
        if uninstall
        else "♻ Nothing to uninstall\n",
        "---\n",
        "🙏 Are you sure you want to continue? (y/N): ",
    ]
    return "".join(parts)


def console_ask(text: str) -> str:
    """Read one line of operator input after showing ``text``.

    Closed input counts as an empty answer.
    """
    try:
        return get_console().input(text, markup=False)
    except EOFError:
        get_console().print()
        return ""


class ReconciliationExecutor:
    """Applies a reconciliation plan through an extension manager.

    The manager must provide async ``install(extension)`` and
    ``uninstall(extension)`` methods that raise ``ExtensionOperationError``
    subclasses on failure.
    """

    def __init__(
        self,
        manager,
        ask: Callable[[str], str] | None = None,
        max_parallel: int = 4,
    ):
        if max_parallel < 1:
            raise ValueError("max_parallel must be at least 1")
        self.manager = manager
        self.ask = ask or console_ask
        self.max_parallel = max_parallel
        self.console = get_console()

    def confirm(self, plan: ReconciliationPlan) -> bool:
        """Show the plan and return the operator's decision."""
        answer = self.ask(format_plan(plan))
        return answer == AFFIRMATIVE

    async def execute(self, plan: ReconciliationPlan) -> ExecutionReport:
        """Confirm and apply a plan.

        Returns:
            ExecutionReport: NOOP for an empty plan, CANCELLED when declined,
            COMPLETED once both phases have settled
        """
        if plan.is_empty:
            self.console.print("🎉 Nothing to install and uninstall")
            return ExecutionReport(outcome=Outcome.NOOP)

        if not self.confirm(plan):
            self.console.print("Cancelled, no changes made.")
            return ExecutionReport(outcome=Outcome.CANCELLED)

        installed = await self._run_phase(Action.INSTALL, plan.install_order)
        uninstalled = await self._run_phase(Action.UNINSTALL, plan.uninstall_order)
        report = ExecutionReport(outcome=Outcome.COMPLETED, results=tuple(installed + uninstalled))

        failures = report.failures
        if failures:
            logger.warning(f"{len(failures)} of {len(report.results)} extension operations failed")
        self.console.print("✅ Success! Restart the editor to apply extensions.")
        return report

    def run(self, plan: ReconciliationPlan) -> ExecutionReport:
        """Synchronous entry point for ``execute``."""
        return asyncio.run(self.execute(plan))

    async def _run_phase(self, action: Action, extensions: list[str]) -> list[OperationResult]:
        if not extensions:
            return []

        operation = self.manager.install if action is Action.INSTALL else self.manager.uninstall
        semaphore = asyncio.Semaphore(self.max_parallel)

        async def attempt(extension: str) -> OperationResult:
            async with semaphore:
                if action is Action.INSTALL:
                    self.console.print(f"📦 Installing {extension}", markup=False)
                else:
                    self.console.print(f"♻ Uninstalling {extension}", markup=False)
                try:
                    await operation(extension)
                except ExtensionOperationError as error:
                    logger.error(f"Failed to {action.value} {extension}: {error.detail or error}")
                    return OperationResult(extension=extension, action=action, error=str(error))
            return OperationResult(extension=extension, action=action)

        async with asyncio.TaskGroup() as group:
            tasks = [group.create_task(attempt(extension)) for extension in extensions]
        return [task.result() for task in tasks]
