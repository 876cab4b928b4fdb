"""
Main CLI entry point for codesync.
"""

# Standard library imports
import importlib.metadata
from collections.abc import Callable

# Third-party imports
import click
import typer
from typer.core import TyperGroup

# Local imports
from codesync.core.errors import SyncError
from codesync.core.executor import ExecutionReport, Outcome, ReconciliationExecutor
from codesync.core.reconciler import plan_reconciliation
from codesync.environment import ConfigError, SyncSettings, load_settings
from codesync.extensions import ExtensionManager
from codesync.snapshot import SnapshotStore
from codesync.utils.paths import SyncPaths
from codesync.utils.rich_console import get_console, get_console_logger, print_table


console = get_console()
logger = get_console_logger()


COMMAND_ROWS = [
    ["save-settings", "Copy the editor's settings.json into the snapshot"],
    ["apply-settings", "Copy the snapshot settings.json onto the editor"],
    ["save-keybindings", "Copy the editor's keybindings.json into the snapshot"],
    ["apply-keybindings", "Copy the snapshot keybindings.json onto the editor"],
    ["save-extensions", "Write the installed extension list into the snapshot"],
    ["install-extensions", "Install and uninstall extensions to match the snapshot"],
    ["save-all", "Save settings, key bindings and extensions"],
    ["apply-all", "Apply settings, key bindings and extensions"],
    ["status", "Show paths and pending extension changes"],
    ["version", "Show codesync version"],
]


def print_unknown_command_and_exit():
    console.print("🧐 Unknown command!")
    print_table(["Command", "Description"], COMMAND_ROWS, title="Available codesync Commands")
    raise typer.Exit(0)


class UnknownCommandGroup(TyperGroup):
    """Reports unknown subcommands as a notice instead of a usage error."""

    def resolve_command(self, ctx: click.Context, args: list[str]):
        if args and self.get_command(ctx, args[0]) is None:
            print_unknown_command_and_exit()
        return super().resolve_command(ctx, args)


app = typer.Typer(
    cls=UnknownCommandGroup,
    add_completion=False,
    help="codesync - keep editor settings, key bindings and extensions in a snapshot directory.",
)


@app.callback(invoke_without_command=True)
def main(ctx: typer.Context):
    """
    codesync - editor configuration snapshots
    """
    if ctx.invoked_subcommand is None:
        print_unknown_command_and_exit()


# Collaborator factories, replaced in tests
def get_settings() -> SyncSettings:
    return load_settings()


def build_manager(paths: SyncPaths, settings: SyncSettings) -> ExtensionManager:
    return ExtensionManager(cli=paths.editor.cli, timeout=settings.extension_timeout)


def build_executor(manager: ExtensionManager, settings: SyncSettings) -> ReconciliationExecutor:
    return ReconciliationExecutor(manager, max_parallel=settings.max_parallel)


def run_steps(*steps: Callable[[SyncSettings, SyncPaths], int]) -> None:
    """Run command steps in order, mapping failures to the process exit code.

    Each step returns an exit code; the first non-zero code stops the run.
    """
    try:
        settings = get_settings()
        paths = SyncPaths.from_settings(settings)
        for step in steps:
            code = step(settings, paths)
            if code:
                raise typer.Exit(code)
    except (SyncError, ConfigError) as error:
        logger.error(str(error))
        raise typer.Exit(1)


def _save_file(kind: str, label: str) -> Callable[[SyncSettings, SyncPaths], int]:
    def step(settings: SyncSettings, paths: SyncPaths) -> int:
        console.print(f"💾 Saving {label}...")
        SnapshotStore(paths.get_snapshot_dir()).save_file(kind, paths.get_user_dir())
        logger.success("Success!")
        return 0
    return step


def _apply_file(kind: str, label: str) -> Callable[[SyncSettings, SyncPaths], int]:
    def step(settings: SyncSettings, paths: SyncPaths) -> int:
        console.print(f"🚐 Applying {label}...")
        SnapshotStore(paths.get_snapshot_dir()).apply_file(kind, paths.get_user_dir())
        logger.success("Success!")
        return 0
    return step


def _save_extensions(settings: SyncSettings, paths: SyncPaths) -> int:
    console.print("💾 Saving extensions list...")
    installed = build_manager(paths, settings).list_installed()
    SnapshotStore(paths.get_snapshot_dir()).write_extensions(installed)
    logger.success("Success!")
    return 0


def _install_extensions(settings: SyncSettings, paths: SyncPaths) -> int:
    console.print("🚚 Installing extensions...")
    console.print("---")
    manager = build_manager(paths, settings)
    live = manager.list_installed()
    saved = SnapshotStore(paths.get_snapshot_dir()).read_saved_extensions()
    plan = plan_reconciliation(live, saved)

    report: ExecutionReport = build_executor(manager, settings).run(plan)
    if report.outcome is Outcome.COMPLETED and report.failures:
        print_table(
            ["Extension", "Action", "Error"],
            [[result.extension, result.action.value, result.error] for result in report.failures],
            title="Failed Extension Operations",
        )
    return report.exit_code(strict=settings.strict)


save_settings_step = _save_file("settings", "settings")
apply_settings_step = _apply_file("settings", "settings")
save_keybindings_step = _save_file("keybindings", "key bindings")
apply_keybindings_step = _apply_file("keybindings", "key bindings")


@app.command("save-settings")
def save_settings():
    """Copy the editor's settings.json into the snapshot directory."""
    run_steps(save_settings_step)


@app.command("apply-settings")
def apply_settings():
    """Copy the snapshot settings.json over the editor's settings."""
    run_steps(apply_settings_step)


@app.command("save-keybindings")
def save_keybindings():
    """Copy the editor's keybindings.json into the snapshot directory."""
    run_steps(save_keybindings_step)


@app.command("apply-keybindings")
def apply_keybindings():
    """Copy the snapshot keybindings.json over the editor's key bindings."""
    run_steps(apply_keybindings_step)


@app.command("save-extensions")
def save_extensions():
    """Write the list of installed extensions to the snapshot `extensions` file."""
    run_steps(_save_extensions)


@app.command("install-extensions")
def install_extensions():
    """Install and uninstall extensions so the editor matches the snapshot.

    Shows the pending changes and asks for confirmation first.
    """
    run_steps(_install_extensions)


@app.command("save-all")
def save_all():
    """Save settings, key bindings and the extension list."""
    run_steps(save_settings_step, save_keybindings_step, _save_extensions)


@app.command("apply-all")
def apply_all():
    """Apply settings and key bindings, then reconcile extensions."""
    run_steps(apply_settings_step, apply_keybindings_step, _install_extensions)


def _status(settings: SyncSettings, paths: SyncPaths) -> int:
    store = SnapshotStore(paths.get_snapshot_dir())
    rows = [
        ["Editor", paths.editor.name],
        ["Editor CLI", paths.editor.cli],
        ["User directory", str(paths.get_user_dir())],
        ["Snapshot directory", str(paths.get_snapshot_dir())],
    ]
    for kind in ("settings", "keybindings"):
        snapshot_file = store.config_file(kind)
        rows.append([snapshot_file.name, "saved" if snapshot_file.is_file() else "(missing)"])

    try:
        plan = plan_reconciliation(build_manager(paths, settings).list_installed(), store.read_saved_extensions())
    except SyncError as error:
        rows.append(["Extensions", f"(unavailable: {error})"])
    else:
        rows.append(["To install", ", ".join(plan.install_order) or "(none)"])
        rows.append(["To uninstall", ", ".join(plan.uninstall_order) or "(none)"])

    print_table(["Status", "Value"], rows, title="codesync Status")
    return 0


@app.command()
def status():
    """Show paths, snapshot files and pending extension changes."""
    run_steps(_status)


@app.command()
def version():
    """Show the codesync version."""
    typer.echo(f"codesync version: {importlib.metadata.version('codesync')}")
