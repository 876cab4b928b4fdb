"""
Snapshot Store
==============

Reads and writes the version-controlled snapshot files: settings.json,
keybindings.json and the newline-delimited extensions list. File contents are
copied as opaque blobs and never parsed.
"""

from collections.abc import Iterable
from pathlib import Path

from loguru import logger

from codesync.core.errors import ConfigFileError, ConfigFileMissing, MissingSnapshot
from codesync.utils.file import copy_file, read_lines, write_lines

CONFIG_FILES = {
    "settings": "settings.json",
    "keybindings": "keybindings.json",
}

EXTENSIONS_FILE = "extensions"


class SnapshotStore:
    """Snapshot files kept in a single directory."""

    def __init__(self, snapshot_dir: str | Path):
        self.snapshot_dir = Path(snapshot_dir)

    @property
    def extensions_file(self) -> Path:
        return self.snapshot_dir / EXTENSIONS_FILE

    def config_file(self, kind: str) -> Path:
        """Snapshot path for a config file kind ("settings" or "keybindings")."""
        try:
            return self.snapshot_dir / CONFIG_FILES[kind]
        except KeyError:
            raise ValueError(f"Unknown config file kind: {kind}") from None

    def read_saved_extensions(self) -> frozenset[str]:
        """Read the saved extension set.

        Raises:
            MissingSnapshot: If the file is absent, unreadable or lists no extensions
        """
        if not self.extensions_file.is_file():
            raise MissingSnapshot(f"`extensions` file not found: {self.extensions_file}")

        try:
            saved = frozenset(read_lines(self.extensions_file))
        except (UnicodeDecodeError, OSError) as e:
            raise MissingSnapshot(f"`extensions` file is unreadable: {e}") from e
        if not saved:
            raise MissingSnapshot("`extensions` file is empty")
        logger.debug(f"Read {len(saved)} saved extensions from {self.extensions_file}")
        return saved

    def write_extensions(self, extensions: Iterable[str]) -> Path:
        """Overwrite the extensions file with the given identifiers, sorted."""
        path = write_lines(self.extensions_file, sorted(set(extensions)))
        logger.debug(f"Wrote extensions list to {path}")
        return path

    def save_file(self, kind: str, user_dir: Path) -> Path:
        """Copy a live config file from the editor's User directory into the snapshot."""
        snapshot_path = self.config_file(kind)
        return self._copy(user_dir / snapshot_path.name, snapshot_path)

    def apply_file(self, kind: str, user_dir: Path) -> Path:
        """Copy a snapshot config file over the editor's live one."""
        snapshot_path = self.config_file(kind)
        return self._copy(snapshot_path, user_dir / snapshot_path.name)

    def _copy(self, source: Path, destination: Path) -> Path:
        try:
            copied = copy_file(source, destination)
        except FileNotFoundError as e:
            raise ConfigFileMissing(str(e)) from e
        except OSError as e:
            raise ConfigFileError(f"Unable to copy {source} to {destination}: {e}") from e
        logger.debug(f"Copied {source} -> {destination}")
        return copied
