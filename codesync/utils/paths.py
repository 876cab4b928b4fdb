import os
import sys
from enum import Enum
from pathlib import Path
from typing import NamedTuple

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

from codesync.environment import SyncSettings


class EditorMetadata(NamedTuple):
    """Metadata for an editor flavour."""
    name: str
    product_dir: str
    cli: str


class Editor(Enum):
    """Editor flavour with associated metadata."""

    code = EditorMetadata(name="code", product_dir="Code", cli="code")
    insiders = EditorMetadata(name="insiders", product_dir="Code - Insiders", cli="code-insiders")
    codium = EditorMetadata(name="codium", product_dir="VSCodium", cli="codium")
    cursor = EditorMetadata(name="cursor", product_dir="Cursor", cli="cursor")

    @property
    def metadata(self) -> EditorMetadata:
        """Get the metadata for this editor."""
        return self.value

    @property
    def product_dir(self) -> str:
        """Name of the editor's directory under the platform config root."""
        return self.metadata.product_dir

    @property
    def cli(self) -> str:
        """Command used to manage the editor's extensions."""
        return self.metadata.cli


def config_root(platform: str | None = None, home: Path | None = None, environ: dict[str, str] | None = None) -> Path:
    """Get the per-user application config root for a platform.

    Windows uses %APPDATA%, macOS ~/Library/Application Support, anything else
    $XDG_CONFIG_HOME falling back to ~/.config.
    """
    platform = platform or sys.platform
    home = home or Path.home()
    environ = os.environ if environ is None else environ

    if platform == "win32":
        appdata = environ.get("APPDATA")
        return Path(appdata) if appdata else home / "AppData" / "Roaming"
    if platform == "darwin":
        return home / "Library" / "Application Support"
    xdg = environ.get("XDG_CONFIG_HOME")
    return Path(xdg) if xdg else home / ".config"


def editor_user_dir(editor: Editor, platform: str | None = None, home: Path | None = None,
                    environ: dict[str, str] | None = None) -> Path:
    """Get the editor's User directory holding settings.json and keybindings.json."""
    return config_root(platform, home, environ) / editor.product_dir / "User"


class SyncPaths(BaseModel):
    """Resolves the live and snapshot locations for one run."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    editor: Editor = Editor.code
    snapshot_dir: Path = Field(default_factory=lambda: Path.cwd())
    user_dir: Path = Field(default_factory=lambda: editor_user_dir(Editor.code))

    @classmethod
    def from_settings(cls, settings: SyncSettings) -> "SyncPaths":
        """Build paths from validated settings."""
        editor = Editor[settings.editor]
        user_dir = settings.user_dir or editor_user_dir(editor)
        logger.debug(f"Editor {editor.name}: user dir {user_dir}, snapshot dir {settings.snapshot_dir}")
        return cls(editor=editor, snapshot_dir=settings.snapshot_dir, user_dir=user_dir)

    def get_user_dir(self) -> Path:
        """Get the editor's User directory."""
        return self.user_dir

    def get_snapshot_dir(self) -> Path:
        """Get the snapshot directory path."""
        return self.snapshot_dir
