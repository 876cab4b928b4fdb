"""
Test Configuration and Fixtures
=============================

This module provides pytest fixtures and utilities for testing codesync.
"""

import asyncio
from pathlib import Path

import pytest

from codesync.core.errors import InstallError, UninstallError


class FakeExtensionManager:
    """In-memory stand-in for ExtensionManager that records every call."""

    def __init__(self, installed=(), failing=(), delay: float = 0.0):
        self.installed = set(installed)
        self.failing = set(failing)
        self.delay = delay
        self.calls: list[tuple[str, str]] = []

    def list_installed(self) -> frozenset[str]:
        return frozenset(self.installed)

    async def install(self, extension: str) -> None:
        self.calls.append(("install-start", extension))
        await asyncio.sleep(self.delay)
        self.calls.append(("install", extension))
        if extension in self.failing:
            raise InstallError(extension, "simulated failure")
        self.installed.add(extension)

    async def uninstall(self, extension: str) -> None:
        self.calls.append(("uninstall-start", extension))
        await asyncio.sleep(self.delay)
        self.calls.append(("uninstall", extension))
        if extension in self.failing:
            raise UninstallError(extension, "simulated failure")
        self.installed.discard(extension)

    def called(self, action: str) -> list[str]:
        return [extension for name, extension in self.calls if name == action]


@pytest.fixture
def fake_manager() -> FakeExtensionManager:
    return FakeExtensionManager()


@pytest.fixture
def snapshot_dir(tmp_path: Path) -> Path:
    """Empty snapshot directory."""
    path = tmp_path / "snapshot"
    path.mkdir()
    return path


@pytest.fixture
def user_dir(tmp_path: Path) -> Path:
    """Editor User directory with live settings and key bindings."""
    path = tmp_path / "Code" / "User"
    path.mkdir(parents=True)
    (path / "settings.json").write_text('{"editor.fontSize": 14}')
    (path / "keybindings.json").write_text('[{"key": "ctrl+k"}]')
    return path


@pytest.fixture
def codesync_env(monkeypatch, snapshot_dir: Path, user_dir: Path) -> dict[str, Path]:
    """Point codesync at temporary directories and clear inherited settings."""
    for variable in (
        "CODESYNC_EDITOR",
        "CODESYNC_EXTENSION_TIMEOUT",
        "CODESYNC_MAX_PARALLEL",
        "CODESYNC_STRICT",
    ):
        monkeypatch.delenv(variable, raising=False)
    monkeypatch.setenv("CODESYNC_SNAPSHOT_DIR", str(snapshot_dir))
    monkeypatch.setenv("CODESYNC_USER_DIR", str(user_dir))
    monkeypatch.chdir(snapshot_dir.parent)
    return {"snapshot_dir": snapshot_dir, "user_dir": user_dir}


@pytest.fixture
def make_manager():
    """Factory for FakeExtensionManager instances."""
    return FakeExtensionManager
