"""Tests for the editor CLI extension manager."""

import asyncio
import subprocess
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from codesync.core.errors import InstallError, ToolUnavailable, UninstallError
from codesync.extensions import ExtensionManager


@pytest.fixture
def manager():
    return ExtensionManager(cli="code", timeout=5)


@pytest.fixture
def which():
    with patch("codesync.extensions.shutil.which", return_value="/usr/bin/code") as mock:
        yield mock


def completed(stdout="", stderr="", returncode=0):
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


def fake_process(returncode=0, stderr=b""):
    process = MagicMock()
    process.returncode = returncode
    process.communicate = AsyncMock(return_value=(b"", stderr))
    process.wait = AsyncMock(return_value=returncode)
    return process


class TestListInstalled:
    def test_parses_lines(self, manager, which):
        output = "ms-python.python\n\nesbenp.prettier-vscode\nms-python.python\n"
        with patch("codesync.extensions.subprocess.run", return_value=completed(stdout=output)) as run:
            installed = manager.list_installed()

        assert installed == {"ms-python.python", "esbenp.prettier-vscode"}
        assert run.call_args.args[0] == ["/usr/bin/code", "--list-extensions"]

    def test_stderr_output_is_fatal(self, manager, which):
        with patch("codesync.extensions.subprocess.run", return_value=completed(stdout="a\n", stderr="boom")):
            with pytest.raises(ToolUnavailable, match="boom"):
                manager.list_installed()

    def test_nonzero_exit_is_fatal(self, manager, which):
        with patch("codesync.extensions.subprocess.run", return_value=completed(returncode=3)):
            with pytest.raises(ToolUnavailable):
                manager.list_installed()

    def test_missing_cli(self, manager):
        with patch("codesync.extensions.shutil.which", return_value=None):
            with pytest.raises(ToolUnavailable, match="not found"):
                manager.list_installed()

    def test_os_error(self, manager, which):
        with patch("codesync.extensions.subprocess.run", side_effect=PermissionError("denied")):
            with pytest.raises(ToolUnavailable):
                manager.list_installed()


class TestInstallUninstall:
    @pytest.mark.asyncio
    async def test_install_success(self, manager, which):
        with patch("codesync.extensions.asyncio.create_subprocess_exec",
                   AsyncMock(return_value=fake_process())) as spawn:
            await manager.install("ms-python.python")

        assert spawn.call_args.args == ("/usr/bin/code", "--install-extension", "ms-python.python")

    @pytest.mark.asyncio
    async def test_install_failure(self, manager, which):
        process = fake_process(returncode=1, stderr=b"Extension not found")
        with patch("codesync.extensions.asyncio.create_subprocess_exec", AsyncMock(return_value=process)):
            with pytest.raises(InstallError) as excinfo:
                await manager.install("bad.ext")

        assert excinfo.value.extension == "bad.ext"
        assert excinfo.value.detail == "Extension not found"

    @pytest.mark.asyncio
    async def test_uninstall_failure_without_stderr(self, manager, which):
        process = fake_process(returncode=2)
        with patch("codesync.extensions.asyncio.create_subprocess_exec", AsyncMock(return_value=process)):
            with pytest.raises(UninstallError, match="exited with 2"):
                await manager.uninstall("some.ext")

    @pytest.mark.asyncio
    async def test_uninstall_uses_flag(self, manager, which):
        with patch("codesync.extensions.asyncio.create_subprocess_exec",
                   AsyncMock(return_value=fake_process())) as spawn:
            await manager.uninstall("some.ext")

        assert spawn.call_args.args[1] == "--uninstall-extension"

    @pytest.mark.asyncio
    async def test_timeout_kills_process(self, which):
        manager = ExtensionManager(cli="code", timeout=0.01)
        process = fake_process()

        async def hang():
            await asyncio.sleep(1)

        process.communicate = AsyncMock(side_effect=hang)
        with patch("codesync.extensions.asyncio.create_subprocess_exec", AsyncMock(return_value=process)):
            with pytest.raises(InstallError, match="timed out"):
                await manager.install("slow.ext")

        process.kill.assert_called_once()

    @pytest.mark.asyncio
    async def test_missing_cli_is_operation_error(self, manager):
        with patch("codesync.extensions.shutil.which", return_value=None):
            with pytest.raises(InstallError):
                await manager.install("a.b")
