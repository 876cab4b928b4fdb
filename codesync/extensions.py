"""
Extension Management
====================

Lists, installs and uninstalls editor extensions through the editor's command
line interface (``code --list-extensions`` and friends).
"""

import asyncio
import shutil
import subprocess

from loguru import logger

from codesync.core.errors import InstallError, ToolUnavailable, UninstallError
from codesync.utils.logging import atimeit, timeit

LIST_TIMEOUT = 60.0


class ExtensionManager:
    """Drives an editor CLI to inspect and change installed extensions."""

    def __init__(self, cli: str = "code", timeout: float = 300.0):
        """Initialize the manager.

        Args:
            cli: Editor command, resolved on PATH
            timeout: Seconds allowed for each install or uninstall call
        """
        self.cli = cli
        self.timeout = timeout

    def _executable(self) -> str:
        executable = shutil.which(self.cli)
        if executable is None:
            raise ToolUnavailable(f"Unable to get extensions: `{self.cli}` was not found on PATH")
        return executable

    @timeit
    def list_installed(self) -> frozenset[str]:
        """Get the set of installed extension identifiers.

        Raises:
            ToolUnavailable: If the CLI cannot be run, fails, or writes to stderr
        """
        command = [self._executable(), "--list-extensions"]
        logger.debug(f"Running: {' '.join(command)}")
        try:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                timeout=LIST_TIMEOUT,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            raise ToolUnavailable(f"Unable to get extensions: {e}") from e

        stderr = result.stderr.strip()
        if stderr:
            raise ToolUnavailable(f"Unable to get extensions. stderr: {stderr}")
        if result.returncode != 0:
            raise ToolUnavailable(f"Unable to get extensions: `{self.cli}` exited with {result.returncode}")

        installed = frozenset(line.strip() for line in result.stdout.splitlines() if line.strip())
        logger.debug(f"Found {len(installed)} installed extensions")
        return installed

    async def install(self, extension: str) -> None:
        """Install one extension.

        Raises:
            InstallError: If the CLI fails, times out or cannot be started
        """
        await self._run_extension_command("--install-extension", extension, InstallError)

    async def uninstall(self, extension: str) -> None:
        """Uninstall one extension.

        Raises:
            UninstallError: If the CLI fails, times out or cannot be started
        """
        await self._run_extension_command("--uninstall-extension", extension, UninstallError)

    @atimeit
    async def _run_extension_command(self, flag: str, extension: str, error_type: type) -> None:
        try:
            executable = self._executable()
        except ToolUnavailable as e:
            raise error_type(extension, str(e)) from e

        logger.debug(f"Running: {self.cli} {flag} {extension}")
        try:
            process = await asyncio.create_subprocess_exec(
                executable,
                flag,
                extension,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise error_type(extension, str(e)) from e

        try:
            _, stderr = await asyncio.wait_for(process.communicate(), timeout=self.timeout)
        except asyncio.TimeoutError:
            process.kill()
            await process.wait()
            raise error_type(extension, f"timed out after {self.timeout:g}s") from None

        if process.returncode != 0:
            detail = stderr.decode(errors="replace").strip() or f"exited with {process.returncode}"
            raise error_type(extension, detail)
