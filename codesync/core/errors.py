"""Exceptions raised while synchronizing editor configuration."""


class SyncError(Exception):
    """Base exception for codesync failures."""

    pass


class ToolUnavailable(SyncError):
    """The editor CLI could not be invoked or reported an error."""

    pass


class MissingSnapshot(SyncError):
    """The saved extensions file is absent or lists no extensions."""

    pass


class ConfigFileError(SyncError):
    """A settings or key bindings file could not be copied."""

    pass


class ConfigFileMissing(ConfigFileError):
    """A settings or key bindings file to copy does not exist."""

    pass


class ExtensionOperationError(SyncError):
    """A single install or uninstall invocation failed."""

    def __init__(self, extension: str, detail: str = ""):
        self.extension = extension
        self.detail = detail
        message = f"{extension}: {detail}" if detail else extension
        super().__init__(message)


class InstallError(ExtensionOperationError):
    pass


class UninstallError(ExtensionOperationError):
    pass
