"""Environment configuration management."""

import os
from pathlib import Path
from typing import Any, Optional

from dotenv import find_dotenv, load_dotenv
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


class ConfigError(Exception):
    """Base exception for configuration errors."""

    pass


EDITOR_CHOICES = ("code", "insiders", "codium", "cursor")

TRUE_VALUES = ("true", "1", "yes")


def parse_bool(value: str | None) -> bool:
    """
    Interpret an environment flag.

    Args:
        value: Raw variable value, possibly None

    Returns:
        True for "true", "1" or "yes" (any case), False otherwise
    """
    return (value or "").strip().lower() in TRUE_VALUES


class SyncSettings(BaseModel):
    """Runtime settings for a codesync invocation."""

    model_config = ConfigDict(frozen=True)

    editor: str = Field("code", description="Editor flavour whose configuration is synchronized")
    snapshot_dir: Path = Field(default_factory=Path.cwd, description="Directory holding snapshot files")
    user_dir: Optional[Path] = Field(None, description="Override for the editor's User directory")
    extension_timeout: float = Field(300.0, gt=0, description="Seconds allowed per install/uninstall call")
    max_parallel: int = Field(4, ge=1, description="Concurrent extension operations per phase")
    strict: bool = Field(False, description="Exit non-zero when any extension operation failed")

    @field_validator("editor")
    @classmethod
    def validate_editor(cls, value: str) -> str:
        value = value.strip().lower()
        if value not in EDITOR_CHOICES:
            raise ValueError(f"must be one of {', '.join(EDITOR_CHOICES)}")
        return value


ENV_FIELDS = {
    "CODESYNC_EDITOR": "editor",
    "CODESYNC_SNAPSHOT_DIR": "snapshot_dir",
    "CODESYNC_USER_DIR": "user_dir",
    "CODESYNC_EXTENSION_TIMEOUT": "extension_timeout",
    "CODESYNC_MAX_PARALLEL": "max_parallel",
}


def load_settings(environ: dict[str, str] | None = None) -> SyncSettings:
    """
    Build settings from the environment, reading a local .env first.

    Args:
        environ: Mapping to read instead of os.environ

    Returns:
        Validated SyncSettings

    Raises:
        ConfigError: If any variable holds an invalid value
    """
    if environ is None:
        load_dotenv(find_dotenv(usecwd=True))
        environ = dict(os.environ)

    values: dict[str, Any] = {}
    for variable, field_name in ENV_FIELDS.items():
        raw = environ.get(variable)
        if raw:
            values[field_name] = raw
    values["strict"] = parse_bool(environ.get("CODESYNC_STRICT"))

    try:
        settings = SyncSettings(**values)
    except ValidationError as e:
        problems = "; ".join(
            f"{error['loc'][0]}: {error['msg']}" for error in e.errors()
        )
        raise ConfigError(f"Invalid configuration: {problems}") from e

    logger.debug(f"Loaded settings: {settings.model_dump()}")
    return settings
