"""Cleanup run configuration.

Loaded from an optional JSON file; CLI options override file values.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, field_validator

from isa_cleanup.core.serialize import import_dict
from isa_cleanup.core.status import ConfigError

LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


class CleanupConfig(BaseModel):
    """Which transforms run and how failures and logs are handled."""

    model_config = {"frozen": True, "extra": "forbid"}

    only: list[str] = Field(default_factory=list)
    skip: list[str] = Field(default_factory=list)
    fail_fast: bool = False
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level {value!r}; expected one of {LOG_LEVELS}")
        return level


def load_config(path: str | Path) -> CleanupConfig:
    """Read a CleanupConfig from a JSON file."""
    path = Path(path)
    try:
        data = import_dict(path)
    except (OSError, ValueError) as e:
        raise ConfigError(f"Cannot read config {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Config {path} must contain a JSON object")
    try:
        return CleanupConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config {path}:\n{e}") from e


def merge_cli_overrides(
    config: CleanupConfig,
    only: list[str] | None = None,
    skip: list[str] | None = None,
    fail_fast: bool | None = None,
    log_level: str | None = None,
) -> CleanupConfig:
    """Return ``config`` with every non-empty CLI value replacing the file value."""
    data = config.model_dump()
    if only:
        data["only"] = list(only)
    if skip:
        data["skip"] = list(skip)
    if fail_fast is not None:
        data["fail_fast"] = fail_fast
    if log_level is not None:
        data["log_level"] = log_level
    try:
        return CleanupConfig(**data)
    except ValidationError as e:
        raise ConfigError(str(e)) from e
