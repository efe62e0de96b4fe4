import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "REHUNK_CONFIG"

# Environment variable -> config field
ENV_FIELDS = {
    "REHUNK_AUTO_RECALCULATE": "auto_recalculate",
    "REHUNK_WRITE_UNCHANGED": "write_unchanged",
    "REHUNK_EDITOR": "editor",
    "REHUNK_LOG_LEVEL": "log_level",
}
BOOL_FIELDS = {"auto_recalculate", "write_unchanged"}

# git add -p names its edit buffer addp-hunk-edit.diff (C) or
# ADDP_HUNK_EDIT.diff (older Perl implementation).
DEFAULT_HUNK_EDIT_PATTERNS = ["*addp-hunk-edit.diff", "*ADDP_HUNK_EDIT.diff"]


class ConfigError(Exception):
    pass


class RehunkConfig(BaseModel):
    model_config = ConfigDict(
        extra="forbid",
    )

    auto_recalculate: bool = True
    write_unchanged: bool = False
    editor: str | None = None
    log_level: str = "WARNING"
    hunk_edit_patterns: list[str] = Field(
        default_factory=lambda: list(DEFAULT_HUNK_EDIT_PATTERNS)
    )

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level: {value}")
        return level


def _env_truthy(value: str) -> bool:
    return value.lower() in ("1", "true", "yes", "on")


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge override into a copy of base; override wins key by key."""
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def read_config_file(path: Path) -> dict[str, Any]:
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ConfigError(f"Config file not found: {path}") from exc

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    return data


def read_env_overrides(environ: dict[str, str] | None = None) -> dict[str, Any]:
    environ = os.environ if environ is None else environ
    overrides: dict[str, Any] = {}
    for env_name, field in ENV_FIELDS.items():
        value = environ.get(env_name)
        if value is None or value == "":
            continue
        overrides[field] = _env_truthy(value) if field in BOOL_FIELDS else value
    return overrides


def load_config(
    path: Path | None = None,
    overrides: dict[str, Any] | None = None,
    environ: dict[str, str] | None = None,
) -> RehunkConfig:
    """
    Build the effective configuration.

    Sources, lowest precedence first: defaults, the YAML file (``path`` or
    ``$REHUNK_CONFIG``), ``REHUNK_*`` environment variables, then
    ``overrides``. ``None`` values in overrides are skipped so unset CLI
    flags do not clobber other sources.
    """
    environ = os.environ if environ is None else environ
    if path is None and environ.get(CONFIG_ENV_VAR):
        path = Path(environ[CONFIG_ENV_VAR])

    data: dict[str, Any] = {}
    if path is not None:
        data = deep_merge(data, read_config_file(path))
        logger.debug("Loaded config file %s", path)

    data = deep_merge(data, read_env_overrides(environ))
    if overrides:
        data = deep_merge(
            data, {key: value for key, value in overrides.items() if value is not None}
        )

    try:
        return RehunkConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
