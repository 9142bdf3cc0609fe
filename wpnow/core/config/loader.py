"""
Configuration loader — layers wp-now.yml, environment and CLI overrides.

Precedence (highest first):
    CLI flags  >  WP_NOW_* environment  >  wp-now.yml  >  built-in defaults

The loader only produces a flat override mapping and validates it.
Turning overrides into a frozen ``WPNowOptions`` (mode inference,
content-cache naming) is the orchestrator's job.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from wpnow.core.config.errors import (
    ConfigError,
    UnknownReleaseError,
    UnsupportedPHPVersionError,
)
from wpnow.core.models.options import SUPPORTED_PHP_VERSIONS, Mode
from wpnow.core.models.release import get_release

logger = logging.getLogger(__name__)

__all__ = [
    "CONFIG_FILE",
    "ConfigError",
    "UnknownReleaseError",
    "UnsupportedPHPVersionError",
    "WPNowFileConfig",
    "env_overrides",
    "find_config_file",
    "load_file_config",
    "load_overrides",
    "merge_overrides",
    "validate_overrides",
]

# Default config filename
CONFIG_FILE = "wp-now.yml"

# Environment variable → override key
_ENV_KEYS = {
    "WP_NOW_PHP_VERSION": "php_version",
    "WP_NOW_WP_VERSION": "wordpress_version",
    "WP_NOW_MODE": "mode",
    "WP_NOW_PORT": "port",
    "WP_NOW_RUNTIME": "runtime",
}


class WPNowFileConfig(BaseModel):
    """Schema of wp-now.yml. Every key is optional."""

    model_config = ConfigDict(extra="forbid")

    php_version: str | None = None
    wordpress_version: str | None = None
    mode: Mode | None = None
    port: int | None = None
    document_root: str | None = None
    absolute_url: str | None = None
    wp_content_path: str | None = None
    runtime: str | None = None

    @field_validator("php_version", "wordpress_version", mode="before")
    @classmethod
    def _version_as_text(cls, value: Any) -> Any:
        # YAML reads an unquoted 8.2 as a float
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for wp-now.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to wp-now.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_file_config(path: Path) -> WPNowFileConfig:
    """Load and validate wp-now.yml.

    Raises:
        ConfigError: If the file is unreadable, not YAML, or has unknown keys.
    """
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading wp-now config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return WPNowFileConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        return WPNowFileConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid wp-now configuration in {path}: {e}") from e


def env_overrides(environ: Mapping[str, str] | None = None) -> dict[str, Any]:
    """Collect WP_NOW_* overrides from the environment."""
    env = os.environ if environ is None else environ
    result: dict[str, Any] = {}
    for var, key in _ENV_KEYS.items():
        value = env.get(var)
        if not value:
            continue
        if key == "port":
            try:
                result[key] = int(value)
            except ValueError:
                raise ConfigError(f"{var} must be an integer, got {value!r}") from None
        else:
            result[key] = value
    return result


def merge_overrides(*layers: Mapping[str, Any] | None) -> dict[str, Any]:
    """Merge override layers left to right; ``None`` values never clobber."""
    merged: dict[str, Any] = {}
    for layer in layers:
        if not layer:
            continue
        for key, value in layer.items():
            if value is None:
                continue
            merged[key] = value
    return merged


def load_overrides(
    cli: Mapping[str, Any] | None = None,
    config_path: Path | None = None,
    start_dir: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> dict[str, Any]:
    """Build the full override mapping for one session.

    Args:
        cli: Values from command-line flags (``None`` entries ignored).
        config_path: Explicit wp-now.yml. If None, searched upward from
            ``start_dir``.
        start_dir: Where to start the wp-now.yml search (default: cwd).
        environ: Environment mapping (default: ``os.environ``).
    """
    if config_path is None:
        config_path = find_config_file(start_dir)

    file_layer: dict[str, Any] = {}
    if config_path is not None:
        file_layer = load_file_config(config_path).model_dump(exclude_none=True)
        logger.info("Using config file %s", config_path)

    return merge_overrides(file_layer, env_overrides(environ), cli)


def validate_overrides(overrides: Mapping[str, Any]) -> None:
    """Reject unusable overrides before anything touches disk or network.

    Raises:
        UnsupportedPHPVersionError: PHP version outside the supported list.
        UnknownReleaseError: WordPress release not in the registry.
        ConfigError: Mode is not a known mode.
    """
    php_version = overrides.get("php_version")
    if php_version and php_version not in SUPPORTED_PHP_VERSIONS:
        raise UnsupportedPHPVersionError(php_version, SUPPORTED_PHP_VERSIONS)

    wordpress_version = overrides.get("wordpress_version")
    if wordpress_version:
        get_release(wordpress_version)

    mode = overrides.get("mode")
    if mode is not None:
        try:
            Mode(mode)
        except ValueError:
            valid = ", ".join(m.value for m in Mode)
            raise ConfigError(f"Unknown mode: {mode}. Valid modes: {valid}") from None
