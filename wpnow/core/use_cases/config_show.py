"""
Config show use case — resolve options exactly as ``start`` would, without
booting a runtime, downloading or mounting anything.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from wpnow.core.config.loader import (
    ConfigError,
    find_config_file,
    load_overrides,
    validate_overrides,
)
from wpnow.core.config.paths import wp_now_home
from wpnow.core.models.options import WPNowOptions
from wpnow.core.use_cases.start import build_options


@dataclass
class ConfigShowResult:
    """Resolved options plus where they came from."""

    options: WPNowOptions | None = None
    config_path: Path | None = None
    home: Path | None = None
    runtime: str | None = None
    error: str | None = None

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error}
        return {
            "config_path": str(self.config_path) if self.config_path else None,
            "home": str(self.home) if self.home else None,
            "runtime": self.runtime,
            "options": self.options.to_dict() if self.options else None,
        }


def show_config(
    cli_overrides: dict[str, Any] | None = None,
    config_path: Path | None = None,
    home: Path | None = None,
) -> ConfigShowResult:
    """Resolve the effective session options.

    Args:
        cli_overrides: Values from command-line flags.
        config_path: Explicit wp-now.yml (default: searched upward from
            the project path).
        home: wp-now home directory (default: ``WP_NOW_HOME`` or ~/.wp-now).
    """
    result = ConfigShowResult()
    cli_overrides = dict(cli_overrides or {})
    start_dir = Path(cli_overrides.get("project_path") or os.getcwd())

    try:
        if config_path is None:
            config_path = find_config_file(start_dir)
        result.config_path = config_path

        overrides = load_overrides(cli=cli_overrides, config_path=config_path, start_dir=start_dir)
        validate_overrides(overrides)
        result.home = home or wp_now_home()
        result.runtime = overrides.get("runtime")
        result.options = build_options(overrides, result.home)
    except ConfigError as e:
        result.error = str(e)

    return result
