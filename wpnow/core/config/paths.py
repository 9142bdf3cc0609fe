"""
Host-side locations wp-now persists between runs.

Everything lives under one home directory (``~/.wp-now`` unless
``WP_NOW_HOME`` says otherwise)::

    ~/.wp-now/
        wordpress-versions/<release>/     extracted releases
        sqlite-database-integration/      SQLite driver plugin
        wp-content/<name>-<sha1>/         per-project content caches
"""

from __future__ import annotations

import os
from pathlib import Path

WP_NOW_HOME_ENV = "WP_NOW_HOME"

SQLITE_FILENAME = "sqlite-database-integration"
SQLITE_URL = "https://downloads.wordpress.org/plugin/sqlite-database-integration.zip"


def wp_now_home(environ: dict[str, str] | None = None) -> Path:
    env = os.environ if environ is None else environ
    raw = env.get(WP_NOW_HOME_ENV)
    if raw:
        return Path(raw).expanduser().resolve()
    return Path.home() / ".wp-now"


def wordpress_versions_dir(home: Path) -> Path:
    return home / "wordpress-versions"


def release_dir(home: Path, identifier: str) -> Path:
    return wordpress_versions_dir(home) / identifier


def sqlite_dir(home: Path) -> Path:
    return home / SQLITE_FILENAME


def content_cache_root(home: Path) -> Path:
    return home / "wp-content"
