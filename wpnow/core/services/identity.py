"""
Project identity — a stable, collision-free name per project directory.

The content cache of a project is keyed on its absolute path, so two
checkouts called ``my-plugin`` in different places never share state,
while the same checkout finds its cache again on every run.
"""

from __future__ import annotations

import hashlib
import os
from pathlib import Path

from wpnow.core.config.paths import content_cache_root


def content_cache_name(project_path: Path | str) -> str:
    """``<basename>-<sha1 of the absolute path>``."""
    absolute = Path(os.path.abspath(project_path))
    digest = hashlib.sha1(str(absolute).encode("utf-8")).hexdigest()
    return f"{absolute.name}-{digest}"


def content_cache_path(project_path: Path | str, home: Path) -> Path:
    return content_cache_root(home) / content_cache_name(project_path)
