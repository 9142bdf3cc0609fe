"""
Detection service — decide what kind of WordPress project a directory is.

Each structural check is a standalone predicate. ``MODE_PREDICATES`` is
the priority order: the first predicate that matches decides the mode,
and a directory matching none is served verbatim (``index``).

Pure logic — no side effects, no persistence.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from wpnow.core.models.options import Mode

logger = logging.getLogger(__name__)

# WordPress itself only parses this much of a file when reading headers.
_HEADER_WINDOW = 8 * 1024


def _header_contains(path: Path, marker: str) -> bool:
    """Check whether the first few KiB of ``path`` contain ``marker``."""
    if not path.is_file():
        return False
    try:
        with path.open("r", encoding="utf-8", errors="ignore") as f:
            head = f.read(_HEADER_WINDOW)
    except OSError as e:
        logger.debug("Cannot read %s for header scan: %s", path, e)
        return False
    return marker in head


def is_wp_core_directory(path: Path) -> bool:
    """A full WordPress checkout: wp-content/, wp-includes/ and wp-load.php."""
    return (
        (path / "wp-content").is_dir()
        and (path / "wp-includes").is_dir()
        and (path / "wp-load.php").is_file()
    )


def is_wp_content_directory(path: Path) -> bool:
    """A wp-content tree: plugins/ and themes/ side by side."""
    return (path / "plugins").is_dir() and (path / "themes").is_dir()


def is_plugin_directory(path: Path) -> bool:
    """A single plugin: a top-level PHP file carrying a ``Plugin Name:`` header."""
    if not path.is_dir():
        return False
    for candidate in sorted(path.glob("*.php")):
        if _header_contains(candidate, "Plugin Name:"):
            return True
    return False


def is_theme_directory(path: Path) -> bool:
    """A single theme: style.css carrying a ``Theme Name:`` header."""
    return _header_contains(path / "style.css", "Theme Name:")


ModePredicate = Callable[[Path], bool]

MODE_PREDICATES: tuple[tuple[ModePredicate, Mode], ...] = (
    (is_wp_core_directory, Mode.CORE),
    (is_wp_content_directory, Mode.WP_CONTENT),
    (is_plugin_directory, Mode.PLUGIN),
    (is_theme_directory, Mode.THEME),
)


def infer_mode(project_path: Path) -> Mode:
    """Classify ``project_path`` into a concrete mode.

    Never returns ``Mode.AUTO``.
    """
    for predicate, mode in MODE_PREDICATES:
        if predicate(project_path):
            logger.debug("%s matched %s → %s", project_path, predicate.__name__, mode)
            return mode
    logger.debug("%s matched no WordPress markers → %s", project_path, Mode.INDEX)
    return Mode.INDEX
