"""
Mount planner — which host directories go where, per mode.

``plan_mounts`` is pure: it turns resolved options into an ordered list
of mappings. Order matters, later mounts shadow parts of earlier ones
(wp-content over the WordPress tree, a plugin over wp-content/plugins).

``prepare_content_cache`` does the host-side half: seeding the
per-project wp-content copy from the pristine release and creating the
directory a single plugin or theme is mounted onto.
"""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path

from wpnow.core.config.paths import SQLITE_FILENAME
from wpnow.core.models.mount import MountMapping, MountRole
from wpnow.core.models.options import Mode, WPNowOptions

logger = logging.getLogger(__name__)

# Modes whose wp-content comes from the per-project cache.
CACHED_CONTENT_MODES = frozenset({Mode.CORE, Mode.PLUGIN, Mode.THEME})

# Single-artifact modes and the wp-content subfolder they live in.
ARTIFACT_FOLDERS = {
    Mode.PLUGIN: "plugins",
    Mode.THEME: "themes",
}


def sqlite_target(document_root: str) -> str:
    return f"{document_root}/wp-content/plugins/{SQLITE_FILENAME}"


def artifact_target(options: WPNowOptions) -> str | None:
    """Where a plugin/theme project appears inside the site, if anywhere."""
    folder = ARTIFACT_FOLDERS.get(options.mode)
    if folder is None:
        return None
    name = Path(options.project_path).name
    return f"{options.document_root}/wp-content/{folder}/{name}"


def plan_mounts(
    options: WPNowOptions, release_dir: Path | None, sqlite_dir: Path | None
) -> list[MountMapping]:
    """Compute the ordered mount list for ``options.mode``.

    Args:
        options: Resolved session options.
        release_dir: Extracted WordPress release (unused in index/core
            mode for the root mount, still needed for core's wp-content seed).
        sqlite_dir: Extracted SQLite driver.

    Returns:
        Mappings in application order.
    """
    root = options.document_root
    project = options.project_path

    if options.mode == Mode.INDEX:
        return [MountMapping(source=project, target=root, role=MountRole.INDEX)]

    if release_dir is None or sqlite_dir is None:
        raise ValueError(f"{options.mode} mode needs a WordPress release and the SQLite driver")

    wordpress_root = project if options.mode == Mode.CORE else str(release_dir)
    plan = [MountMapping(source=wordpress_root, target=root, role=MountRole.WORDPRESS)]

    if options.mode == Mode.WP_CONTENT:
        plan.append(
            MountMapping(source=project, target=f"{root}/wp-content", role=MountRole.WP_CONTENT)
        )

    if options.mode in CACHED_CONTENT_MODES:
        plan.append(
            MountMapping(
                source=options.wp_content_path,
                target=f"{root}/wp-content",
                role=MountRole.WP_CONTENT,
            )
        )

    target = artifact_target(options)
    if target is not None:
        plan.append(MountMapping(source=project, target=target, role=MountRole.PROJECT))

    plan.append(
        MountMapping(source=str(sqlite_dir), target=sqlite_target(root), role=MountRole.SQLITE)
    )
    return plan


def _copy_if_missing(src: str, dst: str) -> str:
    if os.path.exists(dst):
        return dst
    return shutil.copy2(src, dst)


def seed_content_cache(release_content: Path, cache: Path) -> None:
    """Copy a release's wp-content into ``cache`` without touching existing files."""
    cache.mkdir(parents=True, exist_ok=True)
    shutil.copytree(
        release_content,
        cache,
        dirs_exist_ok=True,
        copy_function=_copy_if_missing,
    )


def prepare_content_cache(options: WPNowOptions, release_dir: Path) -> None:
    """Host-side setup the plan's wp-content and project mounts rely on.

    No-op for ``index`` and ``wp-content`` modes.
    """
    if options.mode not in CACHED_CONTENT_MODES:
        return

    cache = Path(options.wp_content_path)
    seed_content_cache(release_dir / "wp-content", cache)
    logger.info("Content cache ready at %s", cache)

    folder = ARTIFACT_FOLDERS.get(options.mode)
    if folder is not None:
        (cache / folder / Path(options.project_path).name).mkdir(parents=True, exist_ok=True)
