"""
Start use case — the wp-now orchestrator.

Ties together option resolution, the runtime, asset provisioning, the
mount plan and the installer sequence:

    validate → resolve options → boot runtime → download → mount → install → log in

Every step finishes before the next one starts. Nothing is retried and
nothing is rolled back: if a step fails, mounts and writes made by
earlier steps stay in place and the exception reaches the caller.
Two sessions on the same project share one content cache and must not
run at the same time.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from wpnow.adapters.base import (
    CodeRunner,
    ExecutionEnvironment,
    PhpResponse,
    RequestHandlerConfig,
    RuntimeFactory,
)
from wpnow.adapters.registry import RuntimeRegistry
from wpnow.core.config.errors import ConfigError
from wpnow.core.config.loader import load_overrides, validate_overrides
from wpnow.core.config.paths import SQLITE_FILENAME, wp_now_home
from wpnow.core.models.install import DEFAULT_CREDENTIALS, DevCredentials
from wpnow.core.models.mount import MountRole
from wpnow.core.models.options import (
    DEFAULT_PORT,
    Mode,
    WPNowOptions,
    default_absolute_url,
)
from wpnow.core.services.assets import AssetProvisioner, Fetcher
from wpnow.core.services.detection import infer_mode
from wpnow.core.services.identity import content_cache_path
from wpnow.core.services.installer import auto_login, register_user
from wpnow.core.services.mount_planner import plan_mounts, prepare_content_cache
from wpnow.core.services.static_files import is_static_file_path
from wpnow.core.services.wp_config import (
    define_site_url,
    define_wp_config_consts,
    install_allow_wp_org,
    render_sqlite_dropin,
    seed_wp_config,
)

logger = logging.getLogger(__name__)

PLACEHOLDER_INDEX = "<?php echo 'Hello wp-now!';"

# Keys that are plain option fields (everything else is derived or CLI-only).
_OPTION_FIELDS = ("php_version", "document_root", "wordpress_version")


def build_options(overrides: Mapping[str, Any], home: Path) -> WPNowOptions:
    """Merge overrides onto defaults and resolve ``auto`` mode.

    ``overrides`` must already have passed ``validate_overrides``.
    """
    project_path = Path(os.path.abspath(overrides.get("project_path") or os.getcwd()))

    mode = overrides.get("mode")
    if mode is None or Mode(mode) == Mode.AUTO:
        mode = infer_mode(project_path)

    wp_content_path = overrides.get("wp_content_path") or content_cache_path(project_path, home)
    absolute_url = overrides.get("absolute_url") or default_absolute_url(
        overrides.get("port") or DEFAULT_PORT
    )

    fields = {k: overrides[k] for k in _OPTION_FIELDS if overrides.get(k) is not None}
    return WPNowOptions(
        mode=Mode(mode),
        project_path=str(project_path),
        wp_content_path=str(Path(wp_content_path).expanduser()),
        absolute_url=absolute_url,
        **fields,
    )


class WPNow:
    """One wp-now session: a runtime with a project mounted into it."""

    def __init__(
        self,
        options: WPNowOptions,
        provisioner: AssetProvisioner,
        credentials: DevCredentials = DEFAULT_CREDENTIALS,
    ):
        self.options = options
        self.provisioner = provisioner
        self.credentials = credentials
        self.php: ExecutionEnvironment | None = None

    @classmethod
    def create(
        cls,
        overrides: Mapping[str, Any] | None = None,
        runtime_factory: RuntimeFactory | None = None,
        provisioner: AssetProvisioner | None = None,
        home: Path | None = None,
        credentials: DevCredentials = DEFAULT_CREDENTIALS,
    ) -> WPNow:
        """Validate overrides, resolve options and boot the runtime.

        Raises:
            ConfigError: Before any side effect, for bad PHP versions,
                unknown releases or unknown modes.
        """
        overrides = dict(overrides or {})
        validate_overrides(overrides)
        if runtime_factory is None:
            raise ConfigError("A runtime factory is required to create a session")

        home = home or (provisioner.home if provisioner else wp_now_home())
        options = build_options(overrides, home)
        instance = cls(
            options,
            provisioner or AssetProvisioner(home),
            credentials=credentials,
        )
        instance._setup(runtime_factory)
        return instance

    def _setup(self, runtime_factory: RuntimeFactory) -> None:
        root = self.options.document_root
        self.php = runtime_factory(
            self.options.php_version,
            RequestHandlerConfig(
                document_root=root,
                absolute_url=self.options.absolute_url,
                is_static_file_path=self.is_static_file_path,
            ),
        )
        self.php.mkdir_tree(root)
        self.php.chdir(root)
        self.php.write_file(f"{root}/index.php", PLACEHOLDER_INDEX)

    @property
    def runtime(self) -> ExecutionEnvironment:
        if self.php is None:
            raise RuntimeError("WPNow runtime is not set up; use WPNow.create()")
        return self.php

    # ── Request handler hook ────────────────────────────────────────

    def is_static_file_path(self, request_path: str) -> bool:
        # The runtime may ask while its factory is still running.
        if self.php is None:
            logger.debug("Static file check for %s before runtime setup", request_path)
            return False
        return is_static_file_path(self.php, self.options.document_root, request_path)

    # ── Mounting ────────────────────────────────────────────────────

    def mount(self, release_dir: Path | None = None, sqlite_dir: Path | None = None) -> None:
        """Apply the mount plan for the session's mode.

        Args:
            release_dir: Extracted WordPress release (default: the
                provisioner's location for the configured version).
            sqlite_dir: Extracted SQLite driver (default: the
                provisioner's location).
        """
        opts = self.options
        php = self.runtime

        if opts.mode == Mode.INDEX:
            for mapping in plan_mounts(opts, None, None):
                php.mount(mapping.source, mapping.target)
            return

        release_dir = release_dir or self.provisioner.release_path(opts.wordpress_version)
        sqlite_dir = sqlite_dir or self.provisioner.sqlite_driver_path()

        for mapping in plan_mounts(opts, release_dir, sqlite_dir):
            logger.debug("Mounting %s", mapping)
            if mapping.role == MountRole.SQLITE:
                php.mkdir_tree(mapping.target)
            php.mount(mapping.source, mapping.target)

            if mapping.role == MountRole.WORDPRESS:
                self._configure_wordpress()
                prepare_content_cache(opts, release_dir)
            elif mapping.role == MountRole.SQLITE:
                self._install_sqlite_dropin(mapping.target)

    def _configure_wordpress(self) -> None:
        php = self.runtime
        root = self.options.document_root
        seed_wp_config(php, root)
        define_site_url(php, root, self.options.absolute_url)
        if self.options.mode != Mode.CORE:
            define_wp_config_consts(php, root, {"WP_AUTO_UPDATE_CORE": False})
            install_allow_wp_org(php, root)

    def _install_sqlite_dropin(self, install_path: str) -> None:
        php = self.runtime
        template = php.read_file_as_text(f"{install_path}/db.copy")
        php.write_file(
            f"{self.options.document_root}/wp-content/db.php",
            render_sqlite_dropin(template, install_path, SQLITE_FILENAME),
        )

    # ── Site setup ──────────────────────────────────────────────────

    def register_user(self) -> PhpResponse:
        return register_user(self.runtime, self.credentials)

    def auto_login(self) -> PhpResponse:
        return auto_login(self.runtime, self.credentials)

    def start(self) -> None:
        """Download what is missing, mount, install and log in."""
        opts = self.options
        logger.info("Project directory: %s", opts.project_path)
        logger.info("mode: %s", opts.mode)
        logger.info("php: %s", opts.php_version)
        logger.info("wp: %s", opts.wordpress_version)

        if opts.mode == Mode.INDEX:
            self.mount()
            return

        release_dir = self.provisioner.ensure_release_downloaded(opts.wordpress_version)
        sqlite_dir = self.provisioner.ensure_sqlite_driver_downloaded()
        self.mount(release_dir, sqlite_dir)
        self.register_user()
        self.auto_login()

    # ── Helpers ─────────────────────────────────────────────────────

    def update_file(self, path: str, transform: Callable[[str], str]) -> None:
        """Rewrite a file inside the runtime through ``transform``."""
        php = self.runtime
        php.write_file(path, transform(php.read_file_as_text(path)))

    def run_code(self, code: str) -> PhpResponse:
        php = self.runtime
        if not isinstance(php, CodeRunner):
            raise TypeError(f"{type(php).__name__} cannot run PHP code")
        result = php.run(code)
        logger.info("%s", result.text)
        return result


@dataclass
class StartResult:
    """Result of the start use case."""

    session: WPNow | None = None
    options: WPNowOptions | None = None
    error: str | None = None

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error}
        result: dict = {}
        if self.options:
            result["options"] = self.options.to_dict()
        result["started"] = self.session is not None
        return result


def run_start(
    cli_overrides: Mapping[str, Any] | None = None,
    config_path: Path | None = None,
    mock_mode: bool = False,
    home: Path | None = None,
    fetcher: Fetcher | None = None,
    registry: RuntimeRegistry | None = None,
) -> StartResult:
    """Resolve configuration, build a session and start it.

    Configuration problems are reported in ``StartResult.error``;
    collaborator failures (downloads, mounts, requests) propagate.
    """
    result = StartResult()
    cli_overrides = dict(cli_overrides or {})
    start_dir = Path(cli_overrides.get("project_path") or os.getcwd())

    try:
        overrides = load_overrides(cli=cli_overrides, config_path=config_path, start_dir=start_dir)
        validate_overrides(overrides)
        registry = registry or RuntimeRegistry()
        if mock_mode:
            registry.set_mock_mode(True)
        factory = registry.resolve(overrides.get("runtime"))
        home = home or wp_now_home()
        session = WPNow.create(
            overrides,
            runtime_factory=factory,
            provisioner=AssetProvisioner(home, fetcher),
            home=home,
        )
    except ConfigError as e:
        result.error = str(e)
        return result

    result.options = session.options
    session.start()
    result.session = session
    return result
