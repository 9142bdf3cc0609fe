"""
Options model — the resolved configuration of one wp-now session.

Built once from caller overrides merged onto defaults, then frozen.
Mode is always concrete here: ``auto`` is resolved before the model
is constructed.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, field_validator


class Mode(StrEnum):
    """What kind of WordPress artifact a project directory holds."""

    CORE = "core"
    PLUGIN = "plugin"
    THEME = "theme"
    INDEX = "index"
    WP_CONTENT = "wp-content"
    AUTO = "auto"


# Newest first, matching the order users see in error messages.
SUPPORTED_PHP_VERSIONS: tuple[str, ...] = (
    "8.3",
    "8.2",
    "8.1",
    "8.0",
    "7.4",
    "7.3",
    "7.2",
    "7.1",
    "7.0",
)

DEFAULT_PHP_VERSION = "8.0"
DEFAULT_WORDPRESS_VERSION = "6.6"
DEFAULT_DOCUMENT_ROOT = "/var/www/html"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8881


def default_absolute_url(port: int = DEFAULT_PORT) -> str:
    return f"http://{DEFAULT_HOST}:{port}"


class WPNowOptions(BaseModel):
    """Immutable session configuration.

    Paths on the host side (``project_path``, ``wp_content_path``) are
    absolute. ``document_root`` is a path inside the execution
    environment, not on the host.
    """

    model_config = ConfigDict(frozen=True)

    php_version: str = DEFAULT_PHP_VERSION
    document_root: str = DEFAULT_DOCUMENT_ROOT
    absolute_url: str = default_absolute_url()
    mode: Mode
    project_path: str
    wp_content_path: str
    wordpress_version: str = DEFAULT_WORDPRESS_VERSION

    @field_validator("mode")
    @classmethod
    def _mode_is_concrete(cls, value: Mode) -> Mode:
        if value == Mode.AUTO:
            raise ValueError("mode must be resolved before building options")
        return value

    @field_validator("document_root")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/") or "/"

    @property
    def uses_wordpress(self) -> bool:
        """Everything but ``index`` mode boots a WordPress site."""
        return self.mode != Mode.INDEX

    def to_dict(self) -> dict:
        return self.model_dump(mode="json")
