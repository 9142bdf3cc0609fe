"""
Domain models — Pydantic types for wp-now.

All models are re-exported here for convenient access:

    from wpnow.core.models import Mode, WPNowOptions, MountMapping, ReleaseDescriptor
"""

from wpnow.core.models.install import (
    DEFAULT_CREDENTIALS,
    DevCredentials,
    install_form,
    login_form,
)
from wpnow.core.models.mount import MountMapping, MountRole
from wpnow.core.models.options import (
    DEFAULT_PHP_VERSION,
    DEFAULT_WORDPRESS_VERSION,
    SUPPORTED_PHP_VERSIONS,
    Mode,
    WPNowOptions,
)
from wpnow.core.models.release import (
    ReleaseDescriptor,
    get_release,
    known_release_ids,
    list_releases,
)

__all__ = [
    # options.py
    "DEFAULT_PHP_VERSION",
    "DEFAULT_WORDPRESS_VERSION",
    "SUPPORTED_PHP_VERSIONS",
    "Mode",
    "WPNowOptions",
    # install.py
    "DEFAULT_CREDENTIALS",
    "DevCredentials",
    "install_form",
    "login_form",
    # mount.py
    "MountMapping",
    "MountRole",
    # release.py
    "ReleaseDescriptor",
    "get_release",
    "known_release_ids",
    "list_releases",
]
