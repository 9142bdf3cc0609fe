"""
Configuration errors.

Raised before any side effect happens. Messages always list the valid
choices so the user can fix the flag without reading source.
"""

from __future__ import annotations

from collections.abc import Iterable


class ConfigError(Exception):
    """Raised when wp-now configuration is invalid or missing."""


class UnsupportedPHPVersionError(ConfigError):
    """The requested PHP version is not one the runtime ships."""

    def __init__(self, version: str, supported: Iterable[str]):
        self.version = version
        self.supported = tuple(supported)
        super().__init__(
            f"Unsupported PHP version: {version}. "
            f"Supported versions: {', '.join(self.supported)}"
        )


class UnknownReleaseError(ConfigError):
    """The requested WordPress release is not in the registry."""

    def __init__(self, identifier: str, known: Iterable[str]):
        self.identifier = identifier
        self.known = tuple(known)
        super().__init__(
            f"Unsupported WordPress version: {identifier}. "
            f"Known versions: {', '.join(self.known)}"
        )
