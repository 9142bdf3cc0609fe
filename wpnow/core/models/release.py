"""
Release registry — the closed set of WordPress builds wp-now knows.

Each identifier is statically bound to one archive. The byte size is
advisory: it is logged before a download so a slow fetch is not
mistaken for a hang. Nothing downstream verifies it.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from wpnow.core.config.errors import UnknownReleaseError


class ReleaseDescriptor(BaseModel):
    """One downloadable WordPress distribution."""

    model_config = ConfigDict(frozen=True)

    identifier: str
    expected_size: int
    url: str


_RELEASES: dict[str, ReleaseDescriptor] = {
    r.identifier: r
    for r in (
        ReleaseDescriptor(
            identifier="nightly",
            expected_size=18651516,
            url="https://wordpress.org/nightly-builds/wordpress-latest.zip",
        ),
        ReleaseDescriptor(
            identifier="beta",
            expected_size=18381300,
            url="https://wordpress.org/wordpress-6.7-beta1.zip",
        ),
        ReleaseDescriptor(
            identifier="6.6",
            expected_size=18382440,
            url="https://wordpress.org/wordpress-6.6.zip",
        ),
        ReleaseDescriptor(
            identifier="6.5",
            expected_size=4887384,
            url="https://wordpress.org/wordpress-6.5.zip",
        ),
        ReleaseDescriptor(
            identifier="6.4",
            expected_size=4774235,
            url="https://wordpress.org/wordpress-6.4.zip",
        ),
        ReleaseDescriptor(
            identifier="6.3",
            expected_size=3595053,
            url="https://wordpress.org/wordpress-6.3.zip",
        ),
    )
}


def known_release_ids() -> list[str]:
    """Identifiers in registry order (channels first, then newest stable)."""
    return list(_RELEASES)


def list_releases() -> list[ReleaseDescriptor]:
    return list(_RELEASES.values())


def get_release(identifier: str) -> ReleaseDescriptor:
    """Look up a release by identifier.

    Raises:
        UnknownReleaseError: If the identifier is not registered.
    """
    try:
        return _RELEASES[identifier]
    except KeyError:
        raise UnknownReleaseError(identifier, _RELEASES) from None
