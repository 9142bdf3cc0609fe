"""
Asset provisioning — make sure WordPress and the SQLite driver are on disk.

Both ``ensure_*`` calls are idempotent: once the extracted directory
exists it is returned as-is and nothing is fetched. Extraction goes
into a temporary sibling directory that is renamed into place at the
end, so an interrupted download never leaves a half-populated target
that later runs would mistake for a complete one.
"""

from __future__ import annotations

import logging
import shutil
import tempfile
import urllib.request
import zipfile
from pathlib import Path
from typing import Protocol

from wpnow.core.config.paths import SQLITE_FILENAME, SQLITE_URL, release_dir, sqlite_dir
from wpnow.core.models.release import get_release

logger = logging.getLogger(__name__)

_USER_AGENT = "wp-now/0.1"
_CHUNK = 64 * 1024


class Fetcher(Protocol):
    """Downloads ``url`` to the file ``destination``."""

    def download(self, url: str, destination: Path) -> None: ...


class UrllibFetcher:
    """Plain HTTP(S) download with a socket timeout. No retries."""

    def __init__(self, timeout: int = 60):
        self.timeout = timeout

    def download(self, url: str, destination: Path) -> None:
        req = urllib.request.Request(url, headers={"User-Agent": _USER_AGENT})
        with urllib.request.urlopen(req, timeout=self.timeout) as resp, open(
            destination, "wb"
        ) as out:
            shutil.copyfileobj(resp, out, _CHUNK)


def _extract_single_root(archive: Path, destination: Path) -> None:
    """Unzip ``archive`` into ``destination``, dropping a lone top-level folder.

    WordPress archives unpack to ``wordpress/…`` and plugin archives to
    ``<slug>/…``; the caller wants the contents, not the wrapper.
    """
    staging = destination.parent / (destination.name + ".unzip")
    if staging.exists():
        shutil.rmtree(staging)
    with zipfile.ZipFile(archive) as zf:
        zf.extractall(staging)

    entries = list(staging.iterdir())
    source = entries[0] if len(entries) == 1 and entries[0].is_dir() else staging
    source.rename(destination)
    if staging.exists():
        shutil.rmtree(staging)


class AssetProvisioner:
    """Downloads each asset once into ``home`` and reuses it afterwards."""

    def __init__(self, home: Path, fetcher: Fetcher | None = None):
        self.home = home
        self.fetcher = fetcher or UrllibFetcher()

    def release_path(self, identifier: str) -> Path:
        return release_dir(self.home, identifier)

    def sqlite_driver_path(self) -> Path:
        return sqlite_dir(self.home)

    def ensure_release_downloaded(self, identifier: str) -> Path:
        """Return the extracted release directory, fetching it if absent.

        Raises:
            UnknownReleaseError: If ``identifier`` is not registered.
        """
        release = get_release(identifier)
        target = self.release_path(identifier)
        if target.is_dir():
            logger.debug("WordPress %s already present at %s", identifier, target)
            return target

        logger.info(
            "Downloading WordPress %s (~%.1f MB) from %s",
            identifier,
            release.expected_size / 1_000_000,
            release.url,
        )
        self._fetch_into(release.url, target)
        logger.info("WordPress %s extracted to %s", identifier, target)
        return target

    def ensure_sqlite_driver_downloaded(self) -> Path:
        target = self.sqlite_driver_path()
        if target.is_dir():
            logger.debug("%s already present at %s", SQLITE_FILENAME, target)
            return target

        logger.info("Downloading %s from %s", SQLITE_FILENAME, SQLITE_URL)
        self._fetch_into(SQLITE_URL, target)
        logger.info("%s extracted to %s", SQLITE_FILENAME, target)
        return target

    def _fetch_into(self, url: str, target: Path) -> None:
        target.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.TemporaryDirectory(dir=target.parent, prefix=".download_") as tmp:
            archive = Path(tmp) / "archive.zip"
            self.fetcher.download(url, archive)
            _extract_single_root(archive, Path(tmp) / "extracted")
            (Path(tmp) / "extracted").rename(target)
