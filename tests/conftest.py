"""
Shared test fixtures: project directories for every mode, a fake
wp-now home, zipped release / driver archives and a recording fetcher.
"""

import io
import textwrap
import zipfile
from pathlib import Path

import pytest

from wpnow.core.config.paths import SQLITE_URL
from wpnow.core.models.release import list_releases

WP_CONFIG_SAMPLE = textwrap.dedent("""\
    <?php
    define( 'DB_NAME', 'database_name_here' );
    define( 'DB_USER', 'username_here' );

    $table_prefix = 'wp_';

    /* That's all, stop editing! Happy publishing. */

    require_once ABSPATH . 'wp-settings.php';
""")

DB_COPY = textwrap.dedent("""\
    <?php
    define( 'SQLITE_IMPLEMENTATION_FOLDER_PATH', '{SQLITE_IMPLEMENTATION_FOLDER_PATH}' );
    define( 'SQLITE_PLUGIN', '{SQLITE_PLUGIN}' );
    require_once '{SQLITE_IMPLEMENTATION_FOLDER_PATH}/wp-includes/sqlite/db.php';
""")

RELEASE_FILES = {
    "index.php": "<?php require __DIR__ . '/wp-blog-header.php';\n",
    "wp-load.php": "<?php\n",
    "wp-config-sample.php": WP_CONFIG_SAMPLE,
    "wp-includes/version.php": "<?php $wp_version = '6.5';\n",
    "wp-content/index.php": "<?php // Silence is golden.\n",
    "wp-content/plugins/index.php": "<?php // Silence is golden.\n",
    "wp-content/plugins/hello.php": "<?php\n/*\nPlugin Name: Hello Dolly\n*/\n",
    "wp-content/themes/index.php": "<?php // Silence is golden.\n",
    "wp-content/themes/twentytwentyfour/style.css": "/*\nTheme Name: Twenty Twenty-Four\n*/\n",
}

SQLITE_FILES = {
    "load.php": "<?php\n/*\nPlugin Name: SQLite Database Integration\n*/\n",
    "db.copy": DB_COPY,
    "wp-includes/sqlite/db.php": "<?php\n",
}


def write_tree(root: Path, files: dict[str, str]) -> Path:
    for rel, content in files.items():
        target = root / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content)
    return root


def build_zip(top: str, files: dict[str, str]) -> bytes:
    """Archive ``files`` under a single ``top/`` folder, like wordpress.org does."""
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as zf:
        for rel, content in files.items():
            zf.writestr(f"{top}/{rel}", content)
    return buf.getvalue()


class RecordingFetcher:
    """Serves canned archives and remembers every URL it was asked for."""

    def __init__(self, archives: dict[str, bytes] | None = None):
        self.archives = archives or {}
        self.urls: list[str] = []

    def download(self, url: str, destination: Path) -> None:
        self.urls.append(url)
        if url not in self.archives:
            raise OSError(f"unexpected download: {url}")
        destination.write_bytes(self.archives[url])

    def count(self, url: str) -> int:
        return self.urls.count(url)


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path: Path):
    """Keep the developer's WP_NOW_* settings out of the tests."""
    for var in (
        "WP_NOW_HOME",
        "WP_NOW_PHP_VERSION",
        "WP_NOW_WP_VERSION",
        "WP_NOW_MODE",
        "WP_NOW_PORT",
        "WP_NOW_RUNTIME",
        "WP_NOW_LOG_LEVEL",
        "WP_NOW_LOG_FILE",
        "WP_NOW_LOG_FILE_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("WP_NOW_HOME", str(tmp_path / "wp-now-home"))


@pytest.fixture
def wp_home(tmp_path: Path) -> Path:
    """The wp-now home directory (matches WP_NOW_HOME)."""
    return tmp_path / "wp-now-home"


@pytest.fixture
def fetcher() -> RecordingFetcher:
    archives = {r.url: build_zip("wordpress", RELEASE_FILES) for r in list_releases()}
    archives[SQLITE_URL] = build_zip("sqlite-database-integration", SQLITE_FILES)
    return RecordingFetcher(archives)


@pytest.fixture
def release_dir(tmp_path: Path) -> Path:
    """An already-extracted WordPress release."""
    return write_tree(tmp_path / "release", RELEASE_FILES)


@pytest.fixture
def sqlite_dir(tmp_path: Path) -> Path:
    return write_tree(tmp_path / "sqlite-database-integration", SQLITE_FILES)


# ── Project directories ─────────────────────────────────────────────


@pytest.fixture
def plugin_project(tmp_path: Path) -> Path:
    return write_tree(
        tmp_path / "projects" / "my-plugin",
        {"my-plugin.php": "<?php\n/**\n * Plugin Name: My Plugin\n * Version: 1.0\n */\n"},
    )


@pytest.fixture
def theme_project(tmp_path: Path) -> Path:
    return write_tree(
        tmp_path / "projects" / "my-theme",
        {
            "style.css": "/*\nTheme Name: My Theme\nAuthor: Someone\n*/\n",
            "index.php": "<?php get_header();\n",
        },
    )


@pytest.fixture
def wp_content_project(tmp_path: Path) -> Path:
    root = tmp_path / "projects" / "wp-content"
    (root / "plugins").mkdir(parents=True)
    (root / "themes").mkdir()
    return root


@pytest.fixture
def core_project(tmp_path: Path) -> Path:
    return write_tree(tmp_path / "projects" / "wordpress", RELEASE_FILES)


@pytest.fixture
def index_project(tmp_path: Path) -> Path:
    return write_tree(tmp_path / "projects" / "site", {"index.html": "<h1>hi</h1>\n"})
