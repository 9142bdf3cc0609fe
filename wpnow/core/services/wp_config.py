"""
wp-config.php and drop-in helpers.

All edits go through the runtime's ``FileStore`` so they land wherever
the document root is mounted. Constants are rewritten textually: an
existing ``define()`` is replaced in place, a missing one is inserted
above the "stop editing" marker.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping

from wpnow.adapters.base import FileStore

logger = logging.getLogger(__name__)

PhpScalar = bool | int | float | str

_STOP_EDITING_MARKER = "/* That's all, stop editing!"

ALLOWED_REDIRECT_HOSTS = (
    "wordpress.org",
    "api.wordpress.org",
    "downloads.wordpress.org",
)

ALLOW_WP_ORG_MU_PLUGIN = "0-allow-wp-org.php"

SQLITE_PATH_TOKEN = "{SQLITE_IMPLEMENTATION_FOLDER_PATH}"
SQLITE_PLUGIN_TOKEN = "{SQLITE_PLUGIN}"


def php_literal(value: PhpScalar) -> str:
    """Render a Python scalar as PHP source."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return repr(value)
    escaped = value.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def _define_pattern(name: str) -> re.Pattern[str]:
    return re.compile(
        r"define\(\s*['\"]" + re.escape(name) + r"['\"]\s*,.*?\)\s*;",
        re.DOTALL,
    )


def apply_consts(source: str, consts: Mapping[str, PhpScalar]) -> str:
    """Return ``source`` with every constant in ``consts`` defined."""
    missing: list[str] = []
    for name, value in consts.items():
        statement = f"define( '{name}', {php_literal(value)} );"
        pattern = _define_pattern(name)
        if pattern.search(source):
            source = pattern.sub(lambda _m: statement, source, count=1)
        else:
            missing.append(statement)

    if not missing:
        return source

    block = "\n".join(missing) + "\n"
    marker_at = source.find(_STOP_EDITING_MARKER)
    if marker_at != -1:
        return source[:marker_at] + block + "\n" + source[marker_at:]

    open_tag = re.match(r"\s*<\?php\s*\n?", source)
    if open_tag:
        end = open_tag.end()
        return source[:end] + block + source[end:]
    return "<?php\n" + block + "?>\n" + source


def seed_wp_config(files: FileStore, document_root: str) -> None:
    """Copy wp-config-sample.php to wp-config.php."""
    sample = files.read_file_as_text(f"{document_root}/wp-config-sample.php")
    files.write_file(f"{document_root}/wp-config.php", sample)


def define_wp_config_consts(
    files: FileStore, document_root: str, consts: Mapping[str, PhpScalar]
) -> None:
    path = f"{document_root}/wp-config.php"
    files.write_file(path, apply_consts(files.read_file_as_text(path), consts))
    logger.debug("Defined %s in %s", ", ".join(consts), path)


def define_site_url(files: FileStore, document_root: str, site_url: str) -> None:
    define_wp_config_consts(
        files, document_root, {"WP_HOME": site_url, "WP_SITEURL": site_url}
    )


def allow_wp_org_mu_plugin() -> str:
    hosts = ",\n\t\t".join(f"'{h}'" for h in ALLOWED_REDIRECT_HOSTS)
    return (
        "<?php\n"
        "// gethostbyname( 'wordpress.org' ) can resolve to a private address\n"
        "// inside the sandbox, which wp_safe_redirect() then refuses.\n"
        "add_filter( 'allowed_redirect_hosts', function( $deprecated = '' ) {\n"
        f"\treturn array(\n\t\t{hosts},\n\t);\n"
        "} );\n"
    )


def install_allow_wp_org(files: FileStore, document_root: str) -> None:
    mu_plugins = f"{document_root}/wp-content/mu-plugins"
    files.mkdir_tree(mu_plugins)
    files.write_file(f"{mu_plugins}/{ALLOW_WP_ORG_MU_PLUGIN}", allow_wp_org_mu_plugin())


def render_sqlite_dropin(template: str, install_path: str, plugin_name: str) -> str:
    return template.replace(SQLITE_PATH_TOKEN, install_path).replace(
        SQLITE_PLUGIN_TOKEN, plugin_name
    )
