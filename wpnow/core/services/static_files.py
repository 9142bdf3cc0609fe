"""
Static-file classifier for the runtime's request handler.

The runtime asks, per request, whether a path can be streamed as-is.
Anything PHP-ish goes through the interpreter; a failing check must
never take request handling down, so errors mean "not static".
"""

from __future__ import annotations

import logging

from wpnow.adapters.base import FileStore

logger = logging.getLogger(__name__)


def seems_like_php_file(path: str) -> bool:
    return path.endswith(".php") or ".php/" in path


def is_static_file_path(files: FileStore, document_root: str, request_path: str) -> bool:
    """True only for existing, non-directory, non-PHP files under the root."""
    full_path = request_path
    try:
        full_path = document_root + request_path
        return (
            files.file_exists(full_path)
            and not files.is_dir(full_path)
            and not seems_like_php_file(full_path)
        )
    except Exception:
        logger.exception("Static file check failed for %s", full_path)
        return False
