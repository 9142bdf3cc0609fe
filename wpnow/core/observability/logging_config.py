"""
Logging for the wp-now CLI.

``configure_cli_logging`` is the only thing main.py calls: it turns the
global flags and the WP_NOW_LOG_* variables into handlers on the root
logger. Modules just use ``logging.getLogger(__name__)``.

Console threshold, highest precedence first:
    --debug  >  --verbose  >  --quiet  >  WP_NOW_LOG_LEVEL  >  WARNING

WP_NOW_LOG_FILE adds a file copy of the log, filtered by
WP_NOW_LOG_FILE_LEVEL (default: the console threshold). Download
progress and mount details are logged at INFO and DEBUG, so a file at
DEBUG is the place to look when a session misbehaves.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping

LOG_LEVEL_ENV = "WP_NOW_LOG_LEVEL"
LOG_FILE_ENV = "WP_NOW_LOG_FILE"
LOG_FILE_LEVEL_ENV = "WP_NOW_LOG_FILE_LEVEL"

DEFAULT_LEVEL = logging.WARNING

# (threshold, format, datefmt): the first row the level reaches wins.
_CONSOLE_LAYOUTS: tuple[tuple[int, str, str | None], ...] = (
    (logging.DEBUG, "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d %(message)s", "%H:%M:%S"),
    (logging.INFO, "%(asctime)s [%(name)s] %(message)s", "%H:%M:%S"),
)
_CONSOLE_PLAIN = "%(message)s"

_FILE_FORMAT = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d %(message)s"
_FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"


def parse_level(name: str | None) -> int:
    """Level number for ``name``; blank or unknown names mean WARNING."""
    if not name:
        return DEFAULT_LEVEL
    return logging.getLevelNamesMapping().get(name.strip().upper(), DEFAULT_LEVEL)


def console_formatter(level: int) -> logging.Formatter:
    for threshold, fmt, datefmt in _CONSOLE_LAYOUTS:
        if level <= threshold:
            return logging.Formatter(fmt, datefmt=datefmt)
    return logging.Formatter(_CONSOLE_PLAIN)


def setup_logging(
    level: int | str = DEFAULT_LEVEL,
    log_file: str | None = None,
    log_file_level: int | str | None = None,
) -> None:
    """Replace the root logger's handlers with wp-now's console (and file) output."""
    console_level = level if isinstance(level, int) else parse_level(level)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(console_formatter(console_level))
    handlers: list[logging.Handler] = [console]

    if log_file:
        if log_file_level is None:
            file_level = console_level
        elif isinstance(log_file_level, int):
            file_level = log_file_level
        else:
            file_level = parse_level(log_file_level)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(file_level)
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt=_FILE_DATEFMT))
        handlers.append(file_handler)

    root = logging.getLogger()
    root.handlers[:] = handlers
    root.setLevel(min(h.level for h in handlers))


def cli_level(verbose: bool, quiet: bool, debug: bool, env_level: str | None) -> int:
    if debug:
        return logging.DEBUG
    if verbose:
        return logging.INFO
    if quiet:
        return logging.ERROR
    return parse_level(env_level)


def configure_cli_logging(
    verbose: bool = False,
    quiet: bool = False,
    debug: bool = False,
    environ: Mapping[str, str] | None = None,
) -> int:
    """Set up logging from the global CLI flags and WP_NOW_LOG_* variables.

    Returns:
        The console level that was applied.
    """
    env = os.environ if environ is None else environ
    level = cli_level(verbose, quiet, debug, env.get(LOG_LEVEL_ENV))
    setup_logging(
        level=level,
        log_file=env.get(LOG_FILE_ENV) or None,
        log_file_level=env.get(LOG_FILE_LEVEL_ENV) or None,
    )
    return level
