"""
Logging for the chartcheck CLI.

Only the ``chartcheck`` logger tree is configured; helm and yamllint run
as subprocesses, so there is no third-party logging to tame. Under
pytest nothing here is called and records go to pytest's capture.

Console level: --debug / --verbose / --quiet  >  CHARTCHECK_LOG_LEVEL  >  WARNING.
CHARTCHECK_LOG_FILE adds a file that always records at DEBUG, so the
helm and yamllint command lines of a failed run can be read back.
"""

from __future__ import annotations

import logging
import os

PACKAGE_LOGGER = "chartcheck"

_CONSOLE_FORMATS: dict[int, tuple[str, str | None]] = {
    logging.DEBUG: ("%(asctime)s %(levelname)-5s %(name)s:%(lineno)d: %(message)s", "%H:%M:%S"),
    logging.INFO: ("%(asctime)s %(message)s", "%H:%M:%S"),
}
_FILE_FORMAT = ("%(asctime)s %(levelname)-5s %(name)s: %(message)s", "%Y-%m-%d %H:%M:%S")


def level_from_flags(*, debug: bool = False, verbose: bool = False, quiet: bool = False) -> int:
    """Console level for the global CLI flags, falling back to CHARTCHECK_LOG_LEVEL."""
    if debug:
        return logging.DEBUG
    if verbose:
        return logging.INFO
    if quiet:
        return logging.ERROR
    name = os.environ.get("CHARTCHECK_LOG_LEVEL", "").upper()
    level = logging.getLevelName(name) if name else logging.WARNING
    return level if isinstance(level, int) else logging.WARNING


def setup_logging(level: int = logging.WARNING, log_file: str | None = None) -> logging.Logger:
    """Attach a stderr handler (and optionally a file handler) to the package logger.

    Calling it again replaces the handlers from the previous call.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    fmt, datefmt = _CONSOLE_FORMATS.get(level, ("%(message)s", None))
    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
    logger.addHandler(console)
    logger.setLevel(level)

    if log_file:
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter(*_FILE_FORMAT))
        logger.addHandler(fh)
        logger.setLevel(logging.DEBUG)

    return logger
