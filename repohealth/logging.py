"""Logging helpers for the repohealth CLI and service."""

from __future__ import annotations

import logging
from pathlib import Path

_ROOT_LOGGER = "repohealth"
_CONSOLE_FORMAT = "[repohealth] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a child of the ``repohealth`` logger."""
    return logging.getLogger(f"{_ROOT_LOGGER}.{name}" if name else _ROOT_LOGGER)


def resolve_level(*, verbose: bool = False, quiet: bool = False) -> int:
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    return logging.INFO


def configure_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    log_file: Path | None = None,
) -> logging.Logger:
    """Install console (and optionally file) handlers on the repohealth logger.

    Existing handlers are replaced so repeated CLI invocations in one process do
    not duplicate output. ``verbose`` wins over ``quiet``.
    """
    level = resolve_level(verbose=verbose, quiet=quiet)
    logger = logging.getLogger(_ROOT_LOGGER)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    logger.addHandler(console)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        sink = logging.FileHandler(log_file, encoding="utf-8")
        # File sink records DEBUG regardless of the console level.
        sink.setLevel(logging.DEBUG)
        sink.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(sink)
        logger.setLevel(logging.DEBUG)

    return logger


__all__ = ["configure_logging", "get_logger", "resolve_level"]
