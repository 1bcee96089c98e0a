"""Logging setup shared by the resgen pipeline stages."""

from __future__ import annotations

import logging
from pathlib import Path

ROOT_LOGGER = "resgen"
CONSOLE_FORMAT = "[resgen] %(levelname)s %(message)s"
VERBOSE_FORMAT = "[resgen] %(levelname)s %(name)s: %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(stage: str | None = None) -> logging.Logger:
    """Logger for one pipeline stage: ``get_logger("loader")`` is ``resgen.loader``."""
    return logging.getLogger(f"{ROOT_LOGGER}.{stage}" if stage else ROOT_LOGGER)


def console_level(*, verbose: bool = False, quiet: bool = False) -> int:
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    return logging.INFO


def configure_logging(
    *, verbose: bool = False, quiet: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Send resgen records to stderr and, optionally, to ``log_file``.

    Verbose console output names the emitting stage; ``quiet`` keeps only
    warnings and errors. The log file always records debug detail. Calling
    this again replaces the handlers installed by the previous call.
    """
    level = console_level(verbose=verbose, quiet=quiet)
    logger = get_logger()
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(logging.Formatter(VERBOSE_FORMAT if verbose else CONSOLE_FORMAT))
    logger.addHandler(console)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        sink = logging.FileHandler(log_file, encoding="utf-8")
        sink.setLevel(logging.DEBUG)
        sink.setFormatter(logging.Formatter(FILE_FORMAT))
        logger.addHandler(sink)

    logger.setLevel(logging.DEBUG if log_file is not None else level)
    return logger


__all__ = ["configure_logging", "console_level", "get_logger"]
