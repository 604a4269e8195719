"""Logging helpers."""

from __future__ import annotations

import logging

from rich.logging import RichHandler

_ROOT_LOGGER_NAME = "turbogrid"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the package logger, or one of its children when *name* is given."""

    if name is None or name == _ROOT_LOGGER_NAME:
        return logging.getLogger(_ROOT_LOGGER_NAME)
    if name.startswith(f"{_ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_ROOT_LOGGER_NAME}.{name}")


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Attach a single :class:`RichHandler` to the package logger.

    Calling this more than once replaces the previous handler instead of
    stacking duplicates, so the CLI can invoke it per command.
    """

    logger = get_logger()
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)
    handler = RichHandler(show_path=False, rich_tracebacks=verbose)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    return logger


__all__ = ["get_logger", "setup_logging"]
