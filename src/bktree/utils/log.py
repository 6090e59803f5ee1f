"""Console logging for the ``bktree`` logger.

Library modules log through ``logging.getLogger(__name__)``; only the CLI
attaches a handler.
"""
from __future__ import annotations

import logging

_LOGGER_NAME = "bktree"
_logger: logging.Logger | None = None


def setup_logging(verbose: bool = False) -> logging.Logger:
    global _logger
    level = logging.DEBUG if verbose else logging.WARNING
    if _logger is not None:
        _logger.setLevel(level)
        return _logger

    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)

    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    ch = logging.StreamHandler()
    ch.setFormatter(formatter)
    logger.addHandler(ch)

    _logger = logger
    return logger


def get_logger() -> logging.Logger:
    if _logger is None:
        return setup_logging()
    return _logger
