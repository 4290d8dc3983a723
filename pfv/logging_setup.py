"""Centralized logging configuration for the ``pfv`` package.

- ``configure_logging(...)``: attach a single ``StreamHandler`` to the package
  root logger (``"pfv"``). Called once by the CLI at startup.
- ``get_logger(name)``: acquire a logger by name, ensuring the package root
  logger has at least a ``NullHandler`` when nothing configured it.

Library modules never attach their own handlers.
"""

import logging
import os
import sys
from typing import IO

PKG_LOGGER_NAME = "pfv"
LOG_LEVEL_ENV = "PFV_LOG_LEVEL"
DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

_CONFIGURED = False


def parse_level(level: int | str | None, default: int = logging.WARNING) -> int:
    """Resolve a logging level from an int, a level name or the environment.

    Args:
        level: Level as ``int`` or name (e.g., ``"DEBUG"``). If ``None``, the
            ``PFV_LOG_LEVEL`` environment variable is consulted.
        default: Level used when nothing else resolves.

    Returns:
        Numeric logging level.
    """
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        level = level.strip().upper()
        if level.isdigit():
            return int(level)
        numeric = getattr(logging, level, None)
        if isinstance(numeric, int):
            return numeric
        return default

    env_val = os.getenv(LOG_LEVEL_ENV)
    if env_val:
        return parse_level(env_val, default)
    return default


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] | None = None,
) -> None:
    """Configure the package root logger exactly once.

    Args:
        level: Logging level as ``int`` or level name. If ``None``, defaults to
            ``PFV_LOG_LEVEL`` when set, otherwise ``logging.WARNING``.
        fmt: Optional format string.
        stream: Output stream for the handler (defaults to ``sys.stderr``).
    """
    global _CONFIGURED
    if _CONFIGURED:
        return

    logger = logging.getLogger(PKG_LOGGER_NAME)

    # Drop placeholder NullHandlers added by get_logger
    for h in list(logger.handlers):
        if isinstance(h, logging.NullHandler):
            logger.removeHandler(h)

    resolved = parse_level(level)
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(resolved)
    handler.setFormatter(logging.Formatter(fmt or DEFAULT_FORMAT))

    logger.setLevel(resolved)
    logger.addHandler(handler)
    logger.propagate = False

    _CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger by name, silent until an application configures logging."""
    pkg_logger = logging.getLogger(PKG_LOGGER_NAME)
    if not _CONFIGURED and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)
