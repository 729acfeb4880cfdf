"""Package logger wiring.

Only the CLI calls :func:`configure_logging`; engine and store modules just
log through ``get_logger("expense_tracker.<module>")`` and stay silent when
embedded in another host.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

_PKG_LOGGER_NAME = "expense_tracker"
_LEVEL_ENV_VAR = "EXPENSE_TRACKER_LOG_LEVEL"
_DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

_handler: logging.Handler | None = None


def _parse_level(level: int | str | None) -> int:
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        name = level.strip().upper()
        if name.isdigit():
            return int(name)
        numeric = logging.getLevelName(name)
        if isinstance(numeric, int):
            return numeric
        return logging.INFO
    env_val = os.getenv(_LEVEL_ENV_VAR)
    if env_val:
        return _parse_level(env_val)
    return logging.INFO


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] | None = None,
) -> None:
    """Configure the package logger once per process.

    Parameters
    ----------
    level:
        ``int`` level or level name (``"DEBUG"``, ``"info"``...). ``None``
        falls back to ``EXPENSE_TRACKER_LOG_LEVEL`` and then ``INFO``.
    fmt:
        Optional format string for the handler.
    stream:
        Output stream; defaults to ``sys.stderr`` at call time.
    """

    global _handler
    if _handler is not None:
        return

    logger = logging.getLogger(_PKG_LOGGER_NAME)
    for h in list(logger.handlers):
        if isinstance(h, logging.NullHandler):
            logger.removeHandler(h)

    resolved = _parse_level(level)
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(resolved)
    handler.setFormatter(logging.Formatter(fmt or _DEFAULT_FORMAT))

    logger.setLevel(resolved)
    logger.addHandler(handler)
    # The CLI owns output; keep records off the root logger.
    logger.propagate = False
    _handler = handler


def reset_logging() -> None:
    """Detach the handler installed by :func:`configure_logging`.

    Used by tests and long-lived hosts that reconfigure between runs.
    """

    global _handler
    logger = logging.getLogger(_PKG_LOGGER_NAME)
    if _handler is not None:
        logger.removeHandler(_handler)
        _handler = None
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


def get_logger(name: str) -> logging.Logger:
    """Return ``logging.getLogger(name)`` with a silent default for library use."""

    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    if _handler is None and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)


__all__ = ["configure_logging", "get_logger", "reset_logging"]
