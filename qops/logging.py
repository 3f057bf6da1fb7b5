"""Logging utilities for qops.

All loggers live under the ``qops.`` namespace, write to stderr by default
and do not propagate to the root logger.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

_DEFAULT_FORMAT = "[%(levelname)s] %(name)s: %(message)s"

# Settings applied to loggers created after a configure_logging() call
_DEFAULT_LEVEL = logging.WARNING
_format_string = _DEFAULT_FORMAT
_stream: Optional[object] = None

_loggers: dict[str, logging.Logger] = {}


def _resolve_level(level: int | str) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.WARNING)
    return level


def _make_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler(_stream if _stream is not None else sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_format_string))
    return handler


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get or create a qops logger.

    Loggers are cached so that repeated calls never stack handlers. Pass
    ``__name__`` from the calling module; names outside the ``qops``
    namespace are prefixed with ``qops.``.

    Args:
        name: Logger name. If None, returns the package-level logger.

    Returns:
        Configured logger instance.

    Example:
        >>> from qops.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.debug("applying circuit")
    """
    if name is None:
        name = "qops"

    if name == "qops" or name.startswith("qops."):
        logger_name = name
    else:
        logger_name = f"qops.{name}"

    if logger_name in _loggers:
        return _loggers[logger_name]

    logger = logging.getLogger(logger_name)

    if not logger.handlers:
        logger.setLevel(_DEFAULT_LEVEL)
        logger.addHandler(_make_handler(_DEFAULT_LEVEL))
        logger.propagate = False

    _loggers[logger_name] = logger
    return logger


def set_log_level(level: int | str) -> None:
    """Set the logging level for every qops logger.

    Args:
        level: Logging level (``logging.DEBUG`` etc.) or its name
            (``"DEBUG"``, ``"INFO"``, ...).

    Example:
        >>> import logging
        >>> from qops.logging import set_log_level
        >>> set_log_level(logging.DEBUG)
    """
    level = _resolve_level(level)

    for logger in _loggers.values():
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)

    global _DEFAULT_LEVEL
    _DEFAULT_LEVEL = level


def configure_logging(
    level: int | str = logging.WARNING,
    format_string: Optional[str] = None,
    stream: Optional[object] = None,
) -> None:
    """Reconfigure level, format and output stream of qops logging.

    Existing loggers get their handlers replaced; loggers created later
    pick up the same settings.

    Args:
        level: Logging level (default: WARNING).
        format_string: Custom format string. If None, uses
            ``[LEVEL] name: message``.
        stream: Output stream (default: sys.stderr).

    Example:
        >>> import logging
        >>> from qops.logging import configure_logging
        >>> configure_logging(level=logging.INFO)
    """
    global _DEFAULT_LEVEL, _format_string, _stream

    _DEFAULT_LEVEL = _resolve_level(level)
    _format_string = format_string if format_string is not None else _DEFAULT_FORMAT
    _stream = stream

    for logger in _loggers.values():
        logger.setLevel(_DEFAULT_LEVEL)
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
        logger.addHandler(_make_handler(_DEFAULT_LEVEL))


__all__ = ["get_logger", "set_log_level", "configure_logging"]
