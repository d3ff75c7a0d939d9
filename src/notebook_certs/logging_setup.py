"""Logging configuration for the CLI and for notebook kernels."""
from __future__ import annotations

import logging
import os
import sys
from typing import Any

LOG_LEVEL_ENV_VAR = "NOTEBOOK_CERTS_LOG_LEVEL"
LOG_FORMAT_ENV_VAR = "NOTEBOOK_CERTS_LOG_FORMAT"

PACKAGE_LOGGER = "notebook_certs"
DEFAULT_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

_LOG_LEVEL_ALIASES: dict[str, int] = {
    "verbose": logging.DEBUG,
    "debug": logging.DEBUG,
    "information": logging.INFO,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}

# Marks handlers installed here so reconfiguring only replaces our own.
_HANDLER_MARKER = "_notebook_certs_handler"

_CONFIGURED: set[str] = set()


class _MaxLevelFilter(logging.Filter):
    """Filter that allows log records up to ``max_level`` (inclusive)."""

    def __init__(self, max_level: int) -> None:
        super().__init__(name="")
        self.max_level = max_level

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: D401 - inherited docstring
        return record.levelno <= self.max_level


def resolve_level(level: str | int) -> int:
    """Map a level name, alias or number to a numeric logging level."""

    if isinstance(level, int):
        return level
    cleaned = level.strip().lower()
    if not cleaned:
        return logging.INFO
    if cleaned.isdigit():
        return int(cleaned)
    return _LOG_LEVEL_ALIASES.get(cleaned, logging.INFO)


def running_in_notebook() -> bool:
    """Return ``True`` inside a Jupyter/IPython kernel."""

    return "ipykernel" in sys.modules


def _build_handler(stream: Any, *, level: int, fmt: str) -> logging.Handler:
    handler = logging.StreamHandler(stream)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=fmt, datefmt="%Y-%m-%d %H:%M:%S"))
    setattr(handler, _HANDLER_MARKER, True)
    return handler


def _remove_own_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        if getattr(handler, _HANDLER_MARKER, False):
            logger.removeHandler(handler)


def configure_logging(
    *,
    level: str | int | None = None,
    force: bool = False,
    notebook: bool | None = None,
) -> logging.Logger:
    """Configure console logging and return the configured logger.

    By default (and always from the CLI) the root logger gets two handlers:
    DEBUG to WARNING on stdout, ERROR+ on stderr. In a notebook kernel
    (``notebook=True``, or auto-detected when ``notebook`` is ``None``) only
    the ``notebook_certs`` logger is configured and stops propagating, so the
    kernel's own root handlers are left in place.

    The level comes from ``level`` or ``NOTEBOOK_CERTS_LOG_LEVEL`` and the
    format from ``NOTEBOOK_CERTS_LOG_FORMAT``. Repeated calls are no-ops
    unless ``force`` is set.
    """

    if notebook is None:
        notebook = running_in_notebook()
    logger = logging.getLogger(PACKAGE_LOGGER if notebook else None)
    if logger.name in _CONFIGURED and not force:
        return logger

    requested_level: str | int = level if level is not None else os.getenv(LOG_LEVEL_ENV_VAR, "INFO")
    fmt = os.getenv(LOG_FORMAT_ENV_VAR, "").strip() or DEFAULT_LOG_FORMAT

    _remove_own_handlers(logger)
    logger.setLevel(resolve_level(requested_level))

    stdout_handler = _build_handler(sys.stdout, level=logging.NOTSET, fmt=fmt)
    stdout_handler.addFilter(_MaxLevelFilter(logging.WARNING))
    logger.addHandler(stdout_handler)
    logger.addHandler(_build_handler(sys.stderr, level=logging.ERROR, fmt=fmt))

    if notebook:
        logger.propagate = False

    _CONFIGURED.add(logger.name)
    return logger


__all__ = [
    "LOG_FORMAT_ENV_VAR",
    "LOG_LEVEL_ENV_VAR",
    "configure_logging",
    "resolve_level",
    "running_in_notebook",
]
