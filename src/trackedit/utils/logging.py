"""Logging helpers for hosts embedding the change tracker.

The package only ever logs through loggers below ``trackedit``; nothing is
emitted unless a host calls :func:`setup_logging` or configures logging
itself. Handlers installed here are attached to the package logger, so
the host's root configuration is left alone.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path
from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:  # pragma: no cover
    from ..settings import TrackerSettings
    from ..tracking.changes import TrackedChange

__all__ = [
    "PACKAGE_LOGGER",
    "format_change_set",
    "get_log_path",
    "get_logger",
    "setup_logging",
    "shutdown_logging",
]

PACKAGE_LOGGER = "trackedit"
LOG_FILE_NAME = "trackedit.log"
_DEFAULT_LOG_DIR = Path.home() / ".trackedit" / "logs"
_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_INSTALLED: list[logging.Handler] = []
_LOG_PATH: Path | None = None


def setup_logging(
    settings: "TrackerSettings | None" = None,
    *,
    level: int | None = None,
    log_dir: Path | str | None = None,
    console: bool = False,
    max_bytes: int = 1_000_000,
    backup_count: int = 3,
    force: bool = False,
) -> Path:
    """Route ``trackedit`` records to a rotating log file and optionally stderr.

    ``level`` wins over ``settings.effective_log_level``; without either the
    package logs at INFO. Calling again without ``force`` keeps the existing
    handlers and returns the current log path.
    """

    global _LOG_PATH
    if _INSTALLED and not force and _LOG_PATH is not None:
        return _LOG_PATH

    if level is None:
        level = settings.effective_log_level if settings is not None else logging.INFO

    target_dir = _resolve_log_dir(log_dir)
    target_dir.mkdir(parents=True, exist_ok=True)
    log_path = target_dir / LOG_FILE_NAME

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    _remove_installed(package_logger)

    formatter = logging.Formatter(fmt=_LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    file_handler = logging.handlers.RotatingFileHandler(
        log_path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
    )
    file_handler.setFormatter(formatter)
    _INSTALLED.append(file_handler)
    if console:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        _INSTALLED.append(console_handler)

    for handler in _INSTALLED:
        handler.setLevel(level)
        package_logger.addHandler(handler)
    package_logger.setLevel(level)

    _LOG_PATH = log_path
    return log_path


def shutdown_logging() -> None:
    """Detach and close the handlers installed by :func:`setup_logging`."""

    global _LOG_PATH
    _remove_installed(logging.getLogger(PACKAGE_LOGGER))
    _LOG_PATH = None


def get_logger(name: str) -> logging.Logger:
    """Return a logger below the package namespace."""

    if name != PACKAGE_LOGGER and not name.startswith(f"{PACKAGE_LOGGER}."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


def get_log_path() -> Path | None:
    """Return the currently configured log file if available."""

    return _LOG_PATH


def format_change_set(changes: Iterable["TrackedChange"]) -> str:
    """Render changes one per line for debug dumps."""

    lines = [
        f"  {change.kind.value:<9} {change.start}-{change.end} by {change.author!r} deleted={change.deleted_text()!r}"
        for change in changes
    ]
    return "\n".join(lines) if lines else "  (no changes)"


def _resolve_log_dir(log_dir: Path | str | None) -> Path:
    env_override = os.environ.get("TRACKEDIT_LOG_DIR")
    return Path(log_dir or env_override or _DEFAULT_LOG_DIR).expanduser()


def _remove_installed(package_logger: logging.Logger) -> None:
    while _INSTALLED:
        handler = _INSTALLED.pop()
        package_logger.removeHandler(handler)
        handler.close()
