"""Utility helpers."""

from .logging import format_change_set, get_log_path, get_logger, setup_logging, shutdown_logging

__all__ = ["format_change_set", "get_log_path", "get_logger", "setup_logging", "shutdown_logging"]
