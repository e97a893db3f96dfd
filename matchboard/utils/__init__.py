"""Shared helpers."""

from .logging import log, set_console_logging, set_log_file

__all__ = ["log", "set_console_logging", "set_log_file"]
