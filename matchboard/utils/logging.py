"""Logging utilities for the dashboard."""

import logging

DEFAULT_LOG_FILE = "/tmp/matchboard.log"

# Global state
_console_logging_enabled = True
_log_file = DEFAULT_LOG_FILE
_file_logger = None


def set_console_logging(enabled: bool):
    """Explicitly enable/disable console logging"""
    global _console_logging_enabled
    _console_logging_enabled = enabled


def set_log_file(path: str):
    """Send file logging somewhere else (takes effect immediately)"""
    global _log_file, _file_logger
    _log_file = path
    if _file_logger is not None:
        for handler in list(_file_logger.handlers):
            _file_logger.removeHandler(handler)
            handler.close()
        _file_logger = None


def _get_file_logger() -> logging.Logger:
    global _file_logger

    if _file_logger is None:
        _file_logger = logging.getLogger("matchboard_file")
        _file_logger.setLevel(logging.DEBUG)
        file_handler = logging.FileHandler(_log_file)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")
        )
        _file_logger.addHandler(file_handler)
        _file_logger.propagate = False
    return _file_logger


def log(message: str, level: int = logging.INFO):
    """
    Operator logging:
    - Always logs to file so an unattended display leaves a trail
    - Also prints to the console unless the terminal display owns the screen
    """
    _get_file_logger().log(level, message)

    if _console_logging_enabled:
        print(message)
