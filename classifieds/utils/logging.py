"""Unified logging configuration for the classifieds data-access layer.

Every module logs through a child of the ``classifieds`` parent logger, which
owns a formatted console handler. ``setup_logging`` optionally adds a rotating
file handler under the workspace logs directory.
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

from classifieds.settings import settings

LOG_FORMAT = "[%(asctime)s.%(msecs)03d][%(levelname)s][%(filename)s:%(lineno)d]: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

ROOT_LOGGER_NAME = "classifieds"


def _ensure_root_logger_configured():
    """
    Ensure the parent logger is configured with a console handler.
    This is called automatically on module import.
    """
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)

    has_formatted_handler = any(
        isinstance(h, logging.StreamHandler)
        and h.formatter
        and "%(asctime)s" in (h.formatter._fmt if hasattr(h.formatter, "_fmt") else "")
        for h in root_logger.handlers
    )

    if not has_formatted_handler:
        root_logger.handlers.clear()

        console_handler = logging.StreamHandler()
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        root_logger.addHandler(console_handler)

        root_logger.setLevel(logging.DEBUG if settings.debug else logging.INFO)

        # Prevent propagation to root logger
        root_logger.propagate = False


def setup_logging(log_name: str = "classifieds") -> logging.Logger:
    """
    Setup logging with console and rotating file output.

    Log file path pattern: {workspace}/logs/{log_name}.log

    Args:
        log_name: The name of the log file (without .log extension).

    Returns:
        Configured logger instance
    """
    _ensure_root_logger_configured()

    log_dir = _get_logs_root()
    logger = logging.getLogger(f"{ROOT_LOGGER_NAME}.{log_name}")

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        log_file_path = os.path.join(log_dir, f"{log_name}.log")

        root_logger = logging.getLogger(ROOT_LOGGER_NAME)
        if not any(isinstance(h, RotatingFileHandler) and h.baseFilename == log_file_path for h in root_logger.handlers):
            file_handler = RotatingFileHandler(
                log_file_path,
                maxBytes=settings.log_max_bytes,
                backupCount=settings.log_backup_count,
                encoding="utf-8",
            )
            file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
            root_logger.addHandler(file_handler)

        logger.propagate = True

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: Logger name, typically __name__ of the calling module

    Returns:
        Logger instance
    """
    _ensure_root_logger_configured()

    if name != ROOT_LOGGER_NAME and not name.startswith(f"{ROOT_LOGGER_NAME}."):
        name = f"{ROOT_LOGGER_NAME}.{name}"

    return logging.getLogger(name)


def _get_logs_root() -> Path | None:
    """Logs directory for the current environment, or None if it cannot be created."""
    logs_root = settings.get_logs_root()
    if _can_create_dir(logs_root):
        return logs_root
    return None


def _can_create_dir(path: Path) -> bool:
    """Check if a directory can be created."""
    try:
        path.mkdir(parents=True, exist_ok=True)
        return True
    except (OSError, PermissionError):
        return False


_ensure_root_logger_configured()
