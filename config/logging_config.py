"""Logging configuration.

Sets up console logging for scripts and services that use the storage helpers.
"""

import logging

from config.settings_helpers import get_setting

_NOISY_LOGGERS = ("botocore", "boto3", "urllib3", "httpx", "httpcore")


def setup_console_logging(level: str | None = None) -> logging.Logger:
    """Set up console logging.

    Args:
        level: Log level name. Defaults to STORAGE_LOG_LEVEL, then WARNING.

    Returns:
        The storage package logger.
    """
    console_level = level or get_setting("STORAGE_LOG_LEVEL", "WARNING")
    logging.basicConfig(
        level=getattr(logging, console_level.upper(), logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return logging.getLogger("storage")
