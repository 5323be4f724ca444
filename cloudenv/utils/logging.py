"""
Logging utilities with prefixed loggers for easier debugging.

Usage:
    from cloudenv.utils.logging import get_logger

    logger = get_logger(__name__, prefix="Credentials")
    logger.info("Resolving credentials")  # Output: [Credentials] Resolving credentials
"""

import logging
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class PrefixedLogger(logging.LoggerAdapter):
    """Logger adapter that adds a prefix to all log messages."""

    def __init__(self, logger: logging.Logger, prefix: str):
        super().__init__(logger, {})
        self.prefix = f"[{prefix}]"

    def process(self, msg, kwargs):
        """Add prefix to the message."""
        return f"{self.prefix} {msg}", kwargs


def get_logger(name: str, prefix: Optional[str] = None) -> logging.Logger:
    """
    Get a logger with an optional prefix.

    Args:
        name: Logger name (typically __name__)
        prefix: Optional prefix to add to all messages (e.g., "Store", "Credentials")

    Returns:
        Logger instance (with prefix adapter if prefix is provided)
    """
    base_logger = logging.getLogger(name)

    if prefix:
        return PrefixedLogger(base_logger, prefix)

    return base_logger


def configure_logging(level: Union[str, int, None] = None) -> None:
    """
    Configure root logging for applications embedding cloudenv.

    Args:
        level: Level name or number. Defaults to LOG_LEVEL from settings.
    """
    if level is None:
        from cloudenv.config.settings import get_settings
        level = get_settings().LOG_LEVEL

    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(level=level, format=LOG_FORMAT)
