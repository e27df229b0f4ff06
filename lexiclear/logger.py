"""
Logging setup for LexiClear.
"""

import logging
import sys
from typing import Iterable, Optional


_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logger(level: str = "INFO", name: str = "lexiclear") -> logging.Logger:
    """
    Configure the package logger with a single stdout handler.

    Calling it again only updates the level.

    Args:
        level: Log level name
        name: Logger name

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False

    has_console_handler = any(
        isinstance(handler, logging.StreamHandler) and getattr(handler, "stream", None) is sys.stdout
        for handler in logger.handlers
    )
    if not has_console_handler:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(handler)

    for handler in logger.handlers:
        handler.setLevel(level)

    return logger


def mask_secret(text: Optional[str], secrets: Iterable[Optional[str]]) -> Optional[str]:
    """Replace every configured secret found in text with ***."""
    if not text:
        return text
    masked = str(text)
    for secret in secrets:
        if secret:
            masked = masked.replace(secret, "***")
    return masked
