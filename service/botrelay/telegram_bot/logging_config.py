"""
Logging configuration for the webhook bots.
"""

import logging
import sys


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Setup logging with proper format and handlers."""

    # Create logger
    logger = logging.getLogger("botrelay")
    logger.setLevel(level.upper())

    # Remove existing handlers
    logger.handlers.clear()

    # Create console handler with formatting
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(logging.DEBUG)

    formatter = logging.Formatter(
        '[%(asctime)s] [%(name)s] [%(levelname)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    # Prevent propagation to root logger
    logger.propagate = False

    return logger


# Global logger instance
bot_logger = setup_logging()
