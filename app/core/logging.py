"""
Logging configuration
"""

import sys

from loguru import logger

from app.core.config import settings


def setup_logging():
    """Setup logging configuration"""
    # Remove default handler
    logger.remove()

    if settings.log_format == "json":
        logger.add(sys.stderr, level=settings.log_level.upper(), serialize=True)
        return

    # Add console handler
    logger.add(
        sys.stderr,
        level=settings.log_level.upper(),
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level> | {extra}",
        colorize=True,
    )


# Create logger instance
log = logger
