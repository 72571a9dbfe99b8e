"""
Logging configuration for the application.

This module sets up logging with different levels for different environments.
It uses loguru for more advanced logging capabilities.
"""

import sys

from loguru import logger

from .config import settings, Environment


def setup_logging() -> None:
    """Set up logging configuration based on the environment."""

    # Remove default logger
    logger.remove()

    log_settings = settings.logging

    if settings.environment == Environment.PRODUCTION:
        # Production logging - structured, no colors
        logger.add(
            sys.stdout,
            format=log_settings.format,
            level=log_settings.level,
            colorize=False,
            serialize=True,
        )
    else:
        # Development/Testing logging - more verbose, colored
        logger.add(
            sys.stdout,
            format=log_settings.format,
            level=log_settings.level,
            colorize=True,
            backtrace=True,
            diagnose=settings.environment != Environment.TESTING,
        )

    if log_settings.file_enabled:
        logger.add(
            log_settings.file_path,
            format=log_settings.format,
            level=log_settings.level,
            rotation="10 MB",
            retention="14 days",
            enqueue=True,
        )

    logger.info(f"Logging initialized for environment: {settings.environment.value}")


# Initialize logging
setup_logging()
