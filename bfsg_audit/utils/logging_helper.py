# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Error handling utilities for the bfsg_audit package.

This module provides standardized error handling mechanisms, including custom
exceptions and error logging utilities to ensure consistent error handling
across all modules.
"""

import logging
import sys
from typing import Optional


class BfsgAuditError(Exception):
    """Base exception class for all bfsg_audit errors."""


class DocumentError(BfsgAuditError):
    """Raised when the document handed to the auditor cannot be traversed."""


class AccessibilityAuditError(BfsgAuditError):
    """Raised when there's an error during accessibility auditing."""


class ConfigurationError(BfsgAuditError):
    """Raised when there's an error in configuration."""


# Configure module-level logger
logger = logging.getLogger(__name__)


def setup_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Set up a logger with standardized formatting.

    Args:
        name: The logger name, typically __name__ of the calling module
        level: The logging level (default: INFO if not in debug mode)

    Returns:
        A configured logger instance
    """
    logger_obj = logging.getLogger(name)

    if level is None:
        # Follow the root logger when it was put in debug mode (--debug flag)
        if logging.getLogger().level <= logging.DEBUG:
            level = logging.DEBUG
        else:
            level = logging.INFO

        logger.debug(f"Setting logger {name} level to {logging.getLevelName(level)}")

    # Always set the level explicitly to override inheritance
    logger_obj.setLevel(level)

    # Ensure propagation is enabled
    logger_obj.propagate = True

    if not logger_obj.handlers:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )

        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(formatter)
        logger_obj.addHandler(handler)

    return logger_obj


def set_package_level(level: int) -> None:
    """
    Apply a logging level to every logger created for this package.

    Args:
        level: The logging level to apply
    """
    for name in list(logging.Logger.manager.loggerDict):
        if name.startswith("bfsg_audit"):
            logger_obj = logging.getLogger(name)
            logger_obj.setLevel(level)
            for handler in logger_obj.handlers:
                handler.setLevel(level)


def log_exception(
    logger: logging.Logger,
    exception: Exception,
    message: str = "An error occurred",
    level: int = logging.ERROR,
    include_traceback: bool = True,
) -> None:
    """
    Log an exception with consistent formatting.

    Args:
        logger: The logger instance to use
        exception: The exception to log
        message: Optional custom message
        level: The logging level to use
        include_traceback: Whether to include the full traceback
    """
    log_msg = f"{message}: {describe_exception(exception)}"

    if include_traceback:
        logger.log(level, log_msg, exc_info=exception)
    else:
        logger.log(level, log_msg)


def describe_exception(exception: Exception) -> str:
    """Return a short "Type: message" description of an exception."""
    return f"{type(exception).__name__}: {exception}"
