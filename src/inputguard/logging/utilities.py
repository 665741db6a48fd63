"""Logging utility functions."""

import logging
from typing import Any

from inputguard.errors import ErrorCode


def log_with_context(
    logger: logging.Logger,
    level: int,
    msg: str,
    **kwargs: Any,
) -> None:
    """
    Log with structured context fields.

    Args:
        logger: Logger instance
        level: Log level (logging.INFO, etc.)
        msg: Log message
        **kwargs: Additional context fields (error_code, hostname, etc.)

    Example:
        log_with_context(
            logger, logging.WARNING, "Unknown CSP directive",
            directive="report-uri",
        )
    """
    logger.log(level, msg, extra=kwargs)


def log_rejection(
    logger: logging.Logger,
    validator: str,
    code: ErrorCode,
    **kwargs: Any,
) -> None:
    """
    Log a validation rejection at DEBUG.

    Only the code, category and the non-secret fields passed in are
    recorded. Never pass raw passwords, secrets or email addresses.

    Args:
        logger: Logger instance
        validator: Validator name ("url", "path", "password", ...)
        code: Rejection code
        **kwargs: Additional context fields
    """
    if not logger.isEnabledFor(logging.DEBUG):
        return
    log_with_context(
        logger,
        logging.DEBUG,
        f"{validator} rejected: {code.value}",
        validator=validator,
        error_code=code.value,
        error_category=code.category.value,
        **kwargs,
    )
