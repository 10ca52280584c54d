"""
Logging Module
==============

Structured logging using structlog with JSON output for production
and colored console output for development.

Usage:
    from shared.logging import get_logger, setup_logging

    # Setup at application start
    setup_logging()

    # Get logger for a module
    logger = get_logger(__name__)

    # Log with context
    logger.info("evaluation_created", evaluation_id="123", tier="Tier2")
    logger.error("storage_error", error=str(e), collection="evaluations")
"""

from shared.logging.logger import (
    bind_context,
    censor_secrets,
    clear_context,
    get_logger,
    setup_logging,
)


__all__ = [
    "bind_context",
    "censor_secrets",
    "clear_context",
    "get_logger",
    "setup_logging",
]
