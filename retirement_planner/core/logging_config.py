"""
Structured logging configuration.

This module sets up structured logging with JSON formatting for easy
parsing by log aggregation tools (Datadog, Loggly, ELK stack, etc.).

Usage:
    from retirement_planner.core.logging_config import setup_logging, get_logger

    # In main.py or app startup
    setup_logging()

    # In your code
    logger = get_logger(__name__)
    logger.info("projection_completed", retirement_age=65, depletion_age=None)
"""

import logging
import sys
from typing import Optional

import structlog
from pythonjsonlogger import jsonlogger

from retirement_planner.config import settings


def setup_logging() -> None:
    """
    Configure structured logging for the application.

    Sets up both stdlib logging and structlog for structured log output.
    In production, logs are JSON formatted for easy parsing by monitoring tools.
    In development, logs are human-readable text.
    """
    use_json = settings.LOG_FORMAT == "json" or settings.ENVIRONMENT == "production"

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    )

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if use_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    _configure_uvicorn_logging(use_json)

    if settings.ENVIRONMENT == "production":
        logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def _configure_uvicorn_logging(use_json: bool = False) -> None:
    """Configure uvicorn's access and error logs with JSON formatting."""
    if use_json:
        formatter = jsonlogger.JsonFormatter(
            "%(asctime)s %(name)s %(levelname)s %(message)s",
            rename_fields={"asctime": "timestamp", "levelname": "level"},
        )
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(formatter)

        for logger_name in ["uvicorn", "uvicorn.access", "uvicorn.error"]:
            logger = logging.getLogger(logger_name)
            logger.handlers.clear()
            logger.addHandler(handler)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Structured logger with context support

    Example:
        >>> from retirement_planner.core.logging_config import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.warning("province_not_found", province="XX")
    """
    return structlog.get_logger(name)


def log_projection(
    logger: structlog.stdlib.BoundLogger,
    jurisdiction: str,
    years_simulated: int,
    total_at_retirement: float,
    depletion_age: Optional[int],
    duration_ms: float,
    **kwargs,
) -> None:
    """Log a completed accumulation + withdrawal projection."""
    logger.info(
        "retirement_projection",
        jurisdiction=jurisdiction,
        years_simulated=years_simulated,
        total_at_retirement=round(total_at_retirement, 2),
        depletion_age=depletion_age,
        duration_ms=duration_ms,
        **kwargs,
    )
