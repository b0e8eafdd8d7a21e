"""Logging and observability configuration using Pydantic Logfire.

This module provides standardized logging utilities and configuration.
All modules should use Python's standard logging library (logging.getLogger(__name__)),
and Logfire will automatically capture and enrich these logs.

Standard usage:
    import logging
    logger = logging.getLogger(__name__)
    logger.info("Message", extra={"key": "value"})

Structured logging utilities:
    log_with_context(logger, "info", "Message", task_id="123", page=2)
"""

import logging

import httpx
import logfire

from src.core.config import settings


def configure_logfire() -> None:
    """Configure Pydantic Logfire with token from environment.

    Automatically integrates with Python's standard logging to capture all log records.
    In production a missing token is a configuration error rather than a silent no-op.

    Raises:
        ValueError: If `environment` is "production" and no Logfire token is set
    """
    token = settings.logfire_token
    if settings.environment == "production":
        token = settings.require_credential("logfire_token", "Logfire")

    logfire.configure(
        token=token,
        service_name="taskboard-client",
        service_version="0.1.0",
        environment=settings.environment,
        send_to_logfire="if-token-present",
    )

    logger = logging.getLogger(__name__)
    logger.info("Logfire configured successfully")


def instrument_httpx(client: httpx.AsyncClient) -> None:
    """Add Logfire instrumentation to the Task Repository HTTP client."""
    logfire.instrument_httpx(client)
    logger = logging.getLogger(__name__)
    logger.info("httpx instrumentation configured")


def span(name: str) -> logfire.LogfireSpan:
    """Create a custom span for service layer functions.

    Usage:
        with span("fetch_orchestrator.list_tasks"):
            # Your service logic here
            pass
    """
    return logfire.span(name)


def log_with_context(
    logger: logging.Logger,
    level: str,
    message: str,
    **context: object,
) -> None:
    """Log a message with structured context fields.

    Args:
        logger: Logger instance to use
        level: Log level ("debug", "info", "warning", "error", "critical")
        message: Log message
        **context: Additional context fields (task_id, page, operation, etc.)

    Usage:
        log_with_context(logger, "info", "Task updated", task_id="123", operation="update")
    """
    log_method = getattr(logger, level.lower())
    log_method(message, extra=context)
