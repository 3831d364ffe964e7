"""
Structured Logger Module

Configures structlog on top of the standard library so every log line carries
the component and, for dashboard requests, the role and operation that
produced it.

Example Usage:
    from app.core.logging import get_logger

    logger = get_logger(component="dashboard_service", role="supervisor")
    logger.info("aggregation_started", operation="supervisor_analytics")
    logger.exception("aggregation_failed", operation="supervisor_analytics")
"""

import logging
import sys

import structlog
from structlog.types import BindableLogger, EventDict, WrappedLogger

SENSITIVE_FIELDS = {"password", "token", "secret", "credential", "authorization"}


def mask_credentials(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """
    Processor to mask sensitive values in log output.

    Matches a sensitive word as the whole key or as an underscore/hyphen
    separated part of it (``access_token``, ``jwt-secret``).
    """
    for key in list(event_dict.keys()):
        key_lower = key.lower()
        for sensitive in SENSITIVE_FIELDS:
            if (
                key_lower == sensitive
                or key_lower.endswith(f"_{sensitive}")
                or key_lower.endswith(f"-{sensitive}")
                or key_lower.startswith(f"{sensitive}_")
                or key_lower.startswith(f"{sensitive}-")
            ):
                event_dict[key] = "***MASKED***"
                break

    return event_dict


def configure_logging(log_level: str = "INFO", json_output: bool = True) -> None:
    """
    Configure stdlib logging and structlog processors.

    Args:
        log_level: Logging level name (default: "INFO")
        json_output: JSON lines when True, colored console output otherwise
    """
    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, log_level.upper(), logging.INFO),
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            mask_credentials,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(**context) -> BindableLogger:
    """
    Get structured logger with bound context.

    Args:
        **context: key/values attached to every event (component, role, operation...)
    """
    logger = structlog.get_logger()
    if context:
        logger = logger.bind(**context)
    return logger
