"""
Structured logging for shopcart

structlog over the stdlib ``logging`` module. Level, renderer and the service
name come from ``Config``; components get their own bound logger through
``get_logger``.
"""
import logging
import sys
from typing import Any, Optional

import structlog


# Driver loggers kept at WARNING or above
QUIET_LOGGERS = ("pymongo",)


def _renderer(log_format: str):
    if log_format == "console":
        return structlog.dev.ConsoleRenderer(colors=False)
    return structlog.processors.JSONRenderer()


def configure_logging(
    service_name: str,
    log_level: str = "INFO",
    log_format: str = "json",
) -> structlog.BoundLogger:
    """
    Configure structlog and the stdlib root logger.

    Args:
        service_name: Added to every event as ``service``
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_format: "json" for one JSON object per line, "console" for local runs

    Returns:
        Logger bound to the service name
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            _renderer(log_format),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(service=service_name)

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level, force=True)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    return structlog.get_logger("shopcart")


def get_logger(component: Optional[str] = None, **initial_values: Any) -> structlog.BoundLogger:
    """
    Logger for a shopcart component, e.g. ``get_logger("cart_service")``

    The logger stays lazy, so it follows whatever ``configure_logging`` set up
    even when created at import time.
    """
    if component:
        initial_values["component"] = component
    return structlog.get_logger("shopcart", **initial_values)
