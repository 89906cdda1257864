"""Structured logging setup.

Every event carries the service name and version so logs from the API, the
CLI and the backend client can be told apart once aggregated.
"""

import logging
import sys
from typing import Any

import structlog

from tradedesk import __version__
from tradedesk.config import get_config

SERVICE_NAME = "tradedesk"


def add_service_context(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """structlog processor: tag events with service name, version and environment."""
    event_dict.setdefault("service", SERVICE_NAME)
    event_dict.setdefault("version", __version__)
    event_dict.setdefault("environment", get_config().environment)
    return event_dict


def configure_logging() -> None:
    """Configure structured logging for the API and the CLI."""
    config = get_config()

    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        add_service_context,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if config.json_logs:
        renderer: Any = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[*shared_processors, renderer],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # Route stdlib loggers (uvicorn, httpx) through the same stream
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=config.log_level,
    )
