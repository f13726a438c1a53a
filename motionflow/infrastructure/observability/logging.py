"""structlog setup for motionflow.

Two renderers are supported: JSON lines for deployed services and a
coloured console renderer for local runs. Every entry carries the id of
the motion being handled, when the service has bound one.

Example entry (production):
    {"event": "procedure_advanced", "level": "info",
     "timestamp": "2026-01-01T00:00:00.000000Z", "motion_id": "...",
     "from_stage": "PROTOTYPE", "to_stage": "PROPOSAL"}

Call ``configure_structlog`` once at startup. Modules that log without a
service binding simply use ``structlog.get_logger()``.
"""

import logging
import os
from typing import cast

import structlog
from structlog.typing import Processor

from motionflow.infrastructure.observability.motion_context import (
    motion_context_processor,
)

LOG_LEVEL_ENV = "LOG_LEVEL"
DEFAULT_LOG_LEVEL = "INFO"

PRODUCTION = "production"
DEVELOPMENT = "development"


def _get_log_level(level_name: str | None = None) -> int:
    """Resolve a level name, falling back to LOG_LEVEL and then INFO."""
    name = (level_name or os.getenv(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL)).upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def _renderer(environment: str) -> Processor:
    if environment == PRODUCTION:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=True)


def configure_structlog(
    environment: str = PRODUCTION,
    *,
    level: str | None = None,
) -> None:
    """Configure structlog for motionflow.

    Args:
        environment: ``"production"`` renders JSON, anything else renders
            to the console.
        level: Minimum level name. Defaults to the LOG_LEVEL variable.
    """
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        cast(Processor, motion_context_processor),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if environment == PRODUCTION:
        # Tracebacks become a string field of the JSON entry
        processors.append(structlog.processors.format_exc_info)
    processors.append(_renderer(environment))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(_get_log_level(level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger_for_service(
    service_name: str, component: str = "procedure"
) -> structlog.BoundLogger:
    """Return a logger with ``service`` and ``component`` bound."""
    return structlog.get_logger().bind(
        service=service_name,
        component=component,
    )
