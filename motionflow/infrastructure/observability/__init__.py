"""Observability for motionflow: structlog configuration and motion context."""

from motionflow.infrastructure.observability.logging import (
    configure_structlog,
    get_logger_for_service,
)
from motionflow.infrastructure.observability.motion_context import (
    bind_motion_context,
    get_motion_context,
    motion_context_processor,
)

__all__ = [
    "bind_motion_context",
    "configure_structlog",
    "get_logger_for_service",
    "get_motion_context",
    "motion_context_processor",
]
