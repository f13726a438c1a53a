"""Bootstrap wiring for logging configuration."""

from __future__ import annotations

from motionflow.infrastructure.observability import (
    configure_structlog as _configure_structlog,
)


def configure_structlog(environment: str, level: str | None = None) -> None:
    """Configure structlog for the given environment."""
    _configure_structlog(environment=environment, level=level)


__all__ = ["configure_structlog"]
