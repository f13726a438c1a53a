"""Motion context for structured logs.

This module keeps the id of the motion being handled in a context
variable, so every log entry emitted while the service works on a
motion carries its ``motion_id`` across await points.

Usage:
    # In services
    with bind_motion_context(motion.motion_id):
        ...

    # In structlog configuration
    processors = [..., motion_context_processor, ...]
"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any
from uuid import UUID

# Empty string when no motion is being handled
_motion_id: ContextVar[str] = ContextVar("motion_id", default="")


def get_motion_context() -> str:
    """Get the motion id of the current context.

    Returns:
        The motion id or empty string if not set.
    """
    return _motion_id.get()


@contextmanager
def bind_motion_context(motion_id: UUID | str) -> Iterator[None]:
    """Set the motion id for the duration of a block.

    Args:
        motion_id: The motion being handled.
    """
    token = _motion_id.set(str(motion_id))
    try:
        yield
    finally:
        _motion_id.reset(token)


def motion_context_processor(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Structlog processor to add motion_id to every log entry.

    An explicit ``motion_id`` in the entry is kept as is.

    Args:
        logger: The logger instance (unused, required by structlog).
        method_name: The logging method name (unused, required by structlog).
        event_dict: The event dictionary to modify.

    Returns:
        The event dictionary with motion_id added when one is bound.
    """
    motion_id = _motion_id.get()
    if motion_id and "motion_id" not in event_dict:
        event_dict["motion_id"] = motion_id
    return event_dict
