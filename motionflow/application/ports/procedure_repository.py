"""Procedure repository port.

This module defines the interface for keeping the current procedure of
each in-flight motion, and the final decision once one is taken.

Only the live handle of a motion is ever stored: after a transition the
service replaces the consumed handle with the new stage.
"""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from motionflow.domain.models.motion import Motion
from motionflow.domain.models.procedure import Decision, Procedure


class ProcedureRepositoryProtocol(Protocol):
    """Protocol for in-flight procedure storage.

    Methods:
        add: Store the first procedure of a motion
        get: Retrieve the current procedure of a motion
        get_motion: Retrieve a motion, in flight or decided
        replace: Swap in the procedure produced by a transition
        record_decision: Store the final decision and drop the procedure
        get_decision: Retrieve the final decision of a motion
    """

    async def add(self, procedure: Procedure) -> None:
        """Store the first procedure of a motion.

        Raises:
            ProcedureAlreadyOpenError: If the motion is already known.
        """
        ...

    async def get(self, motion_id: UUID) -> Procedure | None:
        """Return the current procedure, or None if unknown or decided."""
        ...

    async def get_motion(self, motion_id: UUID) -> Motion | None:
        """Return the motion, in flight or decided, or None if unknown."""
        ...

    async def replace(self, procedure: Procedure) -> None:
        """Store the procedure produced by a transition.

        Raises:
            ProcedureNotFoundError: If the motion is not in flight.
        """
        ...

    async def record_decision(self, decision: Decision) -> None:
        """Store a final decision and drop the in-flight procedure."""
        ...

    async def get_decision(self, motion_id: UUID) -> Decision | None:
        """Return the final decision, or None if not yet decided."""
        ...
