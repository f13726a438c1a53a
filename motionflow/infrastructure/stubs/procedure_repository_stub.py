"""Procedure repository stub implementation.

This module provides an in-memory implementation of
ProcedureRepositoryProtocol. Ballots are not persisted; the stub lives
as long as the process.
"""

from __future__ import annotations

from uuid import UUID

from motionflow.application.ports.procedure_repository import (
    ProcedureRepositoryProtocol,
)
from motionflow.domain.errors.procedure import (
    ProcedureAlreadyOpenError,
    ProcedureNotFoundError,
)
from motionflow.domain.models.motion import Motion
from motionflow.domain.models.procedure import Decision, Procedure


class ProcedureRepositoryStub(ProcedureRepositoryProtocol):
    """In-memory stub implementation of ProcedureRepositoryProtocol.

    Thread-safety note: This stub is NOT thread-safe. Callers serialise
    access per motion (see ProcedureService).

    Attributes:
        _procedures: Live procedure per in-flight motion.
        _motions: Every motion ever added.
        _decisions: Final decision per decided motion.
    """

    def __init__(self) -> None:
        """Initialize the stub with empty storage."""
        self._procedures: dict[UUID, Procedure] = {}
        self._motions: dict[UUID, Motion] = {}
        self._decisions: dict[UUID, Decision] = {}

    async def add(self, procedure: Procedure) -> None:
        motion = procedure.motion
        if motion.motion_id in self._motions:
            raise ProcedureAlreadyOpenError(motion.motion_id)
        self._motions[motion.motion_id] = motion
        self._procedures[motion.motion_id] = procedure

    async def get(self, motion_id: UUID) -> Procedure | None:
        return self._procedures.get(motion_id)

    async def get_motion(self, motion_id: UUID) -> Motion | None:
        return self._motions.get(motion_id)

    async def replace(self, procedure: Procedure) -> None:
        if procedure.motion_id not in self._procedures:
            raise ProcedureNotFoundError(procedure.motion_id)
        self._procedures[procedure.motion_id] = procedure

    async def record_decision(self, decision: Decision) -> None:
        self._procedures.pop(decision.motion_id, None)
        self._decisions[decision.motion_id] = decision

    async def get_decision(self, motion_id: UUID) -> Decision | None:
        return self._decisions.get(motion_id)

    def clear(self) -> None:
        """Clear all stored data (for testing)."""
        self._procedures.clear()
        self._motions.clear()
        self._decisions.clear()

    @property
    def in_flight_count(self) -> int:
        """Number of motions with a live procedure."""
        return len(self._procedures)
