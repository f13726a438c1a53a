"""Procedure lifecycle errors.

These cover misuse of a procedure handle rather than procedural
outcomes: using a consumed stage, calling an operation the current
stage does not offer, or addressing an unknown motion.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

from motionflow.domain.exceptions import MotionflowError

if TYPE_CHECKING:
    from motionflow.domain.models.procedure import ProcedureStage


class ProcedureLifecycleError(MotionflowError):
    """Base class for procedure lifecycle errors."""

    pass


class ProcedureConsumedError(ProcedureLifecycleError):
    """Raised when a procedure is used after it advanced or was decided.

    Attributes:
        motion_id: Motion of the consumed procedure.
        stage: Stage the stale handle belongs to.
    """

    def __init__(self, motion_id: UUID, stage: ProcedureStage) -> None:
        self.motion_id = motion_id
        self.stage = stage
        super().__init__(
            f"Procedure for motion {motion_id} has already left stage {stage.value}"
        )


class StageOperationError(ProcedureLifecycleError):
    """Raised when an operation is not offered by the current stage.

    Attributes:
        stage: The current stage.
        operation: Name of the refused operation.
    """

    def __init__(self, stage: ProcedureStage, operation: str) -> None:
        self.stage = stage
        self.operation = operation
        super().__init__(f"Operation '{operation}' is not valid in stage {stage.value}")


class ProcedureNotFoundError(ProcedureLifecycleError):
    """Raised when no procedure is open for a motion."""

    def __init__(self, motion_id: UUID) -> None:
        self.motion_id = motion_id
        super().__init__(f"No procedure open for motion {motion_id}")


class ProcedureAlreadyOpenError(ProcedureLifecycleError):
    """Raised when a motion is opened a second time."""

    def __init__(self, motion_id: UUID) -> None:
        self.motion_id = motion_id
        super().__init__(f"A procedure is already open for motion {motion_id}")
