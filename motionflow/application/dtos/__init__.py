"""Application-layer DTOs for motionflow."""

from motionflow.application.dtos.procedure_status import (
    BallotChoice,
    ProcedureStatus,
    StageTally,
)

__all__ = ["BallotChoice", "ProcedureStatus", "StageTally"]
