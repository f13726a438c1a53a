"""Domain errors for motionflow.

Provides specific exception classes for different failure scenarios.
All exceptions inherit from MotionflowError.
"""

from motionflow.domain.errors.procedure import (
    ProcedureAlreadyOpenError,
    ProcedureConsumedError,
    ProcedureLifecycleError,
    ProcedureNotFoundError,
    StageOperationError,
)
from motionflow.domain.errors.roster import (
    ForeignPersonIdError,
    RosterError,
    SampleSizeExceedsPopulationError,
)
from motionflow.domain.errors.transition import (
    DeadlineNotReachedError,
    MotionRejectedError,
    ThresholdNotMetError,
    TransitionError,
)
from motionflow.domain.errors.vote import IneligibleOrDuplicateVoteError, VoteError

__all__: list[str] = [
    "DeadlineNotReachedError",
    "ForeignPersonIdError",
    "IneligibleOrDuplicateVoteError",
    "MotionRejectedError",
    "ProcedureAlreadyOpenError",
    "ProcedureConsumedError",
    "ProcedureLifecycleError",
    "ProcedureNotFoundError",
    "RosterError",
    "SampleSizeExceedsPopulationError",
    "StageOperationError",
    "ThresholdNotMetError",
    "TransitionError",
    "VoteError",
]
