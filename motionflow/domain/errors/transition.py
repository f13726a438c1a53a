"""Stage transition errors.

Every refused transition hands the caller's procedure back unchanged
through the ``procedure`` attribute, so no votes or state are lost and
the caller may retry after gathering more votes or waiting longer.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from motionflow.domain.exceptions import MotionflowError

if TYPE_CHECKING:
    from motionflow.domain.models.procedure import Decision, Procedure


class TransitionError(MotionflowError):
    """Base class for refused stage transitions.

    Attributes:
        procedure: The unchanged procedure the transition was attempted on.
            It remains live and usable.
    """

    def __init__(self, procedure: Procedure, message: str) -> None:
        self.procedure = procedure
        super().__init__(message)


class ThresholdNotMetError(TransitionError):
    """Raised when a stage's majority requirement is not yet satisfied.

    Attributes:
        procedure: The unchanged procedure.
        votes: Votes counted toward the threshold.
        required: Minimum number of votes needed to advance.
    """

    def __init__(
        self,
        procedure: Procedure,
        votes: int,
        required: int,
        message: str | None = None,
    ) -> None:
        """Initialize the error.

        Args:
            procedure: The unchanged procedure.
            votes: Votes counted toward the threshold.
            required: Minimum number of votes needed to advance.
            message: Optional override of the default message.
        """
        self.votes = votes
        self.required = required
        super().__init__(
            procedure,
            message
            or f"{procedure.stage.value}: threshold not met - "
            f"{votes} votes, {required} required",
        )


class MotionRejectedError(ThresholdNotMetError):
    """Raised by ``decide()`` when votes for do not exceed votes against.

    The referendum stays open; more ballots may still be registered
    and ``decide()`` attempted again.

    Attributes:
        procedure: The unchanged referendum procedure.
        decision: Snapshot of the rejected outcome and its tallies.
    """

    def __init__(self, procedure: Procedure, decision: Decision) -> None:
        self.decision = decision
        super().__init__(
            procedure,
            votes=decision.votes_for,
            required=decision.votes_against + 1,
            message=(
                f"Motion rejected: {decision.votes_for} for, "
                f"{decision.votes_against} against"
            ),
        )


class DeadlineNotReachedError(TransitionError):
    """Raised when the public debate period has not yet elapsed.

    Attributes:
        procedure: The unchanged proposal procedure.
        end_date: The debate deadline.
        now: The time at which the advance was attempted.
    """

    def __init__(self, procedure: Procedure, end_date: datetime, now: datetime) -> None:
        self.end_date = end_date
        self.now = now
        super().__init__(
            procedure,
            f"Debate ends at {end_date.isoformat()}, now is {now.isoformat()}",
        )

    @property
    def remaining_seconds(self) -> float:
        """Seconds left before the deadline is reached."""
        return (self.end_date - self.now).total_seconds()
