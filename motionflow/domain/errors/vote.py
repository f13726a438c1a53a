"""Vote registration errors.

A vote is refused when the voter is not part of the electorate of the
current stage, or has already voted in that stage. Refusals never
change any tally.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from motionflow.domain.exceptions import MotionflowError

if TYPE_CHECKING:
    from motionflow.domain.models.procedure import ProcedureStage
    from motionflow.domain.models.roster import PersonId

INELIGIBLE = "ineligible"
DUPLICATE = "duplicate"


class VoteError(MotionflowError):
    """Base class for vote registration errors."""

    pass


class IneligibleOrDuplicateVoteError(VoteError):
    """Raised when a vote is cast by an ineligible or repeat voter.

    The eligible electorate depends on the stage: the motion's developers
    in Prototype, the sampled petitioners in Petition and the full
    electorate in Referendum.

    Attributes:
        person_id: The voter whose ballot was refused.
        stage: Stage in which the vote was attempted.
        reason: Either "ineligible" or "duplicate".
    """

    def __init__(
        self,
        person_id: PersonId,
        stage: ProcedureStage,
        reason: str,
    ) -> None:
        """Initialize the error.

        Args:
            person_id: The voter whose ballot was refused.
            stage: Stage in which the vote was attempted.
            reason: Either "ineligible" or "duplicate".
        """
        self.person_id = person_id
        self.stage = stage
        self.reason = reason

        if reason == DUPLICATE:
            detail = "has already voted in this stage"
        else:
            detail = "is not eligible to vote in this stage"
        super().__init__(f"{stage.value}: person {person_id.index} {detail}")

    @property
    def is_duplicate(self) -> bool:
        """True if the voter was eligible but had already voted."""
        return self.reason == DUPLICATE
