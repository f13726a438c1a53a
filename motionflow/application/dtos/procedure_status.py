"""Procedure status snapshots.

Pydantic models handed to collaborators that observe a procedure:
current stage, tallies, eligible-voter view, debate deadline and final
outcome. ``model_dump(mode="json")`` yields plain data.

Person ids are exposed by their roster index only.
"""

from datetime import datetime
from enum import Enum
from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer

from motionflow.domain.models.procedure import (
    Decision,
    Outcome,
    PetitionProcedure,
    Procedure,
    ProcedureStage,
    PrototypeProcedure,
    ProposalProcedure,
    ReferendumProcedure,
)

# ISO 8601 with Z suffix
DateTimeWithZ = Annotated[
    datetime,
    PlainSerializer(
        lambda v: v.isoformat().replace("+00:00", "Z") if v else None, return_type=str
    ),
]


class BallotChoice(str, Enum):
    """Side of a ballot.

    Choices:
        FOR: Vote to propose, approve or adopt (every stage)
        AGAINST: Vote against adoption (Referendum only)
    """

    FOR = "FOR"
    AGAINST = "AGAINST"


class StageTally(BaseModel):
    """Vote counts of the current stage.

    Attributes:
        votes_for: Proposal votes, approvals or votes for adoption.
        votes_against: Votes against adoption (Referendum only, else 0).
        votes_required: Votes for needed to advance, None where the stage
            is gated by time or plurality.
        voters: Number of people who have voted.
    """

    model_config = ConfigDict(frozen=True)

    votes_for: int = Field(default=0, ge=0)
    votes_against: int = Field(default=0, ge=0)
    votes_required: int | None = Field(default=None, ge=1)
    voters: int = Field(default=0, ge=0)


class ProcedureStatus(BaseModel):
    """Snapshot of a motion's procedure.

    Attributes:
        motion_id: The motion.
        title: Motion title.
        stage: Current stage, or None once decided.
        tally: Vote counts of the current stage.
        eligible_voters: Roster indexes of the current stage's electorate.
        end_date: Debate deadline (Proposal only).
        outcome: Final outcome once decided.
    """

    model_config = ConfigDict(frozen=True)

    motion_id: UUID
    title: str
    stage: ProcedureStage | None = None
    tally: StageTally = Field(default_factory=StageTally)
    eligible_voters: list[int] = Field(default_factory=list)
    end_date: DateTimeWithZ | None = None
    outcome: Outcome | None = None

    @classmethod
    def from_procedure(cls, procedure: Procedure) -> "ProcedureStatus":
        """Build a snapshot of a live procedure."""
        motion = procedure.motion
        base = {"motion_id": motion.motion_id, "title": motion.title, "stage": procedure.stage}

        if isinstance(procedure, PrototypeProcedure):
            return cls(
                **base,
                tally=StageTally(
                    votes_for=procedure.proposal_votes,
                    votes_required=procedure.votes_required,
                    voters=len(procedure.have_voted),
                ),
                eligible_voters=[pid.index for pid in motion.developers],
            )
        if isinstance(procedure, ProposalProcedure):
            return cls(**base, end_date=procedure.end_date)
        if isinstance(procedure, PetitionProcedure):
            return cls(
                **base,
                tally=StageTally(
                    votes_for=procedure.approval_votes,
                    votes_required=procedure.votes_required,
                    voters=len(procedure.have_voted),
                ),
                eligible_voters=[pid.index for pid in procedure.voter_ids],
            )
        if isinstance(procedure, ReferendumProcedure):
            return cls(
                **base,
                tally=StageTally(
                    votes_for=procedure.votes_for,
                    votes_against=procedure.votes_against,
                    voters=len(procedure.have_voted),
                ),
                eligible_voters=[pid.index for pid in motion.electors],
            )
        raise TypeError(f"Unknown procedure type: {type(procedure).__name__}")

    @classmethod
    def from_decision(cls, decision: Decision, title: str) -> "ProcedureStatus":
        """Build a snapshot of a decided motion."""
        return cls(
            motion_id=decision.motion_id,
            title=title,
            tally=StageTally(
                votes_for=decision.votes_for,
                votes_against=decision.votes_against,
                voters=decision.votes_for + decision.votes_against,
            ),
            outcome=decision.outcome,
        )
