"""Staged procedure for passing motions (the procedure state machine).

A motion is carried through four stages, each with its own electorate
and exit condition:

    PROTOTYPE -> PROPOSAL -> PETITION -> REFERENDUM -> {PASSED, REJECTED}

Prototype:
    The developers refine the motion in public. It is proposed once an
    absolute majority of developers votes for it (``devs // 2 + 1``).
Proposal:
    Development is frozen and the motion is debated in public until a
    deadline fixed on entry (now + debate duration).
Petition:
    The motion is shown to a random sample of the electorate. If an
    absolute majority of the sample approves, it goes to general vote.
    The sample replaces a quorum: a minority cannot block a majority
    through abstention.
Referendum:
    The motion is carried when there are more votes for than against.
    An even split is a rejection.

Each stage is its own class, so a stage only offers its own operations.
Transitions consume the source procedure: after a successful
``try_advance()`` the old handle raises ProcedureConsumedError on any use.
A refused transition raises a TransitionError carrying the unchanged,
still-live procedure so the caller may retry.

Every voter votes at most once per stage; a refused vote changes nothing.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import TYPE_CHECKING, ClassVar
from uuid import UUID

from structlog import get_logger

from motionflow.config.procedure_config import (
    DEFAULT_PROCEDURE_CONFIG,
    ProcedureConfig,
)
from motionflow.domain.errors.procedure import ProcedureConsumedError
from motionflow.domain.errors.transition import (
    DeadlineNotReachedError,
    MotionRejectedError,
    ThresholdNotMetError,
)
from motionflow.domain.errors.vote import (
    DUPLICATE,
    INELIGIBLE,
    IneligibleOrDuplicateVoteError,
)
from motionflow.domain.models.motion import Motion
from motionflow.domain.models.roster import PersonId
from motionflow.domain.primitives.majority import (
    has_absolute_majority,
    has_plurality,
    petition_sample_size,
    votes_required,
)

if TYPE_CHECKING:
    from motionflow.application.ports.time_authority import TimeAuthorityProtocol

logger = get_logger()


class ProcedureStage(Enum):
    """Stage of the procedure.

    States:
        PROTOTYPE: Developers vote to propose the motion
        PROPOSAL: Public debate until the deadline
        PETITION: Random sample of electors approves for general vote
        REFERENDUM: General vote of the full electorate (terminal stage)
    """

    PROTOTYPE = "PROTOTYPE"
    PROPOSAL = "PROPOSAL"
    PETITION = "PETITION"
    REFERENDUM = "REFERENDUM"

    def next_stage(self) -> ProcedureStage | None:
        """Return the stage entered on advance, or None for Referendum."""
        return _NEXT_STAGE[self]

    def is_terminal(self) -> bool:
        """Check if this stage ends in a decision rather than an advance."""
        return self.next_stage() is None


_NEXT_STAGE: dict[ProcedureStage, ProcedureStage | None] = {
    ProcedureStage.PROTOTYPE: ProcedureStage.PROPOSAL,
    ProcedureStage.PROPOSAL: ProcedureStage.PETITION,
    ProcedureStage.PETITION: ProcedureStage.REFERENDUM,
    ProcedureStage.REFERENDUM: None,
}


class Outcome(Enum):
    """Final outcome of a referendum."""

    PASSED = "PASSED"
    REJECTED = "REJECTED"


@dataclass(frozen=True, eq=True)
class Decision:
    """Outcome of a referendum together with its tallies.

    Attributes:
        motion_id: The decided motion.
        outcome: PASSED or REJECTED.
        votes_for: Votes for adoption.
        votes_against: Votes against adoption.
        decided_at: When the decision was taken (UTC).
    """

    motion_id: UUID
    outcome: Outcome
    votes_for: int
    votes_against: int
    decided_at: datetime

    @property
    def passed(self) -> bool:
        """True if the motion was carried."""
        return self.outcome is Outcome.PASSED


@dataclass
class VoteLedger:
    """Record of who voted in a stage, scoped to that stage's electorate.

    Attributes:
        eligible: Voters allowed to vote in the stage.
        voted: Voters who have voted, in order.
    """

    eligible: frozenset[PersonId]
    voted: list[PersonId] = field(default_factory=list)
    _voted_set: set[PersonId] = field(default_factory=set, init=False, repr=False)

    def admit(self, person_id: PersonId, stage: ProcedureStage) -> None:
        """Record a voter, refusing ineligible and repeat voters.

        Raises:
            IneligibleOrDuplicateVoteError: Nothing is recorded.
        """
        if person_id not in self.eligible:
            raise IneligibleOrDuplicateVoteError(person_id, stage, INELIGIBLE)
        if self.has_voted(person_id):
            raise IneligibleOrDuplicateVoteError(person_id, stage, DUPLICATE)
        self.voted.append(person_id)
        self._voted_set.add(person_id)

    def has_voted(self, person_id: PersonId) -> bool:
        """True if the person has voted in this stage."""
        return person_id in self._voted_set


@dataclass(frozen=True)
class _ProcedureContext:
    """Collaborators handed from stage to stage."""

    config: ProcedureConfig
    time_authority: TimeAuthorityProtocol
    rng: random.Random


class Procedure:
    """An electoral procedure for passing a motion.

    This base class holds the motion and the collaborators shared by all
    stages. Stage classes are created only by ``Procedure.begin()`` and by
    the ``try_advance()`` of the preceding stage.

    Example:
        >>> prototype = Procedure.begin(motion)
        >>> for dev in motion.developers:
        ...     prototype.register_proposal_vote(dev)
        >>> proposal = prototype.try_advance(timedelta(days=7))
        >>> prototype.is_live
        False
    """

    stage: ClassVar[ProcedureStage]

    def __init__(self, motion: Motion, context: _ProcedureContext) -> None:
        self._motion = motion
        self._context = context
        self._live = True

    @staticmethod
    def begin(
        motion: Motion,
        *,
        config: ProcedureConfig | None = None,
        time_authority: TimeAuthorityProtocol | None = None,
        rng: random.Random | None = None,
    ) -> PrototypeProcedure:
        """Start the procedure for a motion in the Prototype stage.

        Args:
            motion: The motion to decide.
            config: Debate and petition configuration (defaults to
                DEFAULT_PROCEDURE_CONFIG).
            time_authority: Clock for the debate deadline (defaults to the
                system clock).
            rng: Random source for the petition sample.

        Returns:
            A PrototypeProcedure with an empty vote ledger.
        """
        if time_authority is None:
            # Import here to avoid a domain -> application import at load time
            from motionflow.application.services.time_authority_service import (
                SystemTimeAuthority,
            )

            time_authority = SystemTimeAuthority()

        context = _ProcedureContext(
            config=config if config is not None else DEFAULT_PROCEDURE_CONFIG,
            time_authority=time_authority,
            rng=rng if rng is not None else random.Random(),
        )
        return PrototypeProcedure(motion, context)

    @property
    def motion(self) -> Motion:
        self._ensure_live()
        return self._motion

    @property
    def motion_id(self) -> UUID:
        return self._motion.motion_id

    @property
    def config(self) -> ProcedureConfig:
        return self._context.config

    @property
    def is_live(self) -> bool:
        """False once the procedure has advanced or been decided."""
        return self._live

    def _ensure_live(self) -> None:
        if not self._live:
            raise ProcedureConsumedError(self._motion.motion_id, self.stage)

    def _now(self) -> datetime:
        return self._context.time_authority.utcnow()

    def _consume(self) -> None:
        self._live = False

    def _log_refused(self, reason: str, **details: object) -> None:
        logger.info(
            "transition_refused",
            motion_id=str(self._motion.motion_id),
            stage=self.stage.value,
            reason=reason,
            **details,
        )

    def _log_advanced(self, to_stage: ProcedureStage, **details: object) -> None:
        logger.info(
            "procedure_advanced",
            motion_id=str(self._motion.motion_id),
            from_stage=self.stage.value,
            to_stage=to_stage.value,
            **details,
        )

    def _register(self, ledger: VoteLedger, person_id: PersonId, event: str) -> None:
        self._ensure_live()
        try:
            ledger.admit(person_id, self.stage)
        except IneligibleOrDuplicateVoteError as exc:
            logger.info(
                "vote_refused",
                motion_id=str(self._motion.motion_id),
                stage=self.stage.value,
                person_index=person_id.index,
                reason=exc.reason,
            )
            raise
        logger.debug(
            event,
            motion_id=str(self._motion.motion_id),
            person_index=person_id.index,
        )

    def __repr__(self) -> str:
        state = "live" if self._live else "consumed"
        return (
            f"{type(self).__name__}(motion_id={self._motion.motion_id}, "
            f"stage={self.stage.value}, {state})"
        )


class PrototypeProcedure(Procedure):
    """Development until an absolute majority of developers votes to propose.

    All voters are developers listed in the motion. The minimum number of
    votes to propose is ``developers // 2 + 1``; a motion without
    developers can never be proposed.
    """

    stage = ProcedureStage.PROTOTYPE

    def __init__(self, motion: Motion, context: _ProcedureContext) -> None:
        super().__init__(motion, context)
        self._ledger = VoteLedger(eligible=frozenset(motion.developers))
        self._proposal_votes = 0

    @property
    def proposal_votes(self) -> int:
        self._ensure_live()
        return self._proposal_votes

    @property
    def have_voted(self) -> tuple[PersonId, ...]:
        self._ensure_live()
        return tuple(self._ledger.voted)

    @property
    def votes_required(self) -> int:
        """Minimum number of developer votes needed to propose."""
        return votes_required(self._motion.dev_count)

    def register_proposal_vote(self, person_id: PersonId) -> None:
        """Register a developer's vote to propose the motion.

        Args:
            person_id: The voting developer.

        Raises:
            IneligibleOrDuplicateVoteError: If the voter is not a developer
                or has already voted. No vote is counted.
        """
        self._register(self._ledger, person_id, "proposal_vote_registered")
        self._proposal_votes += 1

    def try_advance(self, debate_duration: timedelta | None = None) -> ProposalProcedure:
        """Propose the motion, opening public debate.

        Args:
            debate_duration: Length of the debate period. Defaults to the
                configured debate duration.

        Returns:
            The ProposalProcedure; this procedure is consumed.

        Raises:
            ThresholdNotMetError: If votes do not exceed half the developers.
                The error carries this procedure, unchanged.
        """
        self._ensure_live()
        if debate_duration is None:
            debate_duration = self._context.config.debate_duration
        if debate_duration < timedelta(0):
            raise ValueError(f"Debate duration must not be negative, got {debate_duration}")

        if not has_absolute_majority(self._proposal_votes, self._motion.dev_count):
            self._log_refused(
                "threshold_not_met",
                votes=self._proposal_votes,
                required=self.votes_required,
            )
            raise ThresholdNotMetError(
                self, votes=self._proposal_votes, required=self.votes_required
            )

        end_date = self._now() + debate_duration
        proposal = ProposalProcedure(self._motion, self._context, end_date=end_date)
        self._consume()
        self._log_advanced(ProposalProcedure.stage, end_date=end_date.isoformat())
        return proposal


class ProposalProcedure(Procedure):
    """Development is frozen; public debate until a fixed deadline.

    Parties for and against the motion debate so that the electorate is
    informed before deciding.
    """

    stage = ProcedureStage.PROPOSAL

    def __init__(
        self,
        motion: Motion,
        context: _ProcedureContext,
        *,
        end_date: datetime,
    ) -> None:
        super().__init__(motion, context)
        self._end_date = end_date

    @property
    def end_date(self) -> datetime:
        self._ensure_live()
        return self._end_date

    @property
    def deadline_reached(self) -> bool:
        """True if the debate deadline has passed."""
        self._ensure_live()
        return self._end_date <= self._now()

    def try_advance(self) -> PetitionProcedure:
        """Close debate and draw the petition sample.

        The sample is drawn without replacement from the motion's
        electors, sized by the configured petitioner ratio.

        Returns:
            The PetitionProcedure; this procedure is consumed.

        Raises:
            DeadlineNotReachedError: If the deadline has not passed. The
                error carries this procedure, unchanged.
        """
        self._ensure_live()
        now = self._now()
        if now < self._end_date:
            self._log_refused(
                "deadline_not_reached",
                end_date=self._end_date.isoformat(),
                now=now.isoformat(),
            )
            raise DeadlineNotReachedError(self, end_date=self._end_date, now=now)

        electors = tuple(dict.fromkeys(self._motion.electors))
        size = petition_sample_size(len(electors), self._context.config.petitioner_ratio)
        voter_ids = tuple(self._context.rng.sample(electors, size))

        petition = PetitionProcedure(self._motion, self._context, voter_ids=voter_ids)
        self._consume()
        self._log_advanced(PetitionProcedure.stage, sample_size=size)
        return petition


class PetitionProcedure(Procedure):
    """Approval by a limited random set of electors.

    Petitioners decide whether the motion is worthy of a general vote.
    If an absolute majority of the sample approves, the motion goes to
    referendum.
    """

    stage = ProcedureStage.PETITION

    def __init__(
        self,
        motion: Motion,
        context: _ProcedureContext,
        *,
        voter_ids: tuple[PersonId, ...],
    ) -> None:
        super().__init__(motion, context)
        self._voter_ids = voter_ids
        self._ledger = VoteLedger(eligible=frozenset(voter_ids))
        self._approval_votes = 0

    @property
    def voter_ids(self) -> tuple[PersonId, ...]:
        """The sampled electors, the only voters of this stage."""
        self._ensure_live()
        return self._voter_ids

    @property
    def approval_votes(self) -> int:
        self._ensure_live()
        return self._approval_votes

    @property
    def votes_for(self) -> int:
        return self.approval_votes

    @property
    def have_voted(self) -> tuple[PersonId, ...]:
        self._ensure_live()
        return tuple(self._ledger.voted)

    @property
    def votes_required(self) -> int:
        """Minimum number of approvals needed to reach referendum."""
        return votes_required(len(self._voter_ids))

    def register_approval_vote(self, person_id: PersonId) -> None:
        """Register a petitioner's approval.

        Raises:
            IneligibleOrDuplicateVoteError: If the voter is not in the
                sample or has already approved. No vote is counted.
        """
        self._register(self._ledger, person_id, "approval_vote_registered")
        self._approval_votes += 1

    def try_advance(self) -> ReferendumProcedure:
        """Put the motion to a general vote of the full electorate.

        Returns:
            The ReferendumProcedure; this procedure is consumed.

        Raises:
            ThresholdNotMetError: If approvals do not exceed half the
                sample. The error carries this procedure, unchanged.
        """
        self._ensure_live()
        if not has_absolute_majority(self._approval_votes, len(self._voter_ids)):
            self._log_refused(
                "threshold_not_met",
                votes=self._approval_votes,
                required=self.votes_required,
            )
            raise ThresholdNotMetError(
                self, votes=self._approval_votes, required=self.votes_required
            )

        referendum = ReferendumProcedure(self._motion, self._context)
        self._consume()
        self._log_advanced(ReferendumProcedure.stage, approvals=self._approval_votes)
        return referendum


class ReferendumProcedure(Procedure):
    """General vote; the motion is carried with more votes for than against.

    A person casts at most one vote in this stage, on either side.
    """

    stage = ProcedureStage.REFERENDUM

    def __init__(self, motion: Motion, context: _ProcedureContext) -> None:
        super().__init__(motion, context)
        self._ledger = VoteLedger(eligible=frozenset(motion.electors))
        self._votes_for = 0
        self._votes_against = 0

    @property
    def votes_for(self) -> int:
        """Votes for adoption."""
        self._ensure_live()
        return self._votes_for

    @property
    def votes_against(self) -> int:
        """Votes against adoption."""
        self._ensure_live()
        return self._votes_against

    @property
    def have_voted(self) -> tuple[PersonId, ...]:
        self._ensure_live()
        return tuple(self._ledger.voted)

    def register_vote_for(self, person_id: PersonId) -> None:
        """Register a vote for adoption.

        Raises:
            IneligibleOrDuplicateVoteError: If the voter is not an elector
                or has already voted either way.
        """
        self._register(self._ledger, person_id, "vote_for_registered")
        self._votes_for += 1

    def register_vote_against(self, person_id: PersonId) -> None:
        """Register a vote against adoption.

        Raises:
            IneligibleOrDuplicateVoteError: If the voter is not an elector
                or has already voted either way.
        """
        self._register(self._ledger, person_id, "vote_against_registered")
        self._votes_against += 1

    def decide(self) -> Decision:
        """Take the final decision.

        Returns:
            A PASSED Decision; this procedure is consumed.

        Raises:
            MotionRejectedError: If votes for do not exceed votes against.
                The referendum stays open and the error carries it,
                unchanged, along with the REJECTED decision snapshot.
        """
        self._ensure_live()
        carried = has_plurality(self._votes_for, self._votes_against)
        decision = Decision(
            motion_id=self._motion.motion_id,
            outcome=Outcome.PASSED if carried else Outcome.REJECTED,
            votes_for=self._votes_for,
            votes_against=self._votes_against,
            decided_at=self._now(),
        )
        if not carried:
            self._log_refused(
                "not_carried",
                votes_for=decision.votes_for,
                votes_against=decision.votes_against,
            )
            raise MotionRejectedError(self, decision)

        self._consume()
        logger.info(
            "motion_decided",
            motion_id=str(self._motion.motion_id),
            outcome=decision.outcome.value,
            votes_for=decision.votes_for,
            votes_against=decision.votes_against,
        )
        return decision
