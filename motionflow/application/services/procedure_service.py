"""Procedure service: serialised access to in-flight procedures.

Domain procedures are single-owner, synchronous values. When procedures
are driven by concurrent callers (e.g. one ballot request per task),
this service provides the missing layer: it keeps the current stage of
each motion in a repository and holds one asyncio.Lock per motion, so
at most one mutator runs per motion at a time.

Double votes need no handling here; the domain eligibility checks
already refuse them.

Developer Golden Rules:
1. ONE MUTATOR PER MOTION - every read-modify-write runs under the motion lock
2. FAIL LOUD - domain errors propagate unchanged to the caller
3. NOTHING LOST - a refused transition leaves the stored procedure as it was
"""

from __future__ import annotations

import asyncio
import random
from uuid import UUID

from motionflow.application.dtos.procedure_status import BallotChoice, ProcedureStatus
from motionflow.application.ports.procedure_repository import (
    ProcedureRepositoryProtocol,
)
from motionflow.application.ports.time_authority import TimeAuthorityProtocol
from motionflow.config.procedure_config import ProcedureConfig
from motionflow.domain.errors.procedure import (
    ProcedureAlreadyOpenError,
    ProcedureConsumedError,
    ProcedureNotFoundError,
    StageOperationError,
)
from motionflow.domain.errors.transition import TransitionError
from motionflow.domain.models.motion import Motion
from motionflow.domain.models.procedure import (
    Decision,
    PetitionProcedure,
    Procedure,
    ProcedureStage,
    PrototypeProcedure,
    ProposalProcedure,
    ReferendumProcedure,
)
from motionflow.domain.models.roster import PersonId
from motionflow.infrastructure.observability.logging import get_logger_for_service
from motionflow.infrastructure.observability.motion_context import (
    bind_motion_context,
)


class ProcedureService:
    """Drives procedures of many motions with per-motion mutual exclusion.

    Attributes:
        _repository: Storage of live procedures and decisions.
        _config: Configuration handed to every new procedure.
        _time_authority: Clock handed to every new procedure.
        _rng: Random source handed to every new procedure.
        _locks: One lock per in-flight motion.

    Example:
        >>> service = ProcedureService(ProcedureRepositoryStub())
        >>> status = await service.open_motion(motion)
        >>> await service.register_vote(motion.motion_id, dev_id)
        >>> status = await service.advance(motion.motion_id)
    """

    def __init__(
        self,
        repository: ProcedureRepositoryProtocol,
        *,
        config: ProcedureConfig | None = None,
        time_authority: TimeAuthorityProtocol | None = None,
        rng: random.Random | None = None,
    ) -> None:
        """Initialize the procedure service.

        Args:
            repository: Storage of live procedures and decisions.
            config: Configuration for new procedures (default config if None).
            time_authority: Clock for new procedures (system clock if None).
            rng: Random source for petition samples.
        """
        self._repository = repository
        self._config = config
        self._time_authority = time_authority
        self._rng = rng
        self._locks: dict[UUID, asyncio.Lock] = {}
        self._log = get_logger_for_service("ProcedureService")

    async def _lock_for(self, motion_id: UUID) -> asyncio.Lock:
        """Return the lock of an in-flight motion.

        Locks exist only for in-flight motions: unknown and decided motions
        are refused before any lock is created.
        """
        lock = self._locks.get(motion_id)
        if lock is None:
            await self._current(motion_id)
            lock = self._locks.setdefault(motion_id, asyncio.Lock())
        return lock

    async def _current(self, motion_id: UUID) -> Procedure:
        procedure = await self._repository.get(motion_id)
        if procedure is not None:
            return procedure
        if await self._repository.get_decision(motion_id) is not None:
            raise ProcedureConsumedError(motion_id, ProcedureStage.REFERENDUM)
        raise ProcedureNotFoundError(motion_id)

    async def open_motion(self, motion: Motion) -> ProcedureStatus:
        """Begin the procedure of a motion in the Prototype stage.

        Raises:
            ProcedureAlreadyOpenError: If the motion was opened before.
        """
        if await self._repository.get_motion(motion.motion_id) is not None:
            raise ProcedureAlreadyOpenError(motion.motion_id)

        lock = self._locks.setdefault(motion.motion_id, asyncio.Lock())
        async with lock:
            with bind_motion_context(motion.motion_id):
                procedure = Procedure.begin(
                    motion,
                    config=self._config,
                    time_authority=self._time_authority,
                    rng=self._rng,
                )
                await self._repository.add(procedure)
                self._log.info(
                    "motion_opened",
                    title=motion.title,
                    developers=motion.dev_count,
                    electors=motion.elector_count,
                )
                return ProcedureStatus.from_procedure(procedure)

    async def register_vote(
        self,
        motion_id: UUID,
        person_id: PersonId,
        choice: BallotChoice = BallotChoice.FOR,
    ) -> ProcedureStatus:
        """Register a ballot in the current stage of a motion.

        FOR is a proposal vote in Prototype, an approval in Petition and a
        vote for adoption in Referendum. AGAINST is only valid in
        Referendum. Proposal takes no ballots.

        Raises:
            ProcedureNotFoundError: If the motion is unknown.
            ProcedureConsumedError: If the motion is already decided.
            StageOperationError: If the stage takes no such ballot.
            IneligibleOrDuplicateVoteError: If the voter may not vote.
        """
        choice = BallotChoice(choice)
        async with await self._lock_for(motion_id):
            with bind_motion_context(motion_id):
                procedure = await self._current(motion_id)

                if isinstance(procedure, ReferendumProcedure):
                    if choice is BallotChoice.AGAINST:
                        procedure.register_vote_against(person_id)
                    else:
                        procedure.register_vote_for(person_id)
                elif choice is BallotChoice.AGAINST:
                    raise StageOperationError(procedure.stage, "register_vote_against")
                elif isinstance(procedure, PrototypeProcedure):
                    procedure.register_proposal_vote(person_id)
                elif isinstance(procedure, PetitionProcedure):
                    procedure.register_approval_vote(person_id)
                else:
                    raise StageOperationError(procedure.stage, "register_vote")

                return ProcedureStatus.from_procedure(procedure)

    async def advance(self, motion_id: UUID) -> ProcedureStatus:
        """Try to move a motion to its next stage.

        The Prototype stage advances with the configured debate duration.

        Raises:
            ThresholdNotMetError: If the stage majority is not met.
            DeadlineNotReachedError: If the debate is still running.
            StageOperationError: If the motion is in Referendum.
        """
        async with await self._lock_for(motion_id):
            with bind_motion_context(motion_id):
                procedure = await self._current(motion_id)
                if not isinstance(
                    procedure, (PrototypeProcedure, ProposalProcedure, PetitionProcedure)
                ):
                    raise StageOperationError(procedure.stage, "advance")

                try:
                    advanced = procedure.try_advance()
                except TransitionError as exc:
                    # The stored procedure is untouched and stays current
                    self._log.info(
                        "advance_refused",
                        stage=procedure.stage.value,
                        error=str(exc),
                    )
                    raise

                await self._repository.replace(advanced)
                return ProcedureStatus.from_procedure(advanced)

    async def decide(self, motion_id: UUID) -> Decision:
        """Take the final decision of a motion in Referendum.

        Raises:
            MotionRejectedError: If votes for do not exceed votes against;
                the referendum stays open.
            StageOperationError: If the motion is not in Referendum.
        """
        async with await self._lock_for(motion_id):
            with bind_motion_context(motion_id):
                procedure = await self._current(motion_id)
                if not isinstance(procedure, ReferendumProcedure):
                    raise StageOperationError(procedure.stage, "decide")

                decision = procedure.decide()
                await self._repository.record_decision(decision)
                # Decided motions refuse every call before taking a lock
                self._locks.pop(motion_id, None)
                self._log.info("motion_passed", decided_at=decision.decided_at.isoformat())
                return decision

    async def get_status(self, motion_id: UUID) -> ProcedureStatus:
        """Return a snapshot of a motion, in flight or decided.

        Raises:
            ProcedureNotFoundError: If the motion is unknown.
        """
        lock = self._locks.get(motion_id)
        if lock is None:
            # No lock means no in-flight procedure and so no mutator to wait for
            return await self._status(motion_id)
        async with lock:
            return await self._status(motion_id)

    async def _status(self, motion_id: UUID) -> ProcedureStatus:
        procedure = await self._repository.get(motion_id)
        if procedure is not None:
            return ProcedureStatus.from_procedure(procedure)

        decision = await self._repository.get_decision(motion_id)
        motion = await self._repository.get_motion(motion_id)
        if decision is None or motion is None:
            raise ProcedureNotFoundError(motion_id)
        return ProcedureStatus.from_decision(decision, title=motion.title)
