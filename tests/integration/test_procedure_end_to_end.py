"""End-to-end scenarios of the motion procedure.

Drives motions from Prototype to a final decision, both directly on the
domain procedures and through the bootstrapped ProcedureService.
"""

from __future__ import annotations

import os
import random
from collections.abc import Iterator
from datetime import timedelta
from unittest.mock import patch

import pytest

from motionflow.application.dtos.procedure_status import BallotChoice
from motionflow.application.services.procedure_service import ProcedureService
from motionflow.bootstrap.procedure import (
    get_procedure_repository,
    get_procedure_service,
    reset_procedure_dependencies,
)
from motionflow.config.procedure_config import ProcedureConfig
from motionflow.domain.errors import (
    DeadlineNotReachedError,
    MotionRejectedError,
    ThresholdNotMetError,
)
from motionflow.domain.models.motion import Motion
from motionflow.domain.models.procedure import (
    Outcome,
    PetitionProcedure,
    Procedure,
    ProcedureStage,
)
from motionflow.domain.models.roster import Roster
from motionflow.infrastructure.stubs.procedure_repository_stub import (
    ProcedureRepositoryStub,
)
from tests.helpers import vote_petition, vote_prototype, vote_referendum
from tests.helpers.fake_time_authority import FakeTimeAuthority

pytestmark = pytest.mark.integration

# 40 electors at this ratio give a petition sample of exactly 25
SAMPLE_RATIO = 0.625


@pytest.fixture
def town(rng: random.Random) -> Roster:
    return Roster.from_names((f"Resident {n}" for n in range(40)), rng=rng)


@pytest.fixture
def park_motion(town: Roster) -> Motion:
    return Motion(
        title="A new park on the old railway yard",
        description="The yard has been empty for a decade.",
        developers=town.ids()[:10],
        electors=town.ids(),
    )


@pytest.fixture
def clean_bootstrap() -> Iterator[None]:
    reset_procedure_dependencies()
    yield
    reset_procedure_dependencies()


class TestDomainScenario:
    def _begin(
        self, motion: Motion, clock: FakeTimeAuthority, rng: random.Random
    ) -> Procedure:
        return Procedure.begin(
            motion,
            config=ProcedureConfig(debate_duration_seconds=0, petitioner_ratio=SAMPLE_RATIO),
            time_authority=clock,
            rng=rng,
        )

    def test_motion_passes(
        self,
        park_motion: Motion,
        fake_time_authority: FakeTimeAuthority,
        rng: random.Random,
    ) -> None:
        prototype = self._begin(park_motion, fake_time_authority, rng)
        vote_prototype(prototype, 6)
        proposal = prototype.try_advance(timedelta(0))

        petition = proposal.try_advance()
        assert len(petition.voter_ids) == 25
        assert petition.votes_required == 13
        vote_petition(petition, 13)

        referendum = petition.try_advance()
        vote_referendum(referendum, votes_for=20, votes_against=15)
        decision = referendum.decide()

        assert decision.outcome is Outcome.PASSED
        assert (decision.votes_for, decision.votes_against) == (20, 15)
        assert decision.decided_at == fake_time_authority.utcnow()
        assert not referendum.is_live

    def test_motion_rejected(
        self,
        park_motion: Motion,
        fake_time_authority: FakeTimeAuthority,
        rng: random.Random,
    ) -> None:
        prototype = self._begin(park_motion, fake_time_authority, rng)
        vote_prototype(prototype, 6)
        petition = prototype.try_advance().try_advance()
        vote_petition(petition, 13)
        referendum = petition.try_advance()
        vote_referendum(referendum, votes_for=15, votes_against=20)

        with pytest.raises(MotionRejectedError) as exc_info:
            referendum.decide()

        assert exc_info.value.decision.outcome is Outcome.REJECTED
        assert exc_info.value.procedure is referendum
        assert referendum.is_live

    def test_even_split_is_rejected(
        self,
        park_motion: Motion,
        fake_time_authority: FakeTimeAuthority,
        rng: random.Random,
    ) -> None:
        prototype = self._begin(park_motion, fake_time_authority, rng)
        vote_prototype(prototype, 6)
        petition = prototype.try_advance().try_advance()
        vote_petition(petition, 13)
        referendum = petition.try_advance()
        vote_referendum(referendum, votes_for=5, votes_against=5)

        with pytest.raises(MotionRejectedError):
            referendum.decide()

    def test_half_of_developers_is_not_enough(
        self,
        park_motion: Motion,
        fake_time_authority: FakeTimeAuthority,
        rng: random.Random,
    ) -> None:
        prototype = self._begin(park_motion, fake_time_authority, rng)
        vote_prototype(prototype, 5)

        with pytest.raises(ThresholdNotMetError) as exc_info:
            prototype.try_advance()

        assert exc_info.value.procedure is prototype
        prototype.register_proposal_vote(park_motion.developers[5])
        assert prototype.try_advance().stage is ProcedureStage.PROPOSAL

    def test_week_long_debate(
        self,
        park_motion: Motion,
        fake_time_authority: FakeTimeAuthority,
        rng: random.Random,
    ) -> None:
        prototype = self._begin(park_motion, fake_time_authority, rng)
        vote_prototype(prototype, 6)
        proposal = prototype.try_advance(timedelta(days=7))

        fake_time_authority.advance(delta=timedelta(days=6, hours=23))
        with pytest.raises(DeadlineNotReachedError) as exc_info:
            proposal.try_advance()
        assert exc_info.value.remaining_seconds == 3600

        fake_time_authority.advance(delta=timedelta(hours=1))
        assert proposal.try_advance().stage is ProcedureStage.PETITION


class TestServiceScenario:
    async def test_motion_passes_through_service(
        self,
        park_motion: Motion,
        fake_time_authority: FakeTimeAuthority,
        rng: random.Random,
    ) -> None:
        repository = ProcedureRepositoryStub()
        service = ProcedureService(
            repository,
            config=ProcedureConfig(debate_duration_seconds=60, petitioner_ratio=SAMPLE_RATIO),
            time_authority=fake_time_authority,
            rng=rng,
        )
        motion_id = park_motion.motion_id

        await service.open_motion(park_motion)
        for dev in park_motion.developers[:6]:
            await service.register_vote(motion_id, dev)
        status = await service.advance(motion_id)
        assert status.end_date == fake_time_authority.utcnow() + timedelta(seconds=60)

        fake_time_authority.advance(seconds=60)
        status = await service.advance(motion_id)
        assert status.stage is ProcedureStage.PETITION
        assert len(status.eligible_voters) == 25

        petition = await repository.get(motion_id)
        assert isinstance(petition, PetitionProcedure)
        for voter in petition.voter_ids[:13]:
            await service.register_vote(motion_id, voter)
        status = await service.advance(motion_id)
        assert status.stage is ProcedureStage.REFERENDUM

        for elector in park_motion.electors[:20]:
            await service.register_vote(motion_id, elector, BallotChoice.FOR)
        for elector in park_motion.electors[20:35]:
            await service.register_vote(motion_id, elector, BallotChoice.AGAINST)
        decision = await service.decide(motion_id)

        assert decision.passed
        status = await service.get_status(motion_id)
        assert status.outcome is Outcome.PASSED
        assert status.tally.votes_for == 20
        assert status.tally.votes_against == 15


class TestBootstrap:
    def test_singletons(self, clean_bootstrap: None) -> None:
        assert get_procedure_service() is get_procedure_service()
        assert get_procedure_repository() is get_procedure_repository()

    def test_reset(self, clean_bootstrap: None) -> None:
        first = get_procedure_service()
        reset_procedure_dependencies()
        assert get_procedure_service() is not first

    async def test_service_reads_environment(
        self, clean_bootstrap: None, park_motion: Motion
    ) -> None:
        env = {"MOTION_DEBATE_DURATION_SECONDS": "0", "MOTION_PETITIONER_RATIO": "1.0"}
        with patch.dict(os.environ, env):
            service = get_procedure_service()

        await service.open_motion(park_motion)
        for dev in park_motion.developers[:6]:
            await service.register_vote(park_motion.motion_id, dev)
        await service.advance(park_motion.motion_id)
        status = await service.advance(park_motion.motion_id)

        assert status.stage is ProcedureStage.PETITION
        assert len(status.eligible_voters) == park_motion.elector_count
