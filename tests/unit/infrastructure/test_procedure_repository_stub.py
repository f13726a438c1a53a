"""Unit tests for ProcedureRepositoryStub."""

from __future__ import annotations

import pytest

from motionflow.domain.errors import ProcedureAlreadyOpenError, ProcedureNotFoundError
from motionflow.domain.models.motion import Motion
from motionflow.domain.models.procedure import PrototypeProcedure
from motionflow.infrastructure.stubs.procedure_repository_stub import (
    ProcedureRepositoryStub,
)
from tests.helpers import vote_petition, vote_prototype, vote_referendum


@pytest.fixture
def repository() -> ProcedureRepositoryStub:
    return ProcedureRepositoryStub()


class TestProcedureRepositoryStub:
    async def test_add_and_get(
        self, repository: ProcedureRepositoryStub, prototype: PrototypeProcedure, motion: Motion
    ) -> None:
        await repository.add(prototype)

        assert await repository.get(motion.motion_id) is prototype
        assert await repository.get_motion(motion.motion_id) is motion
        assert repository.in_flight_count == 1

    async def test_add_twice_raises(
        self, repository: ProcedureRepositoryStub, prototype: PrototypeProcedure
    ) -> None:
        await repository.add(prototype)

        with pytest.raises(ProcedureAlreadyOpenError):
            await repository.add(prototype)

    async def test_unknown_motion_returns_none(
        self, repository: ProcedureRepositoryStub, motion: Motion
    ) -> None:
        assert await repository.get(motion.motion_id) is None
        assert await repository.get_motion(motion.motion_id) is None
        assert await repository.get_decision(motion.motion_id) is None

    async def test_replace_swaps_stage(
        self, repository: ProcedureRepositoryStub, prototype: PrototypeProcedure, motion: Motion
    ) -> None:
        await repository.add(prototype)
        vote_prototype(prototype, 3)
        proposal = prototype.try_advance()

        await repository.replace(proposal)

        assert await repository.get(motion.motion_id) is proposal

    async def test_replace_unknown_raises(
        self, repository: ProcedureRepositoryStub, prototype: PrototypeProcedure
    ) -> None:
        with pytest.raises(ProcedureNotFoundError):
            await repository.replace(prototype)

    async def test_record_decision_drops_procedure(
        self, repository: ProcedureRepositoryStub, prototype: PrototypeProcedure, motion: Motion
    ) -> None:
        await repository.add(prototype)
        vote_prototype(prototype, 3)
        petition = prototype.try_advance().try_advance()
        vote_petition(petition, petition.votes_required)
        referendum = petition.try_advance()
        vote_referendum(referendum, votes_for=2, votes_against=1)
        decision = referendum.decide()

        await repository.record_decision(decision)

        assert await repository.get(motion.motion_id) is None
        assert await repository.get_decision(motion.motion_id) is decision
        assert await repository.get_motion(motion.motion_id) is motion
        assert repository.in_flight_count == 0

    async def test_clear(
        self, repository: ProcedureRepositoryStub, prototype: PrototypeProcedure, motion: Motion
    ) -> None:
        await repository.add(prototype)
        repository.clear()

        assert repository.in_flight_count == 0
        assert await repository.get_motion(motion.motion_id) is None
