"""Unit tests for ProcedureStatus snapshots."""

from datetime import timedelta

from motionflow.application.dtos.procedure_status import ProcedureStatus
from motionflow.domain.models.motion import Motion
from motionflow.domain.models.procedure import Outcome, ProcedureStage, PrototypeProcedure
from tests.helpers import vote_petition, vote_prototype, vote_referendum


class TestFromProcedure:
    def test_prototype_snapshot(self, prototype: PrototypeProcedure, motion: Motion) -> None:
        vote_prototype(prototype, 2)
        status = ProcedureStatus.from_procedure(prototype)

        assert status.motion_id == motion.motion_id
        assert status.title == motion.title
        assert status.stage is ProcedureStage.PROTOTYPE
        assert status.tally.votes_for == 2
        assert status.tally.votes_required == 3
        assert status.tally.voters == 2
        assert status.eligible_voters == [0, 1, 2, 3, 4]
        assert status.end_date is None
        assert status.outcome is None

    def test_proposal_snapshot_has_deadline(self, prototype: PrototypeProcedure) -> None:
        vote_prototype(prototype, 3)
        proposal = prototype.try_advance(timedelta(days=1))
        status = ProcedureStatus.from_procedure(proposal)

        assert status.stage is ProcedureStage.PROPOSAL
        assert status.end_date == proposal.end_date
        assert status.eligible_voters == []
        assert status.model_dump(mode="json")["end_date"] == "2026-01-02T00:00:00Z"

    def test_petition_snapshot_lists_sample(self, prototype: PrototypeProcedure) -> None:
        vote_prototype(prototype, 3)
        petition = prototype.try_advance().try_advance()
        vote_petition(petition, 4)
        status = ProcedureStatus.from_procedure(petition)

        assert status.stage is ProcedureStage.PETITION
        assert status.eligible_voters == [pid.index for pid in petition.voter_ids]
        assert status.tally.votes_for == 4
        assert status.tally.votes_required == 6

    def test_referendum_snapshot(self, prototype: PrototypeProcedure, motion: Motion) -> None:
        vote_prototype(prototype, 3)
        petition = prototype.try_advance().try_advance()
        vote_petition(petition, 6)
        referendum = petition.try_advance()
        vote_referendum(referendum, votes_for=3, votes_against=2)
        status = ProcedureStatus.from_procedure(referendum)

        assert status.stage is ProcedureStage.REFERENDUM
        assert status.tally.votes_for == 3
        assert status.tally.votes_against == 2
        assert status.tally.votes_required is None
        assert len(status.eligible_voters) == motion.elector_count


class TestFromDecision:
    def test_decided_snapshot(self, prototype: PrototypeProcedure, motion: Motion) -> None:
        vote_prototype(prototype, 3)
        petition = prototype.try_advance().try_advance()
        vote_petition(petition, 6)
        referendum = petition.try_advance()
        vote_referendum(referendum, votes_for=3, votes_against=2)
        decision = referendum.decide()

        status = ProcedureStatus.from_decision(decision, title=motion.title)

        assert status.stage is None
        assert status.outcome is Outcome.PASSED
        assert status.tally.voters == 5
        assert status.model_dump(mode="json")["outcome"] == "PASSED"
