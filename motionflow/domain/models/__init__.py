"""Domain models for motionflow."""

from motionflow.domain.models.motion import Motion
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
from motionflow.domain.models.roster import Person, PersonId, Roster

__all__ = [
    "Decision",
    "Motion",
    "Outcome",
    "Person",
    "PersonId",
    "PetitionProcedure",
    "Procedure",
    "ProcedureStage",
    "PrototypeProcedure",
    "ProposalProcedure",
    "ReferendumProcedure",
    "Roster",
]
