"""In-memory stub implementations of application ports."""

from motionflow.infrastructure.stubs.procedure_repository_stub import (
    ProcedureRepositoryStub,
)

__all__ = ["ProcedureRepositoryStub"]
