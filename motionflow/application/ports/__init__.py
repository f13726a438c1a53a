"""Application ports (interfaces) for motionflow."""

from motionflow.application.ports.procedure_repository import (
    ProcedureRepositoryProtocol,
)
from motionflow.application.ports.time_authority import TimeAuthorityProtocol

__all__ = ["ProcedureRepositoryProtocol", "TimeAuthorityProtocol"]
