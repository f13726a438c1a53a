"""Bootstrap wiring for procedure dependencies."""

from __future__ import annotations

from motionflow.application.ports.procedure_repository import (
    ProcedureRepositoryProtocol,
)
from motionflow.application.services.procedure_service import ProcedureService
from motionflow.application.services.time_authority_service import (
    SystemTimeAuthority,
)
from motionflow.config.procedure_config import ProcedureConfig
from motionflow.infrastructure.stubs.procedure_repository_stub import (
    ProcedureRepositoryStub,
)

_procedure_repository: ProcedureRepositoryProtocol | None = None
_procedure_service: ProcedureService | None = None


def get_procedure_repository() -> ProcedureRepositoryProtocol:
    """Get procedure repository instance."""
    global _procedure_repository
    if _procedure_repository is None:
        _procedure_repository = ProcedureRepositoryStub()
    return _procedure_repository


def get_procedure_service() -> ProcedureService:
    """Get procedure service instance configured from the environment."""
    global _procedure_service
    if _procedure_service is None:
        _procedure_service = ProcedureService(
            get_procedure_repository(),
            config=ProcedureConfig.from_environment(),
            time_authority=SystemTimeAuthority(),
        )
    return _procedure_service


def reset_procedure_dependencies() -> None:
    """Reset singletons (for testing)."""
    global _procedure_repository, _procedure_service
    _procedure_repository = None
    _procedure_service = None
