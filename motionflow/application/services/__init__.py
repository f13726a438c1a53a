"""Application services for motionflow."""

from motionflow.application.services.procedure_service import ProcedureService
from motionflow.application.services.time_authority_service import (
    SystemTimeAuthority,
)

__all__ = ["ProcedureService", "SystemTimeAuthority"]
