"""Configuration module for motionflow.

Available Configurations:
- ProcedureConfig: Debate duration and petition sampling ratio
"""

from motionflow.config.procedure_config import (
    DEFAULT_PROCEDURE_CONFIG,
    FULL_PETITION_CONFIG,
    PETITIONER_RATIO,
    TEST_PROCEDURE_CONFIG,
    ProcedureConfig,
)

__all__ = [
    "ProcedureConfig",
    "DEFAULT_PROCEDURE_CONFIG",
    "TEST_PROCEDURE_CONFIG",
    "FULL_PETITION_CONFIG",
    "PETITIONER_RATIO",
]
