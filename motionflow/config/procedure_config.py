"""Procedure debate duration and petition sampling configuration.

This module defines configuration for the Proposal debate period and the
size of the Petition approval group, with environment variable overrides
for deployment tuning.

Procedural Constraints:
- The debate deadline is fixed when a motion enters Proposal
- The petition group is a fraction of the electorate in (0, 1]
- A smaller petition group approves more motions for general vote

Environment Variables:
- MOTION_DEBATE_DURATION_SECONDS: Public debate length (default: 604800, min: 0, max: 31536000)
- MOTION_PETITIONER_RATIO: Fraction of electors sampled for petition (default: 0.25, range: (0, 1])
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import timedelta


def _get_int_env(key: str, default: int) -> int:
    """Get integer environment variable with default.

    Args:
        key: Environment variable name.
        default: Default value if not set or invalid.

    Returns:
        Parsed integer value or default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_float_env(key: str, default: float) -> float:
    """Get float environment variable with default.

    Args:
        key: Environment variable name.
        default: Default value if not set or invalid.

    Returns:
        Parsed float value or default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


# =============================================================================
# Debate Configuration
# =============================================================================

# Default public debate period (one week)
DEFAULT_DEBATE_DURATION_SECONDS = 7 * 24 * 60 * 60

# Minimum debate floor (0 for testing, deadline reached on entry)
MIN_DEBATE_DURATION_SECONDS = 0

# Maximum debate ceiling (one year)
MAX_DEBATE_DURATION_SECONDS = 365 * 24 * 60 * 60

# =============================================================================
# Petition Configuration
# =============================================================================

# Size of the petitioner group relative to the electorate.
# Realistically inversely proportional to the size of the population.
PETITIONER_RATIO = 0.25

# Smallest ratio accepted when clamping environment overrides
MIN_PETITIONER_RATIO = 0.01

MAX_PETITIONER_RATIO = 1.0


@dataclass(frozen=True)
class ProcedureConfig:
    """Configuration for the debate period and petition sampling.

    Attributes:
        debate_duration_seconds: Length of the Proposal stage.
                                 Default: 604800 (7 days).
                                 Minimum: 0.
                                 Maximum: 31536000 (365 days).
        petitioner_ratio: Fraction of the electorate drawn for Petition.
                          Default: 0.25.
                          Range: (0, 1].
    """

    debate_duration_seconds: int = DEFAULT_DEBATE_DURATION_SECONDS
    petitioner_ratio: float = PETITIONER_RATIO

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if (
            not MIN_DEBATE_DURATION_SECONDS
            <= self.debate_duration_seconds
            <= MAX_DEBATE_DURATION_SECONDS
        ):
            raise ValueError(
                f"debate_duration_seconds must be between {MIN_DEBATE_DURATION_SECONDS} "
                f"and {MAX_DEBATE_DURATION_SECONDS}, got {self.debate_duration_seconds}"
            )
        if not 0 < self.petitioner_ratio <= MAX_PETITIONER_RATIO:
            raise ValueError(
                f"petitioner_ratio must be in (0, {MAX_PETITIONER_RATIO}], "
                f"got {self.petitioner_ratio}"
            )

    @property
    def debate_duration(self) -> timedelta:
        """Get the debate period as a timedelta for datetime operations."""
        return timedelta(seconds=self.debate_duration_seconds)

    @classmethod
    def from_environment(cls) -> ProcedureConfig:
        """Create config from environment variables with defaults.

        Environment Variables:
            MOTION_DEBATE_DURATION_SECONDS: Debate length in seconds (default: 604800)
            MOTION_PETITIONER_RATIO: Petition sample ratio (default: 0.25)

        Returns:
            ProcedureConfig with values from environment or defaults.
        """
        debate = _get_int_env(
            "MOTION_DEBATE_DURATION_SECONDS",
            DEFAULT_DEBATE_DURATION_SECONDS,
        )
        # Clamp to valid range
        debate = max(
            MIN_DEBATE_DURATION_SECONDS,
            min(debate, MAX_DEBATE_DURATION_SECONDS),
        )

        ratio = _get_float_env("MOTION_PETITIONER_RATIO", PETITIONER_RATIO)
        # Clamp to valid range
        ratio = max(MIN_PETITIONER_RATIO, min(ratio, MAX_PETITIONER_RATIO))

        return cls(debate_duration_seconds=debate, petitioner_ratio=ratio)


# Pre-defined configurations for common use cases

# Default production config
DEFAULT_PROCEDURE_CONFIG = ProcedureConfig()

# Testing config with no debate period
TEST_PROCEDURE_CONFIG = ProcedureConfig(
    debate_duration_seconds=MIN_DEBATE_DURATION_SECONDS,  # deadline reached on entry
    petitioner_ratio=PETITIONER_RATIO,
)

# Whole electorate signs the petition
FULL_PETITION_CONFIG = ProcedureConfig(
    debate_duration_seconds=DEFAULT_DEBATE_DURATION_SECONDS,
    petitioner_ratio=MAX_PETITIONER_RATIO,
)
