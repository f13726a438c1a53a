"""
Pytest configuration and shared fixtures for motionflow tests.

Testing Standards:
- All async tests run under pytest-asyncio (auto mode enabled in pyproject.toml)
- Time-dependent tests use FakeTimeAuthority, never the system clock
- Random draws use a seeded random.Random
- Unit tests go in tests/unit/
- End-to-end procedure scenarios go in tests/integration/
"""

import random

import pytest

from motionflow.config.procedure_config import TEST_PROCEDURE_CONFIG
from motionflow.domain.models.motion import Motion
from motionflow.domain.models.procedure import Procedure, PrototypeProcedure
from motionflow.domain.models.roster import Roster
from tests.helpers.fake_time_authority import FakeTimeAuthority


@pytest.fixture
def project_version() -> str:
    """Provide the current project version for tests."""
    from motionflow import __version__

    return __version__


@pytest.fixture
def fake_time_authority() -> FakeTimeAuthority:
    """Frozen clock at 2026-01-01T00:00:00 UTC."""
    return FakeTimeAuthority()


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for reproducible samples."""
    return random.Random(72)


@pytest.fixture
def roster(rng: random.Random) -> Roster:
    """Population of 40 people."""
    return Roster.from_names((f"Citizen {n}" for n in range(40)), rng=rng)


@pytest.fixture
def motion(roster: Roster) -> Motion:
    """Motion with 5 developers and the whole roster as electorate."""
    return Motion(
        title="Construction of a new monument in Exampletown",
        description="Exampletown is too empty. A monument must be built.",
        developers=roster.ids()[:5],
        electors=roster.ids(),
    )


@pytest.fixture
def prototype(
    motion: Motion,
    fake_time_authority: FakeTimeAuthority,
    rng: random.Random,
) -> PrototypeProcedure:
    """Freshly begun procedure using the test config (no debate period)."""
    return Procedure.begin(
        motion,
        config=TEST_PROCEDURE_CONFIG,
        time_authority=fake_time_authority,
        rng=rng,
    )
