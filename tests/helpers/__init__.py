"""Test helpers for motionflow tests.

Helpers:
    FakeTimeAuthority: Controllable time authority for deterministic tests
    vote_prototype / vote_petition: cast a number of stage votes

Usage:
    from tests.helpers import FakeTimeAuthority
"""

from tests.helpers.fake_time_authority import FakeTimeAuthority
from tests.helpers.voting import vote_petition, vote_prototype, vote_referendum

__all__ = ["FakeTimeAuthority", "vote_petition", "vote_prototype", "vote_referendum"]
