"""Procedural primitives for the motionflow domain layer.

- votes_required / has_absolute_majority: stage majority rules
- has_plurality: referendum decision rule
- petition_sample_size: size of the random approval group
"""

from motionflow.domain.primitives.majority import (
    has_absolute_majority,
    has_plurality,
    petition_sample_size,
    votes_required,
)

__all__ = [
    "has_absolute_majority",
    "has_plurality",
    "petition_sample_size",
    "votes_required",
]
