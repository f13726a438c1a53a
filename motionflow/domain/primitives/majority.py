"""Majority and quorum arithmetic for the staged procedure.

All thresholds use integer floor division and strict comparison, so an
even split never counts as a majority.

Usage:
    from motionflow.domain.primitives.majority import (
        has_absolute_majority,
        votes_required,
    )

    votes_required(4)  # 3
    has_absolute_majority(votes=2, electorate=4)  # False
"""

from __future__ import annotations

import math


def votes_required(electorate: int) -> int:
    """Return the minimum number of votes forming an absolute majority.

    Args:
        electorate: Number of eligible voters.

    Returns:
        ``electorate // 2 + 1``.
    """
    if electorate < 0:
        raise ValueError(f"Electorate size must be non-negative, got {electorate}")
    return electorate // 2 + 1


def has_absolute_majority(votes: int, electorate: int) -> bool:
    """Check whether ``votes`` strictly exceeds half of ``electorate``.

    With 0 eligible voters the threshold is 1 and can never be reached.
    """
    return votes > electorate // 2


def has_plurality(votes_for: int, votes_against: int) -> bool:
    """Check whether votes for strictly exceed votes against (ties fail)."""
    return votes_for > votes_against


def petition_sample_size(elector_count: int, ratio: float) -> int:
    """Return the number of petitioners drawn from the electorate.

    The product is rounded half up, then capped at ``elector_count``.

    Args:
        elector_count: Size of the full electorate.
        ratio: Fraction of the electorate to sample, in (0, 1].

    Returns:
        Petition sample size.
    """
    if elector_count < 0:
        raise ValueError(f"Elector count must be non-negative, got {elector_count}")
    if not 0 < ratio <= 1:
        raise ValueError(f"Petitioner ratio must be in (0, 1], got {ratio}")
    return min(elector_count, math.floor(elector_count * ratio + 0.5))
