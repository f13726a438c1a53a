"""Clock port.

A procedure reads the clock twice: when it enters Proposal, to fix the
debate deadline, and when it tries to leave Proposal, to compare the
deadline with the present. Both reads go through this port so tests can
freeze and move time.

Implementations:
    SystemTimeAuthority (motionflow.application.services)
    FakeTimeAuthority (tests.helpers)
"""

from abc import ABC, abstractmethod
from datetime import datetime


class TimeAuthorityProtocol(ABC):
    """Source of timezone-aware timestamps."""

    @abstractmethod
    def now(self) -> datetime:
        """Return the current time, timezone-aware."""
        ...

    @abstractmethod
    def utcnow(self) -> datetime:
        """Return the current time in UTC.

        Debate deadlines are always computed and compared in UTC.
        """
        ...

    @abstractmethod
    def monotonic(self) -> float:
        """Return a monotonic reading in seconds; only differences matter."""
        ...
