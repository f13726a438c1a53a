"""System time authority backed by the host clock.

Deadlines are stored and compared as timezone-aware UTC datetimes;
standard UTC timestamp comparison is sufficient for the procedure.
"""

import time
from datetime import datetime, timezone

from motionflow.application.ports.time_authority import TimeAuthorityProtocol


class SystemTimeAuthority(TimeAuthorityProtocol):
    """Production TimeAuthorityProtocol reading the system clock.

    Example:
        >>> clock = SystemTimeAuthority()
        >>> clock.utcnow().tzinfo is timezone.utc
        True
    """

    def now(self) -> datetime:
        """Return the current time in UTC."""
        return datetime.now(timezone.utc)

    def utcnow(self) -> datetime:
        """Return the current time in UTC."""
        return datetime.now(timezone.utc)

    def monotonic(self) -> float:
        """Return the host monotonic clock."""
        return time.monotonic()

    def __repr__(self) -> str:
        return "SystemTimeAuthority()"
