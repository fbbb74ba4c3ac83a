"""Schemas for parsed log data - pure data, no I/O."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone


@dataclass(frozen=True)
class Record:
    """One parsed access log entry.

    The timestamp keeps the offset found in the log line; ``date`` is the
    UTC calendar day used for bucketing, so lines written with different
    offsets land in comparable days.
    """

    ip: str
    timestamp: datetime
    path: str
    status: int
    referrer: str
    user_agent: str

    @property
    def date(self) -> date:
        """UTC calendar date of the request."""
        return self.timestamp.astimezone(timezone.utc).date()
