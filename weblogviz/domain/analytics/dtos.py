"""DTOs for computed statistics."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import NamedTuple

from weblogviz.services.ingestion.schemas import SourceFailure


class PathCount(NamedTuple):
    """A ranked entry. Compares and sorts like the plain ``(count, path)`` tuple."""

    count: int
    path: str


@dataclass
class DailyTop:
    """Ranking restricted to one UTC day."""

    date: date
    count: int  # records on that day, before truncation to top-N
    top: list[PathCount] = field(default_factory=list)


@dataclass
class Report:
    """Everything the formatter needs to render a run."""

    top_n: int
    days: int
    total_records: int
    overall: list[PathCount] = field(default_factory=list)
    daily: list[DailyTop] = field(default_factory=list)
    failures: list[SourceFailure] = field(default_factory=list)
