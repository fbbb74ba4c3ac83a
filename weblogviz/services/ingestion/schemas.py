"""Per-source results exchanged between ingestion workers and the coordinator."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from weblogviz.domain.logs.index import LogIndex


@dataclass
class PartialIndex:
    """A worker-local index built from exactly one source."""

    source: Path
    index: LogIndex
    parsed_lines: int = 0
    skipped_lines: int = 0

    @property
    def kept_records(self) -> int:
        return len(self.index)


@dataclass
class SourceFailure:
    """A source that could not be ingested, and why."""

    source: Path
    reason: str


SourceResult = PartialIndex | SourceFailure


@dataclass
class IngestionResult:
    """Outcome of a run: the merged index plus what went wrong on the way."""

    index: LogIndex
    sources: int = 0
    failures: list[SourceFailure] = field(default_factory=list)
    parsed_lines: int = 0
    skipped_lines: int = 0

    @property
    def succeeded(self) -> int:
        """Number of sources merged into the index."""
        return self.sources - len(self.failures)

    @property
    def is_partial(self) -> bool:
        return bool(self.failures) and self.succeeded > 0
