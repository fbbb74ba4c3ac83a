"""Parallel log ingestion.

This service orchestrates:
- Source expansion (directories -> files) via the source lister
- A bounded pool of worker tasks, each reading one source at a time and
  building a private LogIndex for it in a worker thread
- A single coordinator that receives one result per source over a queue and
  merges the partial indices into the global LogIndex

Workers never share mutable state, so the only synchronisation point is the
result queue. Merges happen on the coordinator only.
"""
from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, Sequence

from weblogviz.domain.logs.index import LogIndex
from weblogviz.exceptions import AllSourcesFailedError, SourceUnavailableError
from weblogviz.services.logparser.filters import prepare
from weblogviz.services.logparser.logparser import LogParser
from weblogviz.services.sources.reader import SourceReader, expand_sources
from .schemas import IngestionResult, PartialIndex, SourceFailure, SourceResult

if TYPE_CHECKING:
    from weblogviz.config.settings import FilterSettings, IngestionSettings


logger = logging.getLogger(__name__)

DEFAULT_WORKERS = 4
CANCELLED_REASON = "ingestion cancelled"


def build_index(
    text: str,
    parser: LogParser,
    config: "FilterSettings",
    source: Path | str = "<string>",
) -> PartialIndex:
    """Parse, rewrite, filter and index every line of one source.

    Args:
        text: Full decoded contents of the source.
        parser: Shared, read-only line parser.
        config: Filter policy.
        source: Location the text came from, used in diagnostics.

    Returns:
        PartialIndex holding a fresh LogIndex and the line counters.
    """
    # Records are newline-terminated; other line breaks may appear inside quoted fields
    lines = [line for line in text.split("\n") if line.strip()]
    index = LogIndex()
    parsed = 0
    for record in parser.iter_records(lines, source=str(source)):
        parsed += 1
        if (kept := prepare(record, config)) is not None:
            index.insert(kept)

    return PartialIndex(
        source=Path(source),
        index=index,
        parsed_lines=parsed,
        skipped_lines=len(lines) - parsed,
    )


class ParallelIngestor:
    """Builds one global LogIndex from many sources concurrently.

    Example:
        ingestor = ParallelIngestor(filters, workers=4)
        result = await ingestor.ingest([Path("/var/log/nginx")])
        print(len(result.index), result.failures)
    """

    def __init__(
        self,
        config: "FilterSettings",
        *,
        workers: int = DEFAULT_WORKERS,
        parser: LogParser | None = None,
        reader: SourceReader | None = None,
    ) -> None:
        """Initialize the ingestor.

        Args:
            config: Filter policy applied to every record.
            workers: Maximum number of sources processed at the same time.
            parser: Line parser shared by all workers.
            reader: Source reader used by all workers.
        """
        if workers < 1:
            raise ValueError(f"workers must be >= 1, got {workers}")
        self.config = config
        self.workers = workers
        self.parser = parser or LogParser()
        self.reader = reader or SourceReader()

        self._stop_event = asyncio.Event()

        # Statistics of the last run
        self.total_merged: int = 0
        self.total_failed: int = 0

    @classmethod
    def from_settings(
        cls, filters: "FilterSettings", ingestion: "IngestionSettings"
    ) -> "ParallelIngestor":
        """Create an ingestor from the application settings sections."""
        return cls(
            filters,
            workers=ingestion.workers,
            reader=SourceReader(
                encoding=ingestion.encoding, errors=ingestion.encoding_errors
            ),
        )

    @property
    def is_cancelled(self) -> bool:
        return self._stop_event.is_set()

    def cancel(self) -> None:
        """Stop taking new sources.

        Sources already being read finish normally. The rest are reported as
        failures and the run completes with whatever was merged.
        """
        logger.info("Cancelling ingestion")
        self._stop_event.set()

    async def ingest_source(self, location: Path) -> SourceResult:
        """Read and index a single source. Never raises for I/O problems."""
        logger.info("Parsing logs from %s", location)
        try:
            text = await self.reader.read_text(location)
        except SourceUnavailableError as e:
            logger.warning("Skipping source %s: %s", location, e.reason)
            return SourceFailure(source=location, reason=e.reason)

        partial = await asyncio.to_thread(
            build_index, text, self.parser, self.config, location
        )
        logger.debug(
            "Indexed %s: %d parsed, %d skipped, %d kept",
            location,
            partial.parsed_lines,
            partial.skipped_lines,
            partial.kept_records,
        )
        return partial

    async def _worker(
        self,
        pending: asyncio.Queue[Path],
        results: asyncio.Queue[SourceResult],
    ) -> None:
        """Take sources one at a time until none are left."""
        while True:
            try:
                location = pending.get_nowait()
            except asyncio.QueueEmpty:
                return
            if self._stop_event.is_set():
                result: SourceResult = SourceFailure(source=location, reason=CANCELLED_REASON)
            else:
                try:
                    result = await self.ingest_source(location)
                except Exception as e:
                    # The coordinator waits for exactly one result per source
                    logger.exception("Unexpected error while ingesting %s", location)
                    result = SourceFailure(source=location, reason=f"{type(e).__name__}: {e}")
            await results.put(result)

    async def ingest(self, sources: Iterable[Path | str]) -> IngestionResult:
        """Ingest every source and merge the results.

        Args:
            sources: Files and/or directories. Directories are expanded one
                level, non-recursively.

        Returns:
            IngestionResult with the merged index and the failed sources.

        Raises:
            AllSourcesFailedError: If at least one source was requested and
                none could be ingested.
        """
        try:
            return await self._ingest(sources)
        finally:
            # A cancel() only applies to the run it interrupted
            self._stop_event.clear()

    async def _ingest(self, sources: Iterable[Path | str]) -> IngestionResult:
        self.total_merged = 0
        self.total_failed = 0

        locations, listing_errors = await expand_sources(sources)
        failures = [SourceFailure(source=e.source, reason=e.reason) for e in listing_errors]
        result = IngestionResult(
            index=LogIndex(),
            sources=len(locations) + len(listing_errors),
            failures=failures,
        )

        if not locations:
            if failures:
                raise AllSourcesFailedError(failures)
            logger.warning("No log files found in the given sources")
            return result

        pending: asyncio.Queue[Path] = asyncio.Queue()
        for location in locations:
            pending.put_nowait(location)
        results: asyncio.Queue[SourceResult] = asyncio.Queue()

        width = min(self.workers, len(locations))
        tasks = [
            asyncio.create_task(self._worker(pending, results), name=f"ingest-worker-{i}")
            for i in range(width)
        ]
        logger.debug("Started %d ingestion workers for %d sources", width, len(locations))

        try:
            for _ in range(len(locations)):
                received = await results.get()
                if isinstance(received, SourceFailure):
                    result.failures.append(received)
                    self.total_failed += 1
                    continue
                result.index.merge(received.index)
                result.parsed_lines += received.parsed_lines
                result.skipped_lines += received.skipped_lines
                self.total_merged += 1
        finally:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)

        logger.info(
            "Ingested %d/%d sources: %d records kept, %d malformed lines skipped",
            result.succeeded,
            result.sources,
            len(result.index),
            result.skipped_lines,
        )
        if result.succeeded == 0:
            raise AllSourcesFailedError(result.failures)
        return result


def run_ingestion(
    sources: Sequence[Path | str],
    filters: "FilterSettings",
    ingestion: "IngestionSettings | None" = None,
) -> IngestionResult:
    """Synchronous entry point around ``ParallelIngestor.ingest``."""
    if ingestion is None:
        ingestor = ParallelIngestor(filters)
    else:
        ingestor = ParallelIngestor.from_settings(filters, ingestion)
    return asyncio.run(ingestor.ingest(sources))
