"""Ranked statistics computed from a LogIndex.

Rankings sort ``(count, path)`` pairs in reverse as a unit: most hits first,
and among equal counts the lexicographically greatest path first.
"""

from __future__ import annotations

import logging

from weblogviz.domain.analytics.dtos import DailyTop, PathCount, Report
from weblogviz.domain.logs.index import LogIndex
from weblogviz.services.ingestion.schemas import IngestionResult

logger = logging.getLogger(__name__)


def compute_stats(index: LogIndex) -> list[PathCount]:
    """Every path with its hit count, fully ranked."""
    return sorted(
        (PathCount(count, path) for path, count in index.count_by_path().items()),
        reverse=True,
    )


def top_by_count(index: LogIndex, n: int) -> list[PathCount]:
    """The ``n`` most requested paths.

    Returns all paths when there are fewer than ``n``.

    Raises:
        ValueError: If ``n`` is negative.
    """
    if n < 0:
        raise ValueError(f"n must be >= 0, got {n}")
    return compute_stats(index)[:n]


def daily_top(index: LogIndex, days: int, n: int) -> list[DailyTop]:
    """Rank paths separately for each of the ``days`` most recent dates.

    Each day is ranked from a fresh index rebuilt from that day's records
    only, so the result never depends on traffic from other days.

    Raises:
        ValueError: If ``days`` or ``n`` is negative.
    """
    if days < 0:
        raise ValueError(f"days must be >= 0, got {days}")

    daily: list[DailyTop] = []
    for day in sorted(index.dates(), reverse=True)[:days]:
        records = index.records_on_date(day)
        day_index = LogIndex.from_records(records)
        daily.append(DailyTop(date=day, count=len(records), top=top_by_count(day_index, n)))
    return daily


def compute_report(source: LogIndex | IngestionResult, top_n: int, days: int) -> Report:
    """Compute the overall and per-day rankings for a run.

    Args:
        source: The merged index, or the whole ingestion result when the
            failed sources should be carried into the report.
        top_n: Entries per ranking.
        days: Number of most recent days to break down.
    """
    if isinstance(source, IngestionResult):
        index, failures = source.index, list(source.failures)
    else:
        index, failures = source, []

    report = Report(
        top_n=top_n,
        days=days,
        total_records=len(index),
        overall=top_by_count(index, top_n),
        daily=daily_top(index, days, top_n),
        failures=failures,
    )
    logger.debug(
        "Computed report: %d records, %d ranked paths, %d days",
        report.total_records,
        len(report.overall),
        len(report.daily),
    )
    return report
