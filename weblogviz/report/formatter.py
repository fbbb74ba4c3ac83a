"""Plain-text rendering of a computed Report."""

from __future__ import annotations

from weblogviz.domain.analytics.dtos import PathCount, Report

SEPARATOR = "#" * 46


def format_ranking(ranking: list[PathCount], title: str = "overall") -> list[str]:
    """Render one ranking block."""
    lines = [
        f"URL paths with the most hits ({title}) - Top {len(ranking)}",
        "# of hits:\tpath",
    ]
    lines.extend(f"{entry.count}:\t\t{entry.path}" for entry in ranking)
    lines.append(SEPARATOR)
    return lines


def render_report(report: Report) -> str:
    """Render the overall ranking, the per-day rankings and any skipped sources."""
    lines = format_ranking(report.overall)

    lines.append("Date:\t\t# of hits")
    for day in report.daily:
        lines.append(f"{day.date.isoformat()}:\t{day.count}")
        lines.extend(format_ranking(day.top, title=day.date.isoformat()))

    if report.failures:
        lines.append(f"Skipped sources ({len(report.failures)}):")
        lines.extend(f"  {failure.source}: {failure.reason}" for failure in report.failures)

    return "\n".join(lines)
