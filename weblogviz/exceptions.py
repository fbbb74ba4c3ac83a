"""Exception hierarchy for weblogviz.

Malformed log lines are not represented here: the parser rejects them by
returning ``None`` and the caller logs and moves on.
"""
from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from weblogviz.services.ingestion.schemas import SourceFailure


class WeblogvizError(Exception):
    """Base class for all weblogviz errors."""


class ConfigurationError(WeblogvizError):
    """Raised when arguments or environment settings fail validation."""


class SourceUnavailableError(WeblogvizError):
    """A source could not be opened, listed, read, decompressed or decoded."""

    def __init__(self, source: Path | str, reason: str) -> None:
        self.source = Path(source)
        self.reason = reason
        super().__init__(f"{self.source}: {reason}")


class AllSourcesFailedError(WeblogvizError):
    """Every requested source failed, so there is nothing to report."""

    def __init__(self, failures: list["SourceFailure"]) -> None:
        self.failures = failures
        super().__init__(
            f"All {len(failures)} source(s) failed: "
            + ", ".join(str(failure.source) for failure in failures)
        )
