"""Ingestion module - parallel source ingestion and merging."""
from .schemas import IngestionResult, PartialIndex, SourceFailure
from .service import ParallelIngestor, build_index, run_ingestion

__all__ = [
    "IngestionResult",
    "ParallelIngestor",
    "PartialIndex",
    "SourceFailure",
    "build_index",
    "run_ingestion",
]
