"""Aggregation module - ranked statistics over a LogIndex."""
from .service import compute_report, compute_stats, daily_top, top_by_count

__all__ = ["compute_report", "compute_stats", "daily_top", "top_by_count"]
