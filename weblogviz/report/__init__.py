"""Report rendering - pure functions from statistics to text."""
from .formatter import format_ranking, render_report

__all__ = ["format_ranking", "render_report"]
