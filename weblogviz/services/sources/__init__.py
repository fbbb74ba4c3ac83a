"""Source access - reading files and expanding directories."""
from .reader import SourceReader, expand_sources, list_sources

__all__ = ["SourceReader", "expand_sources", "list_sources"]
