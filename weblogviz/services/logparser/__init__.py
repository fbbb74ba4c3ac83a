"""Log parser module - parsing and filtering only, no I/O."""
from .logparser import LogParser
from .schemas import Record
from .filters import keep, prepare, is_crawler, is_media_path, strip_query_params

__all__ = [
    "LogParser",
    "Record",
    "keep",
    "prepare",
    "is_crawler",
    "is_media_path",
    "strip_query_params",
]
