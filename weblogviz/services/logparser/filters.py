"""Retention policy for parsed records.

``keep`` is the pure predicate deciding whether a record is counted.
``strip_query_params`` is the naive path rewrite applied on ingestion,
before ``keep`` runs, when query parameters are ignored.
"""
from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING, Iterable

from .constants import CRAWLER_SIGNATURES, MEDIA_EXTENSIONS, OK_STATUS
from .schemas import Record

if TYPE_CHECKING:
    from weblogviz.config.settings import FilterSettings


def is_media_path(path: str, extensions: Iterable[str] = MEDIA_EXTENSIONS) -> bool:
    """True if the lowercased path ends in one of the media extensions."""
    lowered = path.lower()
    return any(lowered.endswith("." + ext) for ext in extensions)


def is_crawler(user_agent: str, signatures: Iterable[str] = CRAWLER_SIGNATURES) -> bool:
    """True if the user agent contains any crawler signature (case-sensitive)."""
    return any(signature in user_agent for signature in signatures)


def strip_query_params(path: str) -> str:
    """Return the part of the path before the first '?'."""
    return path.split("?", 1)[0]


def keep(record: Record, config: "FilterSettings") -> bool:
    """Decide whether a record is retained under the given filter policy."""
    if not config.include_errors and record.status != OK_STATUS:
        return False
    if not config.include_media and is_media_path(record.path, config.media_extensions):
        return False
    if not config.include_crawlers and is_crawler(record.user_agent, config.crawler_signatures):
        return False
    return True


def prepare(record: Record, config: "FilterSettings") -> Record | None:
    """Apply the path rewrite, then the filter.

    Returns:
        The record to index (possibly with a rewritten path), or None.
    """
    if config.ignore_query_params and "?" in record.path:
        record = dataclasses.replace(record, path=strip_query_params(record.path))
    return record if keep(record, config) else None
