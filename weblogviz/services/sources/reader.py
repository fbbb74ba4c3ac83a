"""Async access to log sources on the local filesystem.

This module handles:
- Reading a file's text, transparently decompressing ``.gz`` files
- Expanding a directory, one level deep, into the files it contains
- Translating every OS / codec failure into SourceUnavailableError
"""
from __future__ import annotations

import asyncio
import gzip
import logging
import zlib
from pathlib import Path
from typing import Iterable

import aiofiles
import aiofiles.os

from weblogviz.exceptions import SourceUnavailableError


logger = logging.getLogger(__name__)

GZIP_SUFFIX = ".gz"


class SourceReader:
    """Reads the full text of a log source."""

    def __init__(self, encoding: str = "utf-8", errors: str = "strict") -> None:
        """Create a reader.

        Args:
            encoding (str, optional): Text encoding of the logs. Defaults to "utf-8".
            errors (str, optional): Codec error handler. With "strict" an
                undecodable file is reported as unavailable. Defaults to "strict".
        """
        self.encoding = encoding
        self.errors = errors

    async def read_text(self, location: Path) -> str:
        """Return the decoded contents of ``location``.

        Raises:
            SourceUnavailableError: If the file cannot be opened, read,
                decompressed or decoded.
        """
        try:
            if location.name.endswith(GZIP_SUFFIX):
                async with aiofiles.open(location, "rb") as f:
                    raw = await f.read()
                # Decompression is CPU bound, keep it off the event loop
                data: bytes = await asyncio.to_thread(gzip.decompress, raw)
                return data.decode(self.encoding, errors=self.errors)

            async with aiofiles.open(
                location, "r", encoding=self.encoding, errors=self.errors
            ) as f:
                return await f.read()
        except (OSError, EOFError, zlib.error, UnicodeDecodeError, LookupError) as e:
            raise SourceUnavailableError(location, str(e) or type(e).__name__) from e


async def list_sources(location: Path) -> list[Path]:
    """List the files directly inside a directory, sorted by name.

    Sub-directories are skipped, the expansion is not recursive.

    Raises:
        SourceUnavailableError: If the directory cannot be listed.
    """
    try:
        names: list[str] = await aiofiles.os.listdir(location)
    except OSError as e:
        raise SourceUnavailableError(location, str(e)) from e

    files: list[Path] = []
    for name in sorted(names):
        entry = location / name
        if await aiofiles.os.path.isfile(entry):
            files.append(entry)
        else:
            logger.debug("Skipping non-file entry %s", entry)
    return files


async def expand_sources(
    sources: Iterable[Path | str],
) -> tuple[list[Path], list[SourceUnavailableError]]:
    """Turn the requested locations into a flat list of files.

    Directories are expanded one level. Anything that is not a directory is
    passed through as a file, so a missing path fails later, when it is read,
    like any other unreadable source.

    Returns:
        tuple of (files to ingest, directories that could not be listed)
    """
    files: list[Path] = []
    errors: list[SourceUnavailableError] = []
    for source in sources:
        location = Path(source)
        if await aiofiles.os.path.isdir(location):
            try:
                listed = await list_sources(location)
            except SourceUnavailableError as e:
                logger.warning("Cannot list directory %s: %s", location, e.reason)
                errors.append(e)
                continue
            logger.info("Found %d file(s) in %s", len(listed), location)
            files.extend(listed)
        else:
            files.append(location)
    return files, errors
