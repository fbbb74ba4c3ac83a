import re
import logging
from datetime import datetime
from typing import Iterable, Iterator

from .constants import access_log_pattern, TIMESTAMP_FORMAT
from .schemas import Record


logger = logging.getLogger(__name__)


class LogParser:
    """Parses combined-format access log lines into Records.

    The parser holds nothing but the compiled grammar, which is read-only,
    so a single instance can be shared by every ingestion worker thread.
    """

    def __init__(self, pattern: re.Pattern[str] | None = None) -> None:
        """Create a parser.

        Args:
            pattern (re.Pattern[str], optional): Compiled line grammar.
                Defaults to the shared combined log format pattern.
        """
        self.pattern = pattern or access_log_pattern()

    def validate_log_line(self, log_line: str) -> re.Match[str] | None:
        """Match the log line against the access log grammar."""
        return self.pattern.match(log_line.rstrip("\r\n"))

    def parse_line(self, log_line: str) -> Record | None:
        """Turn one line into a Record, or None if it does not fit the grammar."""
        matched = self.validate_log_line(log_line)
        if not matched:
            return None

        datadict = matched.groupdict()
        try:
            ts = datetime.strptime(datadict["dateandtime"], TIMESTAMP_FORMAT)
        except ValueError:
            logger.debug("Unparseable timestamp '%s'", datadict["dateandtime"])
            return None

        return Record(
            ip=datadict["ipaddress"],
            timestamp=ts,
            path=datadict["url"],
            status=int(datadict["status_code"]),
            referrer=datadict["referrer"],
            user_agent=datadict["user_agent"],
        )

    def iter_records(
        self, lines: Iterable[str], source: str = "<string>"
    ) -> Iterator[Record]:
        """Yield a Record for every well-formed line, skipping the rest.

        Blank lines are ignored without a diagnostic.

        Args:
            lines: Raw log lines, with or without line endings.
            source: Name used in diagnostics for skipped lines.
        """
        for line in lines:
            if not line.strip():
                continue
            record = self.parse_line(line)
            if record is None:
                logger.warning("Skipping malformed line in %s: '%s'", source, line.rstrip("\r\n"))
                continue
            yield record
