"""Access log grammar and default filter signatures."""
import re
from functools import lru_cache

# Timestamp layout of the combined log format, e.g. 29/Oct/2018:07:35:39 -0700
TIMESTAMP_FORMAT = "%d/%b/%Y:%H:%M:%S %z"

# Status that counts as a hit when errors are excluded
OK_STATUS = 200

MEDIA_EXTENSIONS: tuple[str, ...] = (
    "txt",
    "xml",
    "css",
    "js",
    "jpg",
    "png",
    "gif",
    "svg",
    "ico",
    "otf",
)

# Case-sensitive substrings, "Bot" and "bot" are both listed on purpose.
CRAWLER_SIGNATURES: tuple[str, ...] = (
    "https:",
    "http:",
    "Bot",
    "bot",
    "crawler",
    "spider",
    "compatible;",
    "subscriber",
    "Gwene",
    "Zapier",
    "Automattic",
    "WhatsApp",
    "curl",
    "scraper",
    "Wget",
    "Python",
    "Ruby",
    "Go",
    "Rome",
    "Jersey",
    "Emacs",
    "+collection@",
    "Slack",
    "Reeder",
    "Twitter",
    "requests",
    "Apache-",
    "perl",
    "uatools",
)

IPV4 = r"\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3}"
IPV6 = r"[0-9a-fA-F:]+?"


@lru_cache(maxsize=1)
def access_log_pattern() -> re.Pattern[str]:
    """Compiled combined access log grammar, shared read-only by all workers."""
    return re.compile(
        rf'^(?P<ipaddress>{IPV6}|{IPV4}) - - '
        r'\[(?P<dateandtime>.*?)\] '
        r'"(?P<method>[A-Z]+) (?P<url>.*?) HTTP/(?P<http_version>[^"]*)" '
        r'(?P<status_code>\d{3}) (?P<bytes_sent>\d+) '
        r'"(?P<referrer>.*?)" "(?P<user_agent>.*?)"$'
    )
