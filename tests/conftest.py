import os
from pathlib import Path

import pytest

from weblogviz.config.settings import FilterSettings

TESTS_DIR = Path(__file__).parent


@pytest.fixture(scope="session", autouse=True)
def baseline_settings_env():
    """Provide baseline env vars so tests are not affected by local .env.

    Pydantic-settings precedence: init args > env vars > .env > defaults.
    Setting these ensures stable defaults regardless of any .env present.
    """
    os.environ.update({
        # App
        "APP_NAME": "weblogviz",
        "APP_VERSION": "0.1.0",
        "APP_DEBUG": "false",
        "APP_LOG_LEVEL": "INFO",
        # Filters
        "FILTER_INCLUDE_ERRORS": "false",
        "FILTER_INCLUDE_MEDIA": "false",
        "FILTER_INCLUDE_CRAWLERS": "false",
        "FILTER_IGNORE_QUERY_PARAMS": "false",
        # Ingestion
        "INGEST_WORKERS": "4",
        "INGEST_ENCODING": "utf-8",
        "INGEST_ENCODING_ERRORS": "strict",
        # Report
        "REPORT_TOP_N": "10",
        "REPORT_DAYS": "7",
    })


@pytest.fixture(autouse=True)
def refresh_settings_cache():
    """Clear settings cache so env changes take effect per test."""
    from weblogviz.config.settings import get_settings
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def sample_text() -> str:
    """The five-line sample access log."""
    return (TESTS_DIR / "sample_log.txt").read_text(encoding="utf-8")


@pytest.fixture
def sample_lines(sample_text: str) -> list[str]:
    return sample_text.splitlines()


@pytest.fixture
def load_valid_ipv4_log() -> list[str]:
    """Load the contents of the valid IPv4 log file."""
    with open(TESTS_DIR / "valid_ipv4_log.txt", "r", encoding="utf-8") as f:
        return f.readlines()


@pytest.fixture
def load_valid_ipv6_log() -> list[str]:
    """Load the contents of the valid IPv6 log file."""
    with open(TESTS_DIR / "valid_ipv6_log.txt", "r", encoding="utf-8") as f:
        return f.readlines()


@pytest.fixture
def load_invalid_logs() -> list[str]:
    """Load the contents of the invalid log file."""
    with open(TESTS_DIR / "invalid_logs.txt", "r", encoding="utf-8") as f:
        return f.readlines()


@pytest.fixture
def sample_config() -> FilterSettings:
    """Errors excluded, everything else included, query strings ignored."""
    return FilterSettings(
        include_errors=False,
        include_media=True,
        include_crawlers=True,
        ignore_query_params=True,
    )


@pytest.fixture
def include_all_config() -> FilterSettings:
    return FilterSettings(
        include_errors=True,
        include_media=True,
        include_crawlers=True,
        ignore_query_params=False,
    )
