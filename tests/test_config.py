"""Tests for configuration management."""

import pytest
from pydantic import ValidationError

from weblogviz.config import FilterSettings, IngestionSettings, ReportSettings, Settings, get_settings
from weblogviz.services.logparser.constants import CRAWLER_SIGNATURES, MEDIA_EXTENSIONS


def test_default_settings():
    """Test default settings are loaded correctly."""
    settings = Settings()

    assert settings.name == "weblogviz"
    assert settings.version == "0.1.0"
    assert settings.debug is False
    assert settings.log_level == "INFO"


def test_filter_defaults():
    """Everything is filtered out by default and query strings are kept."""
    filters = Settings().filters

    assert filters.include_errors is False
    assert filters.include_media is False
    assert filters.include_crawlers is False
    assert filters.ignore_query_params is False
    assert filters.media_extensions == MEDIA_EXTENSIONS
    assert filters.crawler_signatures == CRAWLER_SIGNATURES


def test_environment_override(monkeypatch):
    """Test that environment variables override defaults."""
    monkeypatch.setenv("FILTER_INCLUDE_ERRORS", "true")
    monkeypatch.setenv("INGEST_WORKERS", "8")
    monkeypatch.setenv("REPORT_TOP_N", "25")
    monkeypatch.setenv("APP_LOG_LEVEL", "debug")

    settings = Settings()

    assert settings.filters.include_errors is True
    assert settings.ingestion.workers == 8
    assert settings.report.top_n == 25
    assert settings.log_level == "DEBUG"


def test_list_settings_from_env(monkeypatch):
    """Signature lists can be replaced via environment variables."""
    monkeypatch.setenv("FILTER_CRAWLER_SIGNATURES", '["bot", "curl"]')
    monkeypatch.setenv("FILTER_MEDIA_EXTENSIONS", '[".PNG", "webp"]')

    filters = FilterSettings()

    assert filters.crawler_signatures == ("bot", "curl")
    assert filters.media_extensions == ("png", "webp")


def test_empty_crawler_signature_rejected():
    with pytest.raises(ValidationError, match="must not be empty"):
        FilterSettings(crawler_signatures=("bot", ""))


def test_filter_settings_are_frozen():
    filters = FilterSettings()
    with pytest.raises(ValidationError):
        filters.include_errors = True


@pytest.mark.parametrize(
    ("factory", "kwargs"),
    [
        (IngestionSettings, {"workers": 0}),
        (ReportSettings, {"top_n": -1}),
        (ReportSettings, {"days": -3}),
    ],
)
def test_numeric_bounds(factory, kwargs):
    with pytest.raises(ValidationError):
        factory(**kwargs)


def test_effective_log_level():
    assert Settings(debug=True, log_level="WARNING").effective_log_level == "DEBUG"
    assert Settings(log_level="WARNING").effective_log_level == "WARNING"


def test_settings_caching():
    """Test that get_settings returns cached instance."""
    settings1 = get_settings()
    settings2 = get_settings()

    # Should be the same instance due to @lru_cache
    assert settings1 is settings2
