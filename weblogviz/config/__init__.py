"""Configuration module for weblogviz."""

from weblogviz.config.settings import (
    FilterSettings,
    IngestionSettings,
    ReportSettings,
    Settings,
    get_settings,
)

__all__ = [
    "Settings",
    "get_settings",
    "FilterSettings",
    "IngestionSettings",
    "ReportSettings",
]
