from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from weblogviz.services.logparser.constants import CRAWLER_SIGNATURES, MEDIA_EXTENSIONS


class FilterSettings(BaseSettings):
    """Record retention policy.

    Read once per run and never mutated, so it is safe to hand the same
    instance to every ingestion worker.
    """

    model_config = SettingsConfigDict(
        env_prefix="FILTER_", env_file=".env", extra="ignore", frozen=True
    )

    include_errors: bool = Field(default=False, description="Count requests whose status is not 200")
    include_media: bool = Field(default=False, description="Count static asset paths (css, js, images...)")
    include_crawlers: bool = Field(default=False, description="Count requests from crawler user agents")
    ignore_query_params: bool = Field(
        default=False,
        description="Group paths by the part before the first '?'",
    )
    media_extensions: tuple[str, ...] = Field(
        default=MEDIA_EXTENSIONS,
        description="Extensions that mark a path as a media asset",
    )
    crawler_signatures: tuple[str, ...] = Field(
        default=CRAWLER_SIGNATURES,
        description="Case-sensitive user agent substrings that mark a crawler",
    )

    @field_validator("media_extensions")
    @classmethod
    def normalize_media_extensions(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        """Lowercase extensions and drop any leading dot."""
        extensions = tuple(ext.strip().lower().lstrip(".") for ext in value)
        if any(not ext for ext in extensions):
            raise ValueError("Media extensions must not be empty")
        return extensions

    @field_validator("crawler_signatures")
    @classmethod
    def validate_crawler_signatures(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        """An empty signature would match every user agent."""
        if any(not signature for signature in value):
            raise ValueError("Crawler signatures must not be empty")
        return value


class IngestionSettings(BaseSettings):
    """Parallel ingestion configuration settings."""

    model_config = SettingsConfigDict(env_prefix="INGEST_", env_file=".env", extra="ignore")

    workers: int = Field(default=4, ge=1, description="Number of sources ingested concurrently")
    encoding: str = Field(default="utf-8", description="Text encoding of the log files")
    encoding_errors: Literal["strict", "replace", "ignore"] = Field(
        default="strict",
        description="How undecodable bytes are handled. 'strict' makes the source fail.",
    )


class ReportSettings(BaseSettings):
    """Report size configuration settings."""

    model_config = SettingsConfigDict(env_prefix="REPORT_", env_file=".env", extra="ignore")

    top_n: int = Field(default=10, ge=0, description="Number of paths listed per ranking")
    days: int = Field(default=7, ge=0, description="Number of most recent days broken down")


class Settings(BaseSettings):
    """Main application settings.

    Configuration precedence (highest to lowest):
    1. Init arguments (command line)
    2. Environment variables
    3. .env file
    4. Default values

    Example .env file:
        APP_LOG_LEVEL=DEBUG
        FILTER_INCLUDE_ERRORS=true
        FILTER_CRAWLER_SIGNATURES=["bot", "curl"]
        INGEST_WORKERS=8
        REPORT_TOP_N=25
    """

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    name: str = Field(default="weblogviz", description="Application name")
    version: str = Field(default="0.1.0", description="Application version")
    debug: bool = Field(default=False, description="Enable debug logging")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )

    # Sub-configurations
    filters: FilterSettings = Field(default_factory=FilterSettings)
    ingestion: IngestionSettings = Field(default_factory=IngestionSettings)
    report: ReportSettings = Field(default_factory=ReportSettings)

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: object) -> object:
        """Accept lowercase level names."""
        return value.upper() if isinstance(value, str) else value

    @property
    def effective_log_level(self) -> str:
        """DEBUG when debug mode is on, the configured level otherwise."""
        return "DEBUG" if self.debug else self.log_level


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    This function is cached to ensure we only parse configuration once.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
