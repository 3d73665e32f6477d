"""Application configuration using pydantic-settings."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Scripture Search"
    debug: bool = False
    log_json: bool | None = Field(default=None, description="Force JSON logs on or off")

    # MongoDB (sermons and notes) - optional, search degrades without it
    mongodb_uri: str | None = Field(default=None)
    mongodb_database: str = Field(default="church")
    mongodb_timeout_ms: int = Field(default=5000)
    sermons_collection: str = Field(default="sermons")
    notes_collection: str = Field(default="notes")

    # Translation sources
    bible_data_url: str = Field(
        default="data/bible",
        description="URL prefix or local directory holding <version>.json files",
    )
    default_bible_version: str = Field(default="kjv")
    preload_versions: list[str] = Field(default_factory=list)
    fetch_timeout_seconds: float = Field(default=30.0)

    # Verse search settings
    search_default_limit: int = Field(default=50, ge=1)
    search_default_threshold: float = Field(default=0.0, ge=0.0)
    search_tolerance: int = Field(default=1, ge=0, le=3, description="Max edit distance per term")
    book_boost: float = Field(default=2.0)
    book_match_cutoff: float = Field(
        default=70,
        ge=0,
        le=100,
        description="Minimum fuzzy score for an abbreviated book name",
    )

    # Unified search settings
    sermon_cache_ttl_seconds: float = Field(default=300.0)
    sermon_page_size: int = Field(default=100)
    notes_page_size: int = Field(default=50)
    unified_bible_limit: int = Field(default=5)
    unified_sermon_limit: int = Field(default=3)
    unified_notes_limit: int = Field(default=3)
    note_snippet_length: int = Field(default=100)

    # Search history
    history_path: str = Field(default="data/search_history.json")
    history_max_entries: int = Field(default=5)

    @property
    def history_file(self) -> Path:
        """Get the search history file as a Path object."""
        return Path(self.history_path)


settings = Settings()
