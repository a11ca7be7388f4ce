"""Application configuration using Pydantic Settings."""

from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
SuggestMode = Literal["prefix", "substring", "mixed"]

COMPLETION_ENDPOINTS: dict[str, str] = {
    "prefix": "prefix_completion",
    "substring": "substring_completion",
    "mixed": "mixed_completion",
}


class Settings(BaseSettings):
    """Adapter settings, configurable via environment variables or .env file.

    Instances are frozen: every component receives the same immutable settings
    object at construction time.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # Paths
    data_dir: Path = Path("data")

    # Logging
    log_level: LogLevel = "INFO"
    log_file_enabled: bool = False
    log_file_path: Path | None = None
    log_file_max_bytes: int = 10 * 1024 * 1024  # 10 MB
    log_file_backup_count: int = 5
    log_requests: bool = False  # log every backend URL at DEBUG

    @property
    def resolved_log_file_path(self) -> Path:
        """Return log file path, defaulting to data_dir/pubdict.log if not set."""
        return self.log_file_path or self.data_dir / "pubdict.log"

    # PubDictionaries
    pubdictionaries_base_url: str = "https://pubdictionaries.org"
    pubdictionaries_id_uri: str = "pubdictionaries.org/dictionaries"
    suggest: SuggestMode = "mixed"

    # URL template overrides
    url_get_dict_infos: str | None = None
    url_get_entries: str | None = None
    url_get_matches: str | None = None

    # Paging defaults
    default_page: int = 1
    default_page_size: int = 15

    # Transport
    request_timeout: float = 30.0

    @property
    def dict_infos_url(self) -> str:
        return self.url_get_dict_infos or (
            self.pubdictionaries_base_url + "/dictionaries/$filterDictID.json"
        )

    @property
    def dict_entries_url(self) -> str:
        """URL template listing all entries of one dictionary."""
        return self.url_get_entries or (
            self.pubdictionaries_base_url + "/dictionaries/$filterDictID/entries.json"
        )

    @property
    def find_terms_url(self) -> str:
        """URL template looking up identifiers, optionally restricted to dictionaries."""
        return self.url_get_entries or (
            self.pubdictionaries_base_url
            + "/find_terms.json?dictionaries=$filterDictIDs&ids=$filterIDs"
        )

    @property
    def matches_url(self) -> str:
        base = self.url_get_matches or self.pubdictionaries_base_url + "/dictionaries/$filterDictID/"
        return base + COMPLETION_ENDPOINTS[self.suggest] + "?term=$queryString"

    @property
    def dict_id_prefix(self) -> str:
        """Prefix of every fully-qualified dictionary identifier."""
        return "https://" + self.pubdictionaries_id_uri + "/"


settings = Settings()
