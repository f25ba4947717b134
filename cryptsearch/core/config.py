from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "Cipher Key Search"
    app_env: Literal["development", "staging", "production"] = "development"
    debug: bool = False
    api_v1_prefix: str = "/api/v1"
    log_level: str = "INFO"

    # Database
    database_url: str = "sqlite+aiosqlite:///./cryptsearch.db"

    # Input limits
    max_ciphertext_length: int = 100_000
    max_period_limit: int = 100
    # Largest key length or period a search may request
    max_search_key_length: int = 12

    # Search defaults (used when a request carries a malformed value)
    default_max_key_length: int = 7
    default_period: int = 3

    # Ranking
    transposition_top_k: int = 3
    polyalphabetic_top_k: int = 5
    vigenere_top_letters: int = 3
    beaufort_top_letters: int = 2

    # Scoring
    score_space_bonus: float = 0.0
    score_symbol_penalty: float = 0.0

    # Execution
    max_parallel_workers: int = 4
    cancel_check_interval: int = 1024

    # Jobs
    max_tracked_jobs: int = 256

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
