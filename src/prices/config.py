"""Runtime settings loaded from the environment (and an optional ``.env``)."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[2] / "data"


class Settings(BaseSettings):
    # Storage
    data_dir: Path = Field(_DEFAULT_DATA_DIR, alias="PRICES_DATA_DIR")

    # Timeline cache
    cache_ttl_seconds: float = Field(300.0, alias="PRICES_CACHE_TTL_SECONDS", gt=0)
    cache_max_size: int = Field(10_000, alias="PRICES_CACHE_MAX_SIZE", gt=0)

    # Logging
    log_level: str = Field("WARNING", alias="LOG_LEVEL")
    json_logs: bool = Field(False, alias="LOG_JSON")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def timelines_file(self) -> Path:
        return self.data_dir / "timelines.json"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Retrieve a cached instance of Settings to avoid repeated env parsing."""
    return Settings()


__all__ = ["Settings", "get_settings"]
