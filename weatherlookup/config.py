"""Application configuration pulled from environment variables via pydantic."""
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from utils.logging_utils import get_tagged_logger
logger = get_tagged_logger(__name__, tag="config")

DISAMBIGUATION_POLICIES = ("auto_select", "always_choose")
TEMPERATURE_UNITS = ("celsius", "fahrenheit")
RECENT_STORES = ("file", "memory", "redis")


class Settings(BaseSettings):
    """Environment-driven configuration for weather lookups."""
    model_config = SettingsConfigDict(env_prefix="WEATHER_", extra="ignore")

    weather_source: str = "open_meteo"  # options: open_meteo
    geocoding_url: str = "https://geocoding-api.open-meteo.com/v1/search"
    forecast_url: str = "https://api.open-meteo.com/v1/forecast"
    candidate_count: int = Field(default=5, ge=1, le=100)
    language: str = "en"
    request_timeout_seconds: float = Field(default=10.0, gt=0)
    include_hourly_humidity: bool = True
    http_cache_seconds: int = 0  # in-memory response cache; 0 disables
    disambiguation: str = "auto_select"  # options: auto_select, always_choose
    default_unit: str = "celsius"  # options: celsius, fahrenheit
    recent_limit: int = Field(default=6, ge=1)
    recent_storage_key: str = "weather_recent_v1"
    recent_store: str = "file"  # options: file, memory, redis
    recent_store_path: Path = Field(default_factory=lambda: Path.home() / ".weatherlookup" / "recent.json")
    recent_redis_url: str | None = None
    log_level: str = "WARNING"

    @field_validator("geocoding_url", "forecast_url", mode="after")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize endpoint URLs so query strings attach cleanly."""
        return str(v).rstrip("/")

    @field_validator("disambiguation", mode="after")
    @classmethod
    def check_disambiguation(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in DISAMBIGUATION_POLICIES:
            raise ValueError(f"disambiguation must be one of {DISAMBIGUATION_POLICIES}, got '{v}'")
        return v

    @field_validator("default_unit", mode="after")
    @classmethod
    def check_default_unit(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in TEMPERATURE_UNITS:
            raise ValueError(f"default_unit must be one of {TEMPERATURE_UNITS}, got '{v}'")
        return v

    @field_validator("recent_store", mode="after")
    @classmethod
    def check_recent_store(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in RECENT_STORES:
            raise ValueError(f"recent_store must be one of {RECENT_STORES}, got '{v}'")
        return v


settings = Settings()


if __name__ == "__main__":
    logger.logger.setLevel("DEBUG")
    logger.debug(f"Loaded settings: {settings.model_dump_json(indent=4)}")
