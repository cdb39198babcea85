from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = Path(__file__).resolve().parents[2] / ".env"


class Settings(BaseSettings):
    database_url: str = Field(..., alias="DATABASE_URL")
    geoapify_api_key: str = Field("", alias="GEOAPIFY_API_KEY")
    geoapify_base_url: str = Field("https://api.geoapify.com/v2", alias="GEOAPIFY_BASE_URL")
    open_meteo_geocoding_url: str = Field(
        "https://geocoding-api.open-meteo.com/v1",
        alias="OPEN_METEO_GEOCODING_URL",
    )
    open_meteo_forecast_url: str = Field(
        "https://api.open-meteo.com/v1",
        alias="OPEN_METEO_FORECAST_URL",
    )
    port: int = Field(8090, alias="PORT")
    cors_origin: str = Field("http://localhost:5173", alias="CORS_ORIGIN")
    http_trust_env: bool = Field(False, alias="HTTP_TRUST_ENV")
    http_timeout_seconds: float = Field(10.0, alias="HTTP_TIMEOUT_SECONDS", gt=0)
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE),
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
