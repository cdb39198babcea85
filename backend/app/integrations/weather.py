from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any

import httpx

from app.core.config import settings
from app.core.errors import UpstreamServiceError
from app.integrations.http_utils import DEFAULT_TIMEOUT, send_request

DAILY_FIELDS = ("temperature_2m_max", "temperature_2m_min", "precipitation_sum")


@dataclass
class DailyForecast:
    time: list[str] = field(default_factory=list)
    temp_max: list[float | None] = field(default_factory=list)
    temp_min: list[float | None] = field(default_factory=list)
    precipitation: list[float | None] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "time": self.time,
            "tempMax": self.temp_max,
            "tempMin": self.temp_min,
            "precipitation": self.precipitation,
        }


class WeatherClient:
    def __init__(
        self,
        *,
        base_url: str,
        timeout: httpx.Timeout | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout or DEFAULT_TIMEOUT
        self._transport = transport

    def daily_forecast(
        self,
        latitude: float,
        longitude: float,
        timezone: str | None = None,
    ) -> DailyForecast:
        params: dict[str, Any] = {
            "latitude": latitude,
            "longitude": longitude,
            "daily": ",".join(DAILY_FIELDS),
            "timezone": timezone or "auto",
        }
        response = send_request(
            "GET",
            f"{self._base_url}/forecast",
            params=params,
            timeout=self._timeout,
            transport=self._transport,
        )
        if response.is_error:
            raise UpstreamServiceError("Weather", response.status_code)

        payload = response.json()
        daily = payload.get("daily") if isinstance(payload, dict) else None
        if not isinstance(daily, dict):
            daily = {}
        return DailyForecast(
            time=list(daily.get("time") or []),
            temp_max=list(daily.get("temperature_2m_max") or []),
            temp_min=list(daily.get("temperature_2m_min") or []),
            precipitation=list(daily.get("precipitation_sum") or []),
        )


@lru_cache
def get_weather_client() -> WeatherClient:
    return WeatherClient(base_url=settings.open_meteo_forecast_url)
