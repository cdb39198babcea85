from __future__ import annotations

from dataclasses import asdict, dataclass
from functools import lru_cache
from typing import Any

import httpx

from app.core.config import settings
from app.core.errors import UpstreamServiceError
from app.integrations.http_utils import DEFAULT_TIMEOUT, send_request


@dataclass(frozen=True)
class GeocodedPlace:
    name: str
    country: str | None
    latitude: float
    longitude: float
    timezone: str | None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class GeocodingClient:
    """Open-Meteo geocoding search, best match only."""

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

    def search(self, destination: str) -> GeocodedPlace | None:
        params: dict[str, Any] = {
            "name": destination,
            "count": 1,
            "language": "en",
            "format": "json",
        }
        response = send_request(
            "GET",
            f"{self._base_url}/search",
            params=params,
            timeout=self._timeout,
            transport=self._transport,
        )
        if response.is_error:
            raise UpstreamServiceError("Geocoding", response.status_code)

        payload = response.json()
        return _top_result(payload)


def _top_result(payload: Any) -> GeocodedPlace | None:
    if not isinstance(payload, dict):
        return None
    results = payload.get("results")
    if not isinstance(results, list) or not results:
        return None
    top = results[0]
    if not isinstance(top, dict):
        return None
    return GeocodedPlace(
        name=top.get("name"),
        country=top.get("country"),
        latitude=top.get("latitude"),
        longitude=top.get("longitude"),
        timezone=top.get("timezone"),
    )


@lru_cache
def get_geocoding_client() -> GeocodingClient:
    return GeocodingClient(base_url=settings.open_meteo_geocoding_url)
