from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Any

import httpx

from app.core.config import settings
from app.core.errors import ConfigurationError, UpstreamServiceError
from app.integrations.http_utils import DEFAULT_TIMEOUT, send_request


@dataclass(frozen=True)
class PlaceQuery:
    radius_meters: int
    categories: str
    limit: int = 10


RESTAURANT_SEARCH = PlaceQuery(
    radius_meters=5000,
    categories="catering.restaurant,catering.cafe",
    limit=12,
)
ATTRACTION_SEARCH = PlaceQuery(
    radius_meters=8000,
    categories="tourism.attraction,tourism.sights",
    limit=12,
)


class PlacesClient:
    """Geoapify Places search inside a circle around a point."""

    def __init__(
        self,
        *,
        api_key: str,
        base_url: str,
        timeout: httpx.Timeout | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout or DEFAULT_TIMEOUT
        self._transport = transport

    @property
    def enabled(self) -> bool:
        return bool(self._api_key)

    def search(
        self,
        *,
        lon: float,
        lat: float,
        radius_meters: int,
        categories: str,
        limit: int = 10,
    ) -> list[dict[str, Any]]:
        if not self.enabled:
            raise ConfigurationError("Missing GEOAPIFY_API_KEY in backend/.env")

        params: dict[str, Any] = {
            "categories": categories,
            "filter": f"circle:{lon},{lat},{radius_meters}",
            "limit": limit,
            "apiKey": self._api_key,
        }
        response = send_request(
            "GET",
            f"{self._base_url}/places",
            params=params,
            timeout=self._timeout,
            transport=self._transport,
        )
        if response.is_error:
            raise UpstreamServiceError("Geoapify Places", response.status_code)

        return extract_places(response.json())

    def search_query(self, query: PlaceQuery, *, lon: float, lat: float) -> list[dict[str, Any]]:
        return self.search(
            lon=lon,
            lat=lat,
            radius_meters=query.radius_meters,
            categories=query.categories,
            limit=query.limit,
        )


def extract_places(payload: Any) -> list[dict[str, Any]]:
    # GeoJSON FeatureCollection; anything else yields no places.
    if not isinstance(payload, dict):
        return []
    features = payload.get("features")
    if not isinstance(features, list):
        return []
    return [normalize_feature(feature) for feature in features if isinstance(feature, dict)]


def normalize_feature(feature: dict[str, Any]) -> dict[str, Any]:
    properties = feature.get("properties") or {}
    geometry = feature.get("geometry") or {}
    coordinates = geometry.get("coordinates") or []

    return {
        "placeId": properties.get("place_id"),
        "name": properties.get("name") or properties.get("address_line1") or "Unknown place",
        "categories": list(properties.get("categories") or []),
        "addressLine1": properties.get("address_line1") or "",
        "addressLine2": properties.get("address_line2") or "",
        "city": properties.get("city") or "",
        "country": properties.get("country") or "",
        "distanceMeters": properties.get("distance"),
        "location": {
            "lon": coordinates[0] if len(coordinates) > 0 else None,
            "lat": coordinates[1] if len(coordinates) > 1 else None,
        },
        "website": properties.get("website") or None,
        "openingHours": properties.get("opening_hours") or None,
    }


@lru_cache
def get_places_client() -> PlacesClient:
    return PlacesClient(
        api_key=settings.geoapify_api_key,
        base_url=settings.geoapify_base_url,
    )
