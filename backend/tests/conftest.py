"""Shared fixtures: in-memory SQLite store and stubbed upstream APIs."""

from __future__ import annotations

import os

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")

from typing import Any, Callable, Iterator

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.db import build_engine, get_db
from app.integrations.geocoding import GeocodingClient, get_geocoding_client
from app.integrations.places import PlacesClient, get_places_client
from app.integrations.weather import WeatherClient, get_weather_client
from app.main import app
from app.models import Base, User

GEOCODING_URL = "https://geocoding.test/v1"
FORECAST_URL = "https://forecast.test/v1"
PLACES_URL = "https://places.test/v2"

AMSTERDAM_GEOCODE = {
    "results": [
        {
            "id": 2759794,
            "name": "Amsterdam",
            "latitude": 52.37403,
            "longitude": 4.88969,
            "country": "Netherlands",
            "timezone": "Europe/Amsterdam",
        }
    ]
}

AMSTERDAM_FORECAST = {
    "latitude": 52.37,
    "longitude": 4.89,
    "daily": {
        "time": ["2026-02-10", "2026-02-11", "2026-02-12"],
        "temperature_2m_max": [6.1, 7.4, 5.0],
        "temperature_2m_min": [1.2, 2.3, -0.5],
        "precipitation_sum": [0.4, 0.0, 3.1],
    },
}


def place_feature(
    name: str | None,
    *,
    place_id: str,
    distance: int | None = None,
    categories: list[str] | None = None,
    **extra: Any,
) -> dict[str, Any]:
    properties: dict[str, Any] = {"place_id": place_id, **extra}
    if name is not None:
        properties["name"] = name
    if distance is not None:
        properties["distance"] = distance
    if categories is not None:
        properties["categories"] = categories
    return {
        "type": "Feature",
        "properties": properties,
        "geometry": {"type": "Point", "coordinates": [4.9, 52.37]},
    }


RESTAURANT_FEATURES = {
    "type": "FeatureCollection",
    "features": [
        place_feature(
            "Foodhallen",
            place_id="r1",
            distance=1800,
            categories=["catering", "catering.restaurant"],
            address_line1="Foodhallen",
            address_line2="Bellamyplein 51, Amsterdam",
            city="Amsterdam",
            country="Netherlands",
            website="https://foodhallen.nl",
        ),
        place_feature(
            None,
            place_id="r2",
            distance=450,
            categories=["catering.cafe"],
            address_line1="Prinsengracht 10",
        ),
    ],
}

ATTRACTION_FEATURES = {
    "type": "FeatureCollection",
    "features": [
        place_feature(
            "Rijksmuseum",
            place_id="a1",
            distance=2100,
            categories=["tourism.sights"],
            opening_hours="Mo-Su 09:00-17:00",
        ),
    ],
}


class FakeUpstream:
    """Routes outbound requests to canned responses and records every call."""

    def __init__(self) -> None:
        self.calls: list[httpx.Request] = []
        self.geocode: tuple[int, Any] = (200, AMSTERDAM_GEOCODE)
        self.forecast: tuple[int, Any] = (200, AMSTERDAM_FORECAST)
        self.places: dict[str, tuple[int, Any]] = {
            "catering": (200, RESTAURANT_FEATURES),
            "tourism": (200, ATTRACTION_FEATURES),
        }

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        host = request.url.host
        if host == "geocoding.test":
            status, body = self.geocode
        elif host == "forecast.test":
            status, body = self.forecast
        elif host == "places.test":
            prefix = request.url.params["categories"].split(".", 1)[0]
            status, body = self.places[prefix]
        else:
            raise AssertionError(f"unexpected outbound request to {request.url}")
        return httpx.Response(status, json=body)

    @property
    def hosts(self) -> list[str]:
        return [call.url.host for call in self.calls]

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def session_factory() -> Iterator[sessionmaker]:
    engine = build_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    factory = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    yield factory
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db(session_factory: sessionmaker) -> Iterator[Session]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def user(db: Session) -> User:
    user = User(email="traveller@example.com", password="secret", name="Traveller")
    db.add(user)
    db.commit()
    return user


@pytest.fixture
def places_api_key() -> str:
    return "test-geoapify-key"


@pytest.fixture
def client(
    session_factory: sessionmaker,
    upstream: FakeUpstream,
    places_api_key: str,
) -> Iterator[TestClient]:
    transport = upstream.transport()

    def _get_db() -> Iterator[Session]:
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    overrides: dict[Callable[..., Any], Callable[..., Any]] = {
        get_db: _get_db,
        get_geocoding_client: lambda: GeocodingClient(
            base_url=GEOCODING_URL, transport=transport
        ),
        get_weather_client: lambda: WeatherClient(base_url=FORECAST_URL, transport=transport),
        get_places_client: lambda: PlacesClient(
            api_key=places_api_key, base_url=PLACES_URL, transport=transport
        ),
    }
    app.dependency_overrides.update(overrides)
    try:
        # 500s come from the server error middleware, which re-raises after responding.
        with TestClient(app, raise_server_exceptions=False) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()
