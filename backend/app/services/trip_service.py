from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.orm import Session

from app.core.errors import DestinationNotFoundError
from app.integrations.geocoding import GeocodedPlace, GeocodingClient
from app.integrations.places import ATTRACTION_SEARCH, RESTAURANT_SEARCH, PlacesClient
from app.integrations.weather import DailyForecast, WeatherClient
from app.models.trip import Trip
from app.schemas.trip import PlanTripIn, parse_trip_date
from app.services.trip_store import create_trip

logger = logging.getLogger(__name__)

NEXT_IDEAS = (
    "Add Place Details endpoint (click a place card → details)",
    "Add caching (Redis) so repeated searches are fast",
    "Add pagination + category filters in UI",
)


def plan_trip(
    payload: PlanTripIn,
    db: Session,
    *,
    geocoder: GeocodingClient,
    weather: WeatherClient,
    places: PlacesClient,
) -> Trip:
    """Resolve the destination, gather forecast and nearby places, save the trip.

    Each lookup feeds the next one and the database write comes last, so a
    failure anywhere leaves nothing behind.
    """
    # Unreadable dates raise here, before any upstream call.
    start_date = parse_trip_date(payload.start_date)
    end_date = parse_trip_date(payload.end_date)

    geo = geocoder.search(payload.destination)
    if geo is None:
        logger.info("Destination %r could not be geocoded", payload.destination)
        raise DestinationNotFoundError(payload.destination)

    forecast = weather.daily_forecast(geo.latitude, geo.longitude, geo.timezone)

    restaurants = places.search_query(RESTAURANT_SEARCH, lon=geo.longitude, lat=geo.latitude)
    attractions = places.search_query(ATTRACTION_SEARCH, lon=geo.longitude, lat=geo.latitude)
    logger.info(
        "Planning %s: %d forecast days, %d restaurants, %d attractions",
        geo.name,
        len(forecast.time),
        len(restaurants),
        len(attractions),
    )

    plan_json = build_plan_document(
        payload,
        geo=geo,
        forecast=forecast,
        restaurants=restaurants,
        attractions=attractions,
    )

    trip = create_trip(
        db,
        user_id=payload.user_id,
        title=f"{geo.name} trip",
        destination=geo.name,
        start_date=start_date,
        end_date=end_date,
        budget=payload.budget,
        vibe=payload.vibe,
        plan_json=plan_json,
    )
    logger.info("Created trip %s for user %s", trip.id, trip.user_id)
    return trip


def build_plan_document(
    payload: PlanTripIn,
    *,
    geo: GeocodedPlace,
    forecast: DailyForecast,
    restaurants: list[dict[str, Any]],
    attractions: list[dict[str, Any]],
) -> dict[str, Any]:
    return {
        "destination": {
            "query": payload.destination,
            "resolved": f"{geo.name}, {geo.country}",
            "latitude": geo.latitude,
            "longitude": geo.longitude,
            "timezone": geo.timezone,
        },
        "trip": {
            "startDate": payload.start_date,
            "endDate": payload.end_date,
            "budget": payload.budget,
            "vibe": payload.vibe,
        },
        "weather": {"daily": forecast.to_dict()},
        "places": {
            "restaurants": restaurants,
            "attractions": attractions,
        },
        "summary": build_summary(payload.vibe, geo.name, payload.budget),
        "nextIdeas": list(NEXT_IDEAS),
    }


def build_summary(vibe: str, place_name: str, budget: int) -> str:
    return f"A {vibe} trip to {place_name} within ${budget}. Includes weather + nearby places."
