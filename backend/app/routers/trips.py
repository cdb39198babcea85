from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.db import get_db
from app.core.errors import TripNotFoundError
from app.integrations.geocoding import GeocodingClient, get_geocoding_client
from app.integrations.places import PlacesClient, get_places_client
from app.integrations.weather import WeatherClient, get_weather_client
from app.models.trip import Trip
from app.schemas.trip import PlanTripIn, TripOut
from app.services.trip_service import plan_trip
from app.services.trip_store import get_trip, list_trips_for_user

router = APIRouter()


@router.post("/trips/plan", response_model=TripOut, status_code=201)
def create_trip_plan(
    payload: PlanTripIn,
    db: Session = Depends(get_db),
    geocoder: GeocodingClient = Depends(get_geocoding_client),
    weather: WeatherClient = Depends(get_weather_client),
    places: PlacesClient = Depends(get_places_client),
) -> Trip:
    return plan_trip(
        payload,
        db,
        geocoder=geocoder,
        weather=weather,
        places=places,
    )


@router.get("/trips", response_model=list[TripOut])
def list_trips(
    user_id: str = Query(..., alias="userId", min_length=1),
    db: Session = Depends(get_db),
) -> list[Trip]:
    return list_trips_for_user(db, user_id)


@router.get("/trips/{trip_id}", response_model=TripOut)
def read_trip(trip_id: str, db: Session = Depends(get_db)) -> Trip:
    trip = get_trip(db, trip_id)
    if not trip:
        raise TripNotFoundError(trip_id)
    return trip
