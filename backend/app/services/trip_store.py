from __future__ import annotations

from datetime import date
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.trip import Trip
from app.models.user import User


def create_trip(
    db: Session,
    *,
    user_id: str,
    title: str,
    destination: str,
    start_date: date,
    end_date: date,
    budget: int,
    vibe: str,
    plan_json: dict[str, Any],
) -> Trip:
    trip = Trip(
        title=title,
        destination=destination,
        start_date=start_date,
        end_date=end_date,
        budget=budget,
        vibe=vibe,
        plan_json=plan_json,
        user_id=user_id,
    )
    db.add(trip)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(trip)
    return trip


def list_trips_for_user(db: Session, user_id: str) -> list[Trip]:
    # Unbounded: a user's whole history comes back in one response.
    return list(
        db.execute(
            select(Trip)
            .where(Trip.user_id == user_id)
            .order_by(Trip.created_at.asc(), Trip.id.asc())
        ).scalars()
    )


def get_trip(db: Session, trip_id: str) -> Trip | None:
    return db.get(Trip, trip_id)


def upsert_user(db: Session, *, email: str, password: str, name: str | None) -> User:
    user = db.execute(select(User).where(User.email == email)).scalar_one_or_none()
    if user:
        user.name = name
    else:
        user = User(email=email, password=password, name=name)
        db.add(user)
    db.commit()
    db.refresh(user)
    return user
