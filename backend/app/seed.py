from __future__ import annotations

import logging
from datetime import date

from sqlalchemy.orm import Session

from app.core.db import SessionLocal
from app.core.logging import init_logging
from app.models.trip import Trip
from app.models.user import User
from app.services.trip_store import create_trip, upsert_user

logger = logging.getLogger(__name__)

DEMO_EMAIL = "demo@tripplanner.com"
DEMO_PASSWORD = "password123"
DEMO_NAME = "Demo User"


def seed_demo_data(db: Session) -> tuple[User, Trip]:
    """Upsert the demo user and give it one more Amsterdam trip."""
    user = upsert_user(db, email=DEMO_EMAIL, password=DEMO_PASSWORD, name=DEMO_NAME)
    trip = create_trip(
        db,
        user_id=user.id,
        title="Amsterdam trip",
        destination="Amsterdam",
        start_date=date(2026, 7, 10),
        end_date=date(2026, 7, 14),
        budget=1500,
        vibe="techno",
        plan_json={
            "summary": "Seeded trip plan JSON.",
            "notes": ["Replace with real plan generation later"],
        },
    )
    return user, trip


def main() -> None:
    init_logging()
    db = SessionLocal()
    try:
        user, trip = seed_demo_data(db)
    finally:
        db.close()
    logger.info("Seed complete: user=%s (%s) trip=%s", user.id, user.email, trip.id)


if __name__ == "__main__":
    main()
