from __future__ import annotations

from fastapi import APIRouter

from app.schemas.trip import HealthOut

SERVICE_NAME = "trip-planner-api"

router = APIRouter()


@router.get("/health", response_model=HealthOut)
def health() -> HealthOut:
    return HealthOut(ok=True, service=SERVICE_NAME)
