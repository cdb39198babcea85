from __future__ import annotations

from datetime import date, datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

Vibe = Literal["techno", "nature", "relax", "food", "mixed"]

DATE_FORMATS = (
    "%m/%d/%Y",
    "%Y/%m/%d",
    "%d %B %Y",
    "%d %b %Y",
    "%B %d, %Y",
    "%b %d, %Y",
    "%B %d %Y",
    "%b %d %Y",
)


def parse_trip_date(value: str) -> date:
    """Turn a client date string into a calendar date.

    ISO dates and timestamps are tried first, then a handful of common
    written forms such as ``02/10/2026`` or ``10 Feb 2026``. Raises
    ``ValueError`` when nothing matches.
    """
    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        pass
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    raise ValueError(f"Invalid date: {value!r}")


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PlanTripIn(CamelModel):
    user_id: str = Field(..., min_length=1)
    destination: str = Field(..., min_length=2)
    start_date: str = Field(..., min_length=8)
    end_date: str = Field(..., min_length=8)
    budget: int = Field(..., gt=0)
    vibe: Vibe

    @field_validator("budget", mode="before")
    @classmethod
    def _numeric_budget(cls, value: Any) -> Any:
        # 1200.0 is fine, "1200" and true are not.
        if isinstance(value, (bool, str)):
            raise ValueError("budget must be a number")
        return value


class TripOut(CamelModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    id: str
    title: str
    destination: str
    start_date: date
    end_date: date
    budget: int
    vibe: str
    plan_json: dict[str, Any]
    user_id: str
    created_at: datetime


class HealthOut(BaseModel):
    ok: bool
    service: str
