from app.models.base import Base
from app.models.trip import Trip
from app.models.user import User

__all__ = [
    "Base",
    "User",
    "Trip",
]
