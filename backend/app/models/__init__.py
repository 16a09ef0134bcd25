"""Models package - Import all models for SQLAlchemy registration."""
from app.models.user import User
from app.models.trip import Trip
from app.models.catalog import Driver, Vehicle, Route

__all__ = [
    "User",
    "Trip",
    "Driver",
    "Vehicle",
    "Route",
]
