"""
Catalog models: drivers, vehicles and routes offered when filling a trip.
"""
from sqlalchemy import Column, String, Boolean
from app.db.base import BaseModel


class Driver(BaseModel):
    __tablename__ = "drivers"

    name = Column(String(100), nullable=False, index=True)
    phone = Column(String(30), nullable=False, default="")
    active = Column(Boolean, default=True, nullable=False)


class Vehicle(BaseModel):
    __tablename__ = "vehicles"

    model = Column(String(100), nullable=False, index=True)
    plate = Column(String(20), nullable=False, default="")


class Route(BaseModel):
    __tablename__ = "routes"

    name = Column(String(200), nullable=False, index=True)
