"""
Pydantic schemas for catalog entries.
"""
from pydantic import BaseModel, Field
from typing import Optional


class DriverSave(BaseModel):
    """Create when id is absent, update otherwise."""
    id: Optional[int] = None
    name: str = Field(..., min_length=1)
    phone: str = ""
    active: bool = True


class DriverResponse(DriverSave):
    id: int

    class Config:
        from_attributes = True


class VehicleSave(BaseModel):
    id: Optional[int] = None
    model: str = Field(..., min_length=1)
    plate: str = ""


class VehicleResponse(VehicleSave):
    id: int

    class Config:
        from_attributes = True


class RouteSave(BaseModel):
    id: Optional[int] = None
    name: str = Field(..., min_length=1)


class RouteResponse(RouteSave):
    id: int

    class Config:
        from_attributes = True
