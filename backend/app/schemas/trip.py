"""
Pydantic schemas for Trip entity.
"""
from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class TripBase(BaseModel):
    """Descriptive and monetary trip fields a client may write."""
    route: str = ""
    start_date: str = ""
    driver: str = ""
    vehicle: str = ""

    km_start: float = 0
    km_end: float = 0

    value_withdraw: float = 0
    value_received: float = 0
    return_notes: Optional[str] = None

    expense_fuel: float = 0
    expense_daily: float = 0
    expense_assistant: float = 0
    expense_toll: float = 0
    expense_other: float = 0


class TripCreate(TripBase):
    """Schema for trip creation. Ownership and approval fields are ignored."""
    pass


class TripUpdate(BaseModel):
    """Schema for trip update; only fields sent are applied."""
    route: Optional[str] = None
    start_date: Optional[str] = None
    driver: Optional[str] = None
    vehicle: Optional[str] = None

    km_start: Optional[float] = None
    km_end: Optional[float] = None

    value_withdraw: Optional[float] = None
    value_received: Optional[float] = None
    return_notes: Optional[str] = None

    expense_fuel: Optional[float] = None
    expense_daily: Optional[float] = None
    expense_assistant: Optional[float] = None
    expense_toll: Optional[float] = None
    expense_other: Optional[float] = None


class TripResponse(TripBase):
    """Schema for trip response."""
    id: int
    user_id: str
    approved: bool
    approval_viewed: Optional[bool] = None
    created_at: datetime

    class Config:
        from_attributes = True


class TripCreated(BaseModel):
    """Identifier of a newly created trip."""
    id: int
