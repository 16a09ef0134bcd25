"""
Trip model for fleet trips and their closing.
"""
from sqlalchemy import Column, String, Boolean, Float, Text
from app.db.base import BaseModel


class Trip(BaseModel):
    """
    A single vehicle trip with its cash and expense figures.

    `approved` and `approval_viewed` are written only by the transitions in
    TripService. `approval_viewed` is nullable: rows created before the
    column existed hold NULL, which counts as unseen.
    """
    __tablename__ = "trips"

    user_id = Column(String(50), nullable=False, index=True)  # Owner username
    approved = Column(Boolean, default=False, nullable=False, index=True)
    approval_viewed = Column(Boolean, default=False, nullable=True)

    route = Column(String(200), nullable=False, default="")
    start_date = Column(String(20), nullable=False, default="")
    driver = Column(String(100), nullable=False, default="")
    vehicle = Column(String(100), nullable=False, default="")

    km_start = Column(Float, nullable=False, default=0)
    km_end = Column(Float, nullable=False, default=0)

    value_withdraw = Column(Float, nullable=False, default=0)
    value_received = Column(Float, nullable=False, default=0)
    return_notes = Column(Text, nullable=True)

    expense_fuel = Column(Float, nullable=False, default=0)
    expense_daily = Column(Float, nullable=False, default=0)
    expense_assistant = Column(Float, nullable=False, default=0)
    expense_toll = Column(Float, nullable=False, default=0)
    expense_other = Column(Float, nullable=False, default=0)
