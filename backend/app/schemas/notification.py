"""
Pydantic schemas for approval notifications.
"""
from pydantic import BaseModel


class NotificationItem(BaseModel):
    """Minimal view of an approved trip the owner has not seen yet."""
    id: int
    start_date: str
    route: str

    class Config:
        from_attributes = True


class DismissResult(BaseModel):
    dismissed: int
