"""
Response envelopes shared by all routes.
"""
from pydantic import BaseModel
from typing import Generic, TypeVar

T = TypeVar("T")


class MessageResponse(BaseModel):
    """Schema for responses carrying only a message."""
    message: str


class DataResponse(MessageResponse, Generic[T]):
    """Schema for responses carrying a message and a payload."""
    data: T
