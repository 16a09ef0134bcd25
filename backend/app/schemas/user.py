"""
Pydantic schemas for User entity.
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from app.core.security import Role


class UserBase(BaseModel):
    """Base user schema."""
    username: str = Field(..., min_length=1, max_length=50)
    is_admin: bool = False


class UserCreate(UserBase):
    """Schema for user registration."""
    password: str = Field(..., min_length=1)


class UserUpdate(BaseModel):
    """Schema for user update. An empty password keeps the current one."""
    username: str = Field(..., min_length=1, max_length=50)
    is_admin: bool = False
    password: Optional[str] = None


class UserResponse(UserBase):
    """Schema for user response. The password hash is never exposed."""
    id: int
    created_at: datetime

    class Config:
        from_attributes = True


class UserLogin(BaseModel):
    """Schema for user login."""
    username: str
    password: str


class Token(BaseModel):
    """Schema for login response payload."""
    token: str
    token_type: str = "bearer"
    role: Role
    isAdmin: bool
    user: str
