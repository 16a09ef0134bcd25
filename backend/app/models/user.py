"""
User model for authentication and user management.
"""
from sqlalchemy import Column, String, Boolean
from app.db.base import BaseModel


class User(BaseModel):
    """Application user. Trips reference users by username."""
    __tablename__ = "users"

    username = Column(String(50), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    is_admin = Column(Boolean, default=False, nullable=False)
