"""
Authentication routes for login and registration.
"""
from typing import Optional
from fastapi import APIRouter, Depends, status
from app.api.dependencies import get_optional_principal, get_user_service
from app.core.security import Principal
from app.core.utils import format_response
from app.schemas.common import DataResponse
from app.schemas.user import UserCreate, UserLogin, Token, UserResponse
from app.services.user_service import UserService

router = APIRouter(tags=["auth"])


@router.post("/login", response_model=DataResponse[Token])
def login(credentials: UserLogin, users: UserService = Depends(get_user_service)):
    """Login and get JWT token."""
    token = users.login(credentials.username, credentials.password)
    return format_response(token, "Login successful")


@router.post("/register", response_model=DataResponse[UserResponse], status_code=status.HTTP_201_CREATED)
def register(
    user_data: UserCreate,
    caller: Optional[Principal] = Depends(get_optional_principal),
    users: UserService = Depends(get_user_service)
):
    """Register a new user. Only admins may create administrators."""
    user = users.register(user_data, caller)
    return format_response(UserResponse.model_validate(user), "User created successfully")
