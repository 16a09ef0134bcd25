"""
User management routes (admin only).
"""
from fastapi import APIRouter, Depends
from typing import List
from app.api.dependencies import get_current_principal, get_user_service
from app.core.security import Principal
from app.core.utils import format_response
from app.schemas.common import DataResponse, MessageResponse
from app.schemas.user import UserResponse, UserUpdate
from app.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=DataResponse[List[UserResponse]])
def list_users(
    principal: Principal = Depends(get_current_principal),
    users: UserService = Depends(get_user_service)
):
    """List all users."""
    return format_response([UserResponse.model_validate(u) for u in users.list_users(principal)])


@router.put("/{user_id}", response_model=DataResponse[UserResponse])
def update_user(
    user_id: int,
    user_data: UserUpdate,
    principal: Principal = Depends(get_current_principal),
    users: UserService = Depends(get_user_service)
):
    """Update username, role and optionally password."""
    user = users.update_user(principal, user_id, user_data)
    return format_response(UserResponse.model_validate(user), "User updated successfully")


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: int,
    principal: Principal = Depends(get_current_principal),
    users: UserService = Depends(get_user_service)
):
    """Delete a user."""
    users.delete_user(principal, user_id)
    return {"message": "User deleted successfully"}
