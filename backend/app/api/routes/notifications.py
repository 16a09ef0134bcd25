"""
Approval notification routes, always scoped to the caller.
"""
from fastapi import APIRouter, Depends
from typing import List
from app.api.dependencies import get_current_principal, get_notification_service
from app.core.security import Principal
from app.core.utils import format_response
from app.schemas.common import DataResponse
from app.schemas.notification import DismissResult, NotificationItem
from app.services.notification_service import NotificationService

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=DataResponse[List[NotificationItem]])
def list_notifications(
    principal: Principal = Depends(get_current_principal),
    notifications: NotificationService = Depends(get_notification_service)
):
    """List the caller's approved trips not yet acknowledged."""
    return format_response(notifications.list_unseen(principal.username))


@router.post("/dismiss", response_model=DataResponse[DismissResult])
def dismiss_notifications(
    principal: Principal = Depends(get_current_principal),
    notifications: NotificationService = Depends(get_notification_service)
):
    """Mark all of the caller's approvals as seen."""
    count = notifications.dismiss_all(principal.username)
    return format_response(DismissResult(dismissed=count), "Notifications dismissed")
