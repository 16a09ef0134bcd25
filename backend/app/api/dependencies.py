"""
Shared route dependencies: authentication guard and service factories.
"""
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.exceptions import AuthenticationError
from app.core.security import Principal, decode_access_token
from app.db.session import get_db
from app.services.backup_service import BackupService
from app.services.catalog_service import CatalogService
from app.services.notification_service import NotificationService
from app.services.trip_service import TripService
from app.services.user_service import UserService

# Errors are raised by the guard itself so every failure looks the same.
bearer_scheme = HTTPBearer(auto_error=False)


def _principal_from(credentials: Optional[HTTPAuthorizationCredentials]) -> Principal:
    if credentials is None or credentials.scheme != "Bearer" or not credentials.credentials:
        raise AuthenticationError()
    return decode_access_token(credentials.credentials)


async def get_current_principal(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Principal:
    """Require `Authorization: Bearer <token>` and resolve its principal."""
    principal = _principal_from(credentials)
    request.state.principal = principal
    return principal


async def get_optional_principal(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[Principal]:
    """Resolve a principal when a valid token is sent, None otherwise."""
    if credentials is None:
        return None
    try:
        principal = _principal_from(credentials)
    except AuthenticationError:
        return None
    request.state.principal = principal
    return principal


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    return UserService(db)


def get_trip_service(db: Session = Depends(get_db)) -> TripService:
    return TripService(db)


def get_notification_service(db: Session = Depends(get_db)) -> NotificationService:
    return NotificationService(db)


def get_catalog_service(db: Session = Depends(get_db)) -> CatalogService:
    return CatalogService(db)


def get_backup_service(db: Session = Depends(get_db)) -> BackupService:
    return BackupService(db)
