"""
Application exceptions and their HTTP mapping.

Services raise these instead of HTTPException so the business rules stay
independent of the transport. register_exception_handlers() turns them into
{"error": <message>} responses.

    AppError (base)         -> 500
    InvalidInputError       -> 400
    AuthenticationError     -> 401  (one generic message, never the reason)
    AuthorizationError      -> 403
    NotFoundError           -> 404
    ConflictError           -> 409
    StorageError            -> 500
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.core.utils import format_error

logger = logging.getLogger(__name__)

AUTHENTICATION_FAILED = "Not authenticated: invalid or missing token"
STORAGE_FAILED = "Storage operation failed"


class AppError(Exception):
    """Base class for errors that carry a client-safe message."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str = "An unexpected error occurred"):
        self.message = message
        super().__init__(message)


class InvalidInputError(AppError):
    """Malformed body or identifier."""

    status_code = status.HTTP_400_BAD_REQUEST


class AuthenticationError(AppError):
    """Missing, malformed, forged or expired credentials."""

    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = AUTHENTICATION_FAILED):
        super().__init__(message)


class AuthorizationError(AppError):
    """Valid identity without the required role or ownership."""

    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, resource: str = "Resource"):
        super().__init__(f"{resource} not found")


class ConflictError(AppError):
    """Requested transition does not apply to the record's current state."""

    status_code = status.HTTP_409_CONFLICT


class StorageError(AppError):
    """Backing store failure or timeout. Not retried."""

    def __init__(self, message: str = STORAGE_FAILED):
        super().__init__(message)


def register_exception_handlers(app: FastAPI) -> None:
    """Map application, validation and storage errors to JSON responses."""

    @app.exception_handler(AuthenticationError)
    async def handle_authentication_error(request: Request, exc: AuthenticationError):
        return JSONResponse(
            status_code=exc.status_code,
            content=format_error(exc.message),
            headers={"WWW-Authenticate": "Bearer"},
        )

    @app.exception_handler(AppError)
    async def handle_app_error(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content=format_error(exc.message))

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        detail = None
        if errors:
            first = errors[0]
            location = ".".join(str(part) for part in first.get("loc", ()))
            detail = f"{location}: {first.get('msg')}"
        message = f"Invalid data ({detail})" if detail else "Invalid data"
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=format_error(message))

    @app.exception_handler(SQLAlchemyError)
    async def handle_storage_failure(request: Request, exc: SQLAlchemyError):
        logger.error("Storage failure on %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=format_error(STORAGE_FAILED),
        )

    @app.exception_handler(TimeoutError)
    async def handle_timeout(request: Request, exc: TimeoutError):
        logger.error("Storage timeout on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=format_error(STORAGE_FAILED),
        )
