"""
Authorization decisions for trips and administrative resources.

Pure functions: they never touch the database. Callers resolve the record
owner first and pass it in.
"""
import enum
from typing import Optional

from app.core.exceptions import AuthenticationError, AuthorizationError
from app.core.security import Principal

ADMIN_ONLY = "Admin only"
NOT_OWNER = "Access denied: not your record"
APPROVED_LOCKED = "Trip already approved/closed. Editing is blocked."


class Operation(str, enum.Enum):
    READ = "read"
    UPDATE = "update"
    APPROVE = "approve"
    REOPEN = "reopen"
    DELETE = "delete"
    MANAGE_USERS = "manage_users"
    MANAGE_CATALOG = "manage_catalog"
    BACKUP = "backup"


# Operations a member may perform on records they own.
OWNER_OPERATIONS = frozenset({Operation.READ, Operation.UPDATE})


def require_principal(principal: Optional[Principal]) -> Principal:
    if principal is None:
        raise AuthenticationError()
    return principal


def authorize(principal: Optional[Principal], operation: Operation, owner: Optional[str] = None) -> Principal:
    """
    Allow or reject an operation.

    Raises AuthenticationError when there is no principal and
    AuthorizationError when the principal may not perform the operation.
    """
    principal = require_principal(principal)
    if principal.is_admin:
        return principal
    if operation not in OWNER_OPERATIONS:
        raise AuthorizationError(ADMIN_ONLY)
    if owner is None or owner != principal.username:
        raise AuthorizationError(NOT_OWNER)
    return principal


def ownership_filter(principal: Optional[Principal]) -> Optional[str]:
    """Owner every listed record must have, or None when unrestricted."""
    principal = require_principal(principal)
    if principal.is_admin:
        return None
    return principal.username


def ensure_mutable(approved: Optional[bool]) -> None:
    """Approved trips reject field edits from every role."""
    if approved:
        raise AuthorizationError(APPROVED_LOCKED)
