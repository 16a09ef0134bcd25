"""
Security utilities for JWT authentication and password hashing.
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Mapping, Optional
import base64
import enum
import hashlib
import logging

import bcrypt
from jose import JWTError, jwt
from pydantic import BaseModel

from app.core.config import settings
from app.core.exceptions import AuthenticationError

logger = logging.getLogger(__name__)

# Fixed signing algorithm; tokens using any other algorithm are rejected.
ALGORITHM = "HS256"

_dev_secret_warned = False


class Role(str, enum.Enum):
    """Closed set of roles a principal can hold."""
    ADMIN = "admin"
    MEMBER = "member"

    @classmethod
    def from_flag(cls, is_admin: bool) -> "Role":
        return cls.ADMIN if is_admin else cls.MEMBER


class Principal(BaseModel):
    """Authenticated identity rebuilt from a verified token."""
    username: str
    role: Role
    expires_at: datetime

    model_config = {"frozen": True}

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN


def _pre_hash_password(password: str) -> bytes:
    """
    Pre-hash password with SHA256 to support passwords longer than 72 bytes.
    The digest is base64 encoded (44 bytes): under bcrypt's 72-byte limit
    and free of NUL bytes.
    """
    return base64.b64encode(hashlib.sha256(password.encode('utf-8')).digest())


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash. Never raises on bad input."""
    if not plain_password or not hashed_password:
        return False
    try:
        return bcrypt.checkpw(_pre_hash_password(plain_password), hashed_password.encode('utf-8'))
    except (ValueError, TypeError):
        # Malformed stored hash
        return False


def get_password_hash(password: str) -> str:
    """
    Hash a password with the configured bcrypt work factor.
    Every path that stores a password (registration, update, seeding) goes
    through here so all hashes share one cost.
    """
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    hashed = bcrypt.hashpw(_pre_hash_password(password), salt)
    return hashed.decode('utf-8')


def _signing_secret() -> str:
    global _dev_secret_warned
    if settings.using_dev_secret and not _dev_secret_warned:
        logger.warning("JWT_SECRET is not set; signing tokens with the development secret")
        _dev_secret_warned = True
    return settings.jwt_secret


def create_access_token(username: str, is_admin: bool, expires_delta: Optional[timedelta] = None) -> str:
    """Create a signed JWT carrying the username and admin claim."""
    if expires_delta is None:
        expires_delta = timedelta(hours=settings.ACCESS_TOKEN_EXPIRE_HOURS)
    expire = datetime.now(timezone.utc) + expires_delta
    to_encode = {
        "user": username,
        "admin": bool(is_admin),
        "exp": int(expire.timestamp()),
    }
    return jwt.encode(to_encode, _signing_secret(), algorithm=ALGORITHM)


# Admin claim encodings seen in issued tokens, in lookup order.
_ADMIN_CLAIM_ENCODINGS = (
    ("admin", bool),
    ("admin", str),
    ("Admin", bool),
    ("Admin", str),
)
_BOOLEAN_STRINGS = {"true": True, "false": False}


def decode_admin_claim(claims: Mapping[str, Any]) -> bool:
    """Normalize the admin claim to a bool; unrecognized shapes are False."""
    for key, kind in _ADMIN_CLAIM_ENCODINGS:
        value = claims.get(key)
        if kind is bool and isinstance(value, bool):
            return value
        if kind is str and isinstance(value, str) and value in _BOOLEAN_STRINGS:
            return _BOOLEAN_STRINGS[value]
    return False


def decode_access_token(token: str) -> Principal:
    """
    Verify a JWT and build the Principal it describes.

    Rejects other algorithms, bad signatures, expired tokens and tokens
    without a username. All failures raise the same AuthenticationError.
    """
    try:
        payload = jwt.decode(token, _signing_secret(), algorithms=[ALGORITHM])
    except JWTError:
        raise AuthenticationError()

    username = payload.get("user")
    exp = payload.get("exp")
    if not isinstance(username, str) or not username or exp is None:
        raise AuthenticationError()

    try:
        expires_at = datetime.fromtimestamp(int(exp), tz=timezone.utc)
    except (TypeError, ValueError, OverflowError):
        raise AuthenticationError()

    return Principal(
        username=username,
        role=Role.from_flag(decode_admin_claim(payload)),
        expires_at=expires_at,
    )
