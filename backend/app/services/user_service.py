"""
User service: registration, login and account management.
"""
import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    InvalidInputError,
    NotFoundError,
    StorageError,
)
from app.core.policy import ADMIN_ONLY, Operation, authorize
from app.core.security import (
    Principal,
    Role,
    create_access_token,
    get_password_hash,
    verify_password,
)
from app.models.trip import Trip
from app.models.user import User
from app.schemas.user import Token, UserCreate, UserUpdate

logger = logging.getLogger(__name__)

DUPLICATE_USERNAME = "Username already exists"
BAD_CREDENTIALS = "Incorrect username or password"
OWNS_TRIPS = "User still owns trips; delete them first"
NAME_HAS_TRIPS = "Username is still referenced by existing trips"


class UserService:
    """Account operations bound to one database session."""

    def __init__(self, db: Session):
        self.db = db

    def _commit(self) -> None:
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise InvalidInputError(DUPLICATE_USERNAME) from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("User write failed", exc_info=exc)
            raise StorageError() from exc

    def get_by_username(self, username: str) -> Optional[User]:
        return self.db.query(User).filter(User.username == username).first()

    def _owns_trips(self, username: str) -> bool:
        """Trips are keyed by owner username, so a name with trips stays reserved."""
        return self.db.query(Trip.id).filter(Trip.user_id == username).first() is not None

    def _get(self, user_id: int) -> User:
        user = self.db.query(User).filter(User.id == user_id).first()
        if not user:
            raise NotFoundError("User")
        return user

    def login(self, username: str, password: str) -> Token:
        """Check credentials and issue a session token."""
        user = self.get_by_username(username)
        if not user or not verify_password(password, user.hashed_password):
            logger.info("Failed login for %r", username)
            raise AuthenticationError(BAD_CREDENTIALS)

        logger.info("User %r logged in", user.username)
        return Token(
            token=create_access_token(user.username, user.is_admin),
            role=Role.from_flag(user.is_admin),
            isAdmin=user.is_admin,
            user=user.username,
        )

    def register(self, data: UserCreate, caller: Optional[Principal] = None) -> User:
        """
        Create an account.

        Anyone may register a member account while self-registration is
        enabled. Only an admin caller may create administrators, and only an
        admin may register anybody once self-registration is disabled.
        """
        caller_is_admin = caller is not None and caller.is_admin
        if not settings.ALLOW_SELF_REGISTRATION:
            authorize(caller, Operation.MANAGE_USERS)
        if data.is_admin and not caller_is_admin:
            raise AuthorizationError(ADMIN_ONLY)

        if self.get_by_username(data.username):
            raise InvalidInputError(DUPLICATE_USERNAME)
        if self._owns_trips(data.username):
            raise InvalidInputError(NAME_HAS_TRIPS)

        user = User(
            username=data.username,
            hashed_password=get_password_hash(data.password),
            is_admin=data.is_admin,
        )
        self.db.add(user)
        self._commit()
        self.db.refresh(user)
        logger.info("Registered user %r (admin=%s)", user.username, user.is_admin)
        return user

    def list_users(self, principal: Principal) -> List[User]:
        authorize(principal, Operation.MANAGE_USERS)
        return self.db.query(User).order_by(User.username).all()

    def update_user(self, principal: Principal, user_id: int, data: UserUpdate) -> User:
        authorize(principal, Operation.MANAGE_USERS)
        user = self._get(user_id)

        clash = self.db.query(User).filter(User.username == data.username, User.id != user_id).first()
        if clash:
            raise InvalidInputError(DUPLICATE_USERNAME)
        if data.username != user.username:
            if self._owns_trips(user.username):
                raise InvalidInputError(OWNS_TRIPS)
            if self._owns_trips(data.username):
                raise InvalidInputError(NAME_HAS_TRIPS)

        user.username = data.username
        user.is_admin = data.is_admin
        if data.password:
            user.hashed_password = get_password_hash(data.password)
        self._commit()
        self.db.refresh(user)
        logger.info("User %s updated by %r", user_id, principal.username)
        return user

    def delete_user(self, principal: Principal, user_id: int) -> None:
        authorize(principal, Operation.MANAGE_USERS)
        user = self._get(user_id)
        if user.username == principal.username:
            raise InvalidInputError("You cannot delete your own account")
        if self._owns_trips(user.username):
            raise InvalidInputError(OWNS_TRIPS)
        self.db.delete(user)
        self._commit()
        logger.info("User %s deleted by %r", user_id, principal.username)

    def ensure_admin_exists(self) -> User:
        """Seed the default administrator, or restore its admin flag."""
        username = settings.DEFAULT_ADMIN_USERNAME
        user = self.get_by_username(username)
        if user is None:
            logger.info("Admin user %r not found. Creating default...", username)
            user = User(
                username=username,
                hashed_password=get_password_hash(settings.DEFAULT_ADMIN_PASSWORD),
                is_admin=True,
            )
            self.db.add(user)
        else:
            user.is_admin = True
        self._commit()
        self.db.refresh(user)

        if verify_password(settings.DEFAULT_ADMIN_PASSWORD, user.hashed_password):
            logger.warning("Admin user %r still uses the default password", username)
        return user
