"""
Trip lifecycle: creation, edits and the approval state machine.

    Draft --approve--> Approved-Unseen --acknowledge--> Approved-Seen
      ^                      |                              |
      +--------reopen--------+------------------------------+

Only the transition methods below write `approved` and `approval_viewed`.
Each write is one conditional UPDATE, so the state is checked by the
database at write time instead of trusting what the client last saw.
"""
import logging
from typing import Any, Dict, List

from sqlalchemy import or_, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import ConflictError, InvalidInputError, NotFoundError, StorageError
from app.core.policy import Operation, authorize, ensure_mutable, ownership_filter
from app.core.security import Principal
from app.models.trip import Trip
from app.schemas.trip import TripCreate

logger = logging.getLogger(__name__)

# Fields the client can never set directly.
STRUCTURAL_FIELDS = frozenset({"_id", "id", "created_at", "updated_at", "user_id", "approved", "approval_viewed"})


class TripService:
    """Trip operations bound to one database session."""

    def __init__(self, db: Session):
        self.db = db

    def _execute(self, statement) -> int:
        """Run one write statement in its own transaction and return matched rows."""
        try:
            result = self.db.execute(statement)
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Trip write failed", exc_info=exc)
            raise StorageError() from exc
        return result.rowcount

    def _get(self, trip_id: int) -> Trip:
        trip = self.db.query(Trip).filter(Trip.id == trip_id).first()
        if not trip:
            raise NotFoundError("Trip")
        return trip

    def list_trips(self, principal: Principal) -> List[Trip]:
        """All trips for admins, own trips for members, newest first."""
        query = self.db.query(Trip)
        owner = ownership_filter(principal)
        if owner is not None:
            query = query.filter(Trip.user_id == owner)
        return query.order_by(Trip.created_at.desc(), Trip.id.desc()).all()

    def get(self, principal: Principal, trip_id: int) -> Trip:
        trip = self._get(trip_id)
        authorize(principal, Operation.READ, owner=trip.user_id)
        return trip

    def create(self, principal: Principal, data: TripCreate) -> Trip:
        """Create a draft owned by the caller."""
        trip = Trip(
            **data.model_dump(),
            user_id=principal.username,
            approved=False,
            approval_viewed=False,
        )
        self.db.add(trip)
        try:
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Trip insert failed", exc_info=exc)
            raise StorageError() from exc
        self.db.refresh(trip)
        logger.info("Trip %s created by %r", trip.id, principal.username)
        return trip

    def update(self, principal: Principal, trip_id: int, patch: Dict[str, Any]) -> Trip:
        """Apply a partial edit to a draft trip."""
        changes = {key: value for key, value in patch.items() if key not in STRUCTURAL_FIELDS}
        if not changes:
            raise InvalidInputError("No fields to update")
        for key, value in changes.items():
            if value is None and not Trip.__table__.c[key].nullable:
                raise InvalidInputError(f"{key} cannot be null")

        trip = self._get(trip_id)
        authorize(principal, Operation.UPDATE, owner=trip.user_id)
        ensure_mutable(trip.approved)

        statement = (
            update(Trip)
            .where(Trip.id == trip_id, Trip.approved.is_(False))
            .values(**changes)
            .execution_options(synchronize_session=False)
        )
        owner = ownership_filter(principal)
        if owner is not None:
            statement = statement.where(Trip.user_id == owner)

        if self._execute(statement) == 0:
            # Approved (or removed) between the read and the write
            self.db.expire_all()
            ensure_mutable(self._get(trip_id).approved)
            raise ConflictError("Trip changed while updating; try again")

        self.db.expire_all()
        logger.info("Trip %s updated by %r", trip_id, principal.username)
        return self._get(trip_id)

    def approve(self, principal: Principal, trip_id: int) -> None:
        """Draft -> Approved-Unseen. Both flags are written in one statement."""
        authorize(principal, Operation.APPROVE)
        statement = (
            update(Trip)
            .where(Trip.id == trip_id, Trip.approved.is_(False))
            .values(approved=True, approval_viewed=False)
            .execution_options(synchronize_session=False)
        )
        if self._execute(statement) == 0:
            self._get(trip_id)
            raise ConflictError("Trip is already approved")
        self.db.expire_all()
        logger.info("Trip %s approved by %r", trip_id, principal.username)

    def reopen(self, principal: Principal, trip_id: int) -> None:
        """Approved-* -> Draft."""
        authorize(principal, Operation.REOPEN)
        statement = (
            update(Trip)
            .where(Trip.id == trip_id, Trip.approved.is_(True))
            .values(approved=False, approval_viewed=False)
            .execution_options(synchronize_session=False)
        )
        if self._execute(statement) == 0:
            self._get(trip_id)
            raise ConflictError("Trip is not approved")
        self.db.expire_all()
        logger.info("Trip %s reopened by %r", trip_id, principal.username)

    def delete(self, principal: Principal, trip_id: int) -> None:
        authorize(principal, Operation.DELETE)
        trip = self._get(trip_id)
        self.db.delete(trip)
        try:
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Trip delete failed", exc_info=exc)
            raise StorageError() from exc
        logger.info("Trip %s deleted by %r", trip_id, principal.username)

    def acknowledge_approvals(self, username: str) -> int:
        """Approved-Unseen -> Approved-Seen for every approved trip of a user."""
        statement = (
            update(Trip)
            .where(Trip.user_id == username, Trip.approved.is_(True))
            .where(or_(Trip.approval_viewed.is_(None), Trip.approval_viewed.is_(False)))
            .values(approval_viewed=True)
            .execution_options(synchronize_session=False)
        )
        count = self._execute(statement)
        self.db.expire_all()
        return count
