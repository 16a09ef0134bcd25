"""
Notification service: approvals the trip owner has not acknowledged yet.
"""
import logging
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.models.trip import Trip
from app.schemas.notification import NotificationItem
from app.services.trip_service import TripService

logger = logging.getLogger(__name__)


class NotificationService:
    """Derived view over trips; owns no state of its own."""

    def __init__(self, db: Session, trips: Optional[TripService] = None):
        self.db = db
        self.trips = trips or TripService(db)

    def list_unseen(self, username: str) -> List[NotificationItem]:
        """Approved trips of `username` whose approval was not acknowledged."""
        rows = (
            self.db.query(Trip.id, Trip.start_date, Trip.route)
            .filter(
                Trip.user_id == username,
                Trip.approved.is_(True),
                # NULL predates the column and counts as unseen
                or_(Trip.approval_viewed.is_(None), Trip.approval_viewed.is_(False)),
            )
            .order_by(Trip.created_at.desc(), Trip.id.desc())
            .all()
        )
        return [NotificationItem(id=row.id, start_date=row.start_date, route=row.route) for row in rows]

    def dismiss_all(self, username: str) -> int:
        """Mark every approval of `username` as seen. Idempotent."""
        count = self.trips.acknowledge_approvals(username)
        if count:
            logger.info("Dismissed %d approval notification(s) for %r", count, username)
        return count
