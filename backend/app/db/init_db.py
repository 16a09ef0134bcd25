"""
Database initialization: create tables and make sure an administrator exists.
"""
import logging

from app.db.session import SessionLocal, init_db
from app.services.user_service import UserService

logger = logging.getLogger(__name__)


def bootstrap() -> None:
    """Create tables and seed the default admin account."""
    init_db()
    db = SessionLocal()
    try:
        UserService(db).ensure_admin_exists()
    finally:
        db.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    logger.info("Initializing database...")
    bootstrap()
    logger.info("Database initialized successfully!")
