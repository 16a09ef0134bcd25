"""
Database session management.
"""
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from app.core.config import settings
from app.db.base import Base


def _engine_options(url: str) -> dict:
    """Per-backend engine options; every store call is bounded by DB_TIMEOUT_SECONDS."""
    options = {"echo": settings.DB_ECHO, "pool_pre_ping": True}
    if url.startswith("sqlite"):
        options["connect_args"] = {
            "check_same_thread": False,
            "timeout": settings.DB_TIMEOUT_SECONDS,
        }
        if url in ("sqlite://", "sqlite:///:memory:"):
            # One shared connection, otherwise each checkout sees an empty database
            options["poolclass"] = StaticPool
    else:
        options["pool_recycle"] = 3600
        options["pool_timeout"] = settings.DB_TIMEOUT_SECONDS
        if url.startswith("mysql+pymysql"):
            options["connect_args"] = {
                "connect_timeout": settings.DB_TIMEOUT_SECONDS,
                "read_timeout": settings.DB_TIMEOUT_SECONDS,
                "write_timeout": settings.DB_TIMEOUT_SECONDS,
            }
    return options


engine = create_engine(settings.DATABASE_URL, **_engine_options(settings.DATABASE_URL))

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Session:
    """Dependency for getting database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """Initialize database tables."""
    # Register every model on the metadata before creating tables
    import app.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
