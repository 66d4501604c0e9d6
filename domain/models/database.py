"""
Database configuration and session management.
"""

import logging
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from app.config import settings

logger = logging.getLogger("mealledger.database")

# Create SQLAlchemy Base
Base = declarative_base()


def _connect_args(url: str) -> dict:
    # SQLite connections are shared between FastAPI's worker threads
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


# Create engine
engine = create_engine(
    settings.database_url,
    echo=settings.db_echo,
    connect_args=_connect_args(settings.database_url),
)

# Create session factory
SessionLocal = sessionmaker(bind=engine, autoflush=False)


def init_database(bind=None):
    """Initialize database schema"""
    # Model modules register their tables on Base.metadata when imported
    import domain.models.meal  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
    logger.info("Database tables created successfully")


def get_db_session():
    """Get database session (for FastAPI dependency injection)"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
