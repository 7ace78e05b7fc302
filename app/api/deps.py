from collections.abc import Generator

from sqlalchemy.orm import Session

from app.core.config import Settings, get_settings
from app.db.base import SessionLocal


def get_db() -> Generator[Session, None, None]:
    """Yield a DB session per request; an unfinished transaction is rolled back on close."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_app_settings() -> Settings:
    """Inject the process-wide, read-only settings."""
    return get_settings()
