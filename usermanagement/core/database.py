"""Engine and sessions for the user store, plus a schema check for the health route."""

import logging
from collections.abc import Generator

from sqlalchemy import create_engine, inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from usermanagement.core.config import settings

logger = logging.getLogger(__name__)

# Tables created by the initial migration; the service cannot work without them.
REQUIRED_TABLES = ("roles", "users", "user_roles")

engine = create_engine(settings.DATABASE_URL, pool_pre_ping=True, echo=settings.DEBUG)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Yield one session per request; the repositories commit or roll back on it."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def find_missing_tables(db: Session) -> list[str] | None:
    """
    Return the REQUIRED_TABLES absent from the database, in migration order.

    None means the database could not be inspected at all (unreachable or not
    a real connection), which the caller reports as disconnected.
    """
    try:
        present = set(inspect(db.connection()).get_table_names())
    except SQLAlchemyError as e:
        logger.warning("User store schema check failed: %s", e)
        return None
    missing = [name for name in REQUIRED_TABLES if name not in present]
    if missing:
        logger.warning("User store is missing tables: %s (run alembic upgrade head)", missing)
    return missing
