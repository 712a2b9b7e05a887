"""Create all tables. Run on app startup.

Also creates the default clinic user from configuration when no users exist.
"""
import logging

from sqlalchemy.orm import Session

from sunatstock.core.config import settings
from sunatstock.db.base import Base
from sunatstock.db.session import engine, SessionLocal
from sunatstock import models  # noqa: F401 - register models
from sunatstock.models.user import User

logger = logging.getLogger(__name__)


def ensure_default_user(db: Session) -> bool:
    """Create the configured default user if the users table is empty."""
    if db.query(User).count() > 0:
        return False

    db.add(
        User(
            username=settings.DEFAULT_ADMIN_USERNAME,
            password_hash=settings.DEFAULT_ADMIN_PASSWORD,
            full_name=settings.DEFAULT_ADMIN_FULL_NAME,
        )
    )
    db.commit()
    logger.warning(
        f"Default user '{settings.DEFAULT_ADMIN_USERNAME}' created. "
        "Change DEFAULT_ADMIN_PASSWORD before deploying."
    )
    return True


def init_db():
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        ensure_default_user(db)
    finally:
        db.close()
