"""Placeholder login: plaintext comparison, unsigned token (see core.security)."""
from typing import Optional

from sqlalchemy.orm import Session

from sunatstock.core.security import create_access_token
from sunatstock.models.user import User


def login_user(db: Session, username: str, password: str) -> Optional[dict]:
    """Return {"user", "token"} on a match, None otherwise."""
    user = db.query(User).filter(User.username == username).first()
    if user is None or user.password_hash != password:
        return None

    return {"user": user, "token": create_access_token(user.id, user.username)}
