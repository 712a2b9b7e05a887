"""
User: clinic staff account for the placeholder login.

password_hash holds the password as entered. Login compares it by plain
equality; this is not a credential scheme (see core.security).
"""
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func
from sunatstock.db.base import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(128), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    full_name = Column(String(255), nullable=False)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), nullable=False)

    def __repr__(self):
        return f"<User username={self.username}>"
