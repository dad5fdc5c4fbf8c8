"""User accounts.

Passwords are stored as bcrypt hashes. ``role`` is ``admin`` or ``user``.
"""

from sqlalchemy import Boolean, Column, DateTime, String, Text
from sqlalchemy.sql import func
from ..database import Base
from ._ids import new_id, utcnow

USER_ROLES = ("admin", "user")


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False)
    password_hash = Column(Text, nullable=False)
    role = Column(String(20), nullable=False, default="user")
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), onupdate=utcnow)
