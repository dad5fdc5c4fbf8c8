"""Folder models for the shared store and the per-user store."""

from sqlalchemy import Column, DateTime, ForeignKey, Index, String
from sqlalchemy.sql import func
from ..database import Base
from ._ids import new_id, utcnow


class PublicFolder(Base):
    """Folder in the shared file store. ``parent_id`` is a flat pointer, depth is unbounded."""

    __tablename__ = "public_folders"
    __table_args__ = (
        Index("ix_public_folders_parent_id", "parent_id"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False)
    parent_id = Column(String(36), ForeignKey("public_folders.id", ondelete="CASCADE"), nullable=True)
    created_by = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), onupdate=utcnow)


class Folder(Base):
    """Folder in a user's personal file store."""

    __tablename__ = "folders"
    __table_args__ = (
        Index("ix_folders_user_id", "user_id"),
        Index("ix_folders_parent_id", "parent_id"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), nullable=False)
    name = Column(String(255), nullable=False)
    parent_id = Column(String(36), ForeignKey("folders.id", ondelete="CASCADE"), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), onupdate=utcnow)
