"""Stored files.

Content lives inline in ``file_url`` as a base64 data URI. There is no
deduplication and no chunking.
"""

from sqlalchemy import BigInteger, Column, DateTime, ForeignKey, Index, String, Text
from sqlalchemy.sql import func
from ..database import Base
from ._ids import new_id, utcnow


class PublicFile(Base):
    __tablename__ = "public_files"
    __table_args__ = (
        Index("ix_public_files_folder_id", "folder_id"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    file_name = Column(String(500), nullable=False)
    file_size = Column(BigInteger, nullable=False)
    file_type = Column(String(255), nullable=False)
    file_url = Column(Text, nullable=False)
    folder_id = Column(String(36), ForeignKey("public_folders.id", ondelete="SET NULL"), nullable=True)
    uploaded_by = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), onupdate=utcnow)


class UserFile(Base):
    __tablename__ = "user_files"
    __table_args__ = (
        Index("ix_user_files_user_folder", "user_id", "folder_id"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), nullable=False)
    file_name = Column(String(500), nullable=False)
    file_size = Column(BigInteger, nullable=False)
    file_type = Column(String(255), nullable=False)
    file_url = Column(Text, nullable=False)
    folder_id = Column(String(36), ForeignKey("folders.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), onupdate=utcnow)
