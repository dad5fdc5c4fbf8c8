"""Project and favorite models."""

from sqlalchemy import (
    Column, Date, DateTime, Float, ForeignKey, Index, Integer, JSON, String, Text, UniqueConstraint,
)
from sqlalchemy.sql import func
from ..database import Base
from ._ids import new_id, utcnow

PROJECT_STATUSES = ("planning", "in_progress", "completed", "on_hold")
PROJECT_PRIORITIES = ("low", "medium", "high", "urgent")


class Project(Base):
    """A lab project. ``sort_order`` is the manual display order."""

    __tablename__ = "projects"
    __table_args__ = (
        Index("ix_projects_sort_order", "sort_order"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)

    status = Column(String(20), nullable=False, default="planning")
    progress = Column(Integer, nullable=False, default=0)  # 0..100
    priority = Column(String(20), nullable=False, default="medium")

    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    budget = Column(Float, nullable=True)
    manager = Column(String(255), nullable=True)
    team_members = Column(JSON, nullable=True)  # list of names

    sort_order = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), onupdate=utcnow)


class UserFavorite(Base):
    """Join row: the user pinned the project to the top of their listing."""

    __tablename__ = "user_favorites"
    __table_args__ = (
        UniqueConstraint("user_id", "project_id", name="uq_user_favorites_user_project"),
        Index("ix_user_favorites_user_id", "user_id"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    # No FK to users: the bootstrap admin has no row in the users table.
    user_id = Column(String(36), nullable=False)
    project_id = Column(String(36), ForeignKey("projects.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now())
