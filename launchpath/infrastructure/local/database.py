"""
SQLite database configuration and ORM models.

This module defines the SQLAlchemy ORM models and database initialization.
"""

from datetime import datetime
from functools import lru_cache
from uuid import uuid4

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from launchpath.core.config import get_settings


class Base(DeclarativeBase):
    """SQLAlchemy declarative base."""

    pass


def _utcnow() -> datetime:
    return datetime.utcnow()


# ===========================================
# ORM Models
# ===========================================


class UserORM(Base):
    """User account ORM model."""

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    email = Column(String(255), nullable=False, unique=True, index=True)
    name = Column(String(255), nullable=True)
    password_hash = Column(String(255), nullable=True)
    plan_tier = Column(String(10), default="Free")
    timezone = Column(String(50), default="UTC")
    notify_due_soon = Column(Boolean, default=True)
    notify_stuck = Column(Boolean, default=True)
    notify_collab_update = Column(Boolean, default=True)
    notify_promotions = Column(Boolean, default=False)
    created_at = Column(DateTime, default=_utcnow)
    last_active = Column(DateTime, default=_utcnow)


class ProjectORM(Base):
    """Project ORM model."""

    __tablename__ = "projects"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    owner_id = Column(String(255), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    primary_keyword = Column(String(200), nullable=False)
    project_type = Column(String(20), nullable=False, default="Blank")
    use_community = Column(Boolean, default=False)
    community_choice = Column(String(10), default="None")
    community_url = Column(String(500), nullable=True)
    tools = Column(JSON, nullable=True)
    phase1_complete = Column(Integer, nullable=False, default=0)
    phase2_complete = Column(Integer, nullable=False, default=0)
    phase3_complete = Column(Integer, nullable=False, default=0)
    overall_complete = Column(Integer, nullable=False, default=0)
    archived = Column(Boolean, nullable=False, default=False, index=True)
    created_at = Column(DateTime, default=_utcnow)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow)


class MilestoneORM(Base):
    """Milestone ORM model."""

    __tablename__ = "milestones"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    project_id = Column(String(36), ForeignKey("projects.id"), nullable=False, index=True)
    phase = Column(String(10), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    order_index = Column(Integer, nullable=False, default=1)
    completion_pct = Column(Integer, nullable=False, default=0)


class TaskORM(Base):
    """Task ORM model.

    `version` is the mapper's version counter, so every flushed UPDATE is
    guarded by the version that was loaded.
    """

    __tablename__ = "tasks"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    project_id = Column(String(36), ForeignKey("projects.id"), nullable=False, index=True)
    milestone_id = Column(String(36), ForeignKey("milestones.id"), nullable=False, index=True)
    phase = Column(String(10), nullable=False, index=True)
    name = Column(String(500), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default="Not Started", index=True)
    notes = Column(Text, nullable=True)
    external_link = Column(String(2000), nullable=True)
    external_logo = Column(String(2000), nullable=True)
    due_date = Column(DateTime, nullable=True)
    order_index = Column(Integer, nullable=False, default=1)
    due_soon_notified = Column(Boolean, nullable=False, default=False)
    stuck_notified = Column(Boolean, nullable=False, default=False)
    modified_by = Column(String(255), nullable=True)
    version = Column(Integer, nullable=False)
    updated_at = Column(DateTime, default=_utcnow)

    __mapper_args__ = {"version_id_col": version}


class NotificationORM(Base):
    """Notification ORM model."""

    __tablename__ = "notifications"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    user_id = Column(String(255), nullable=False, index=True)
    project_id = Column(String(36), nullable=True, index=True)
    task_id = Column(String(36), nullable=True)
    type = Column(String(30), nullable=False)
    message = Column(String(500), nullable=False)
    read = Column(Boolean, nullable=False, default=False, index=True)
    created_at = Column(DateTime, default=_utcnow, index=True)


# ===========================================
# Database Session Management
# ===========================================


@lru_cache()
def get_engine() -> AsyncEngine:
    """Get async engine instance."""
    settings = get_settings()
    return create_async_engine(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)


def get_session_factory() -> async_sessionmaker:
    """Get async session factory."""
    return async_sessionmaker(get_engine(), expire_on_commit=False)


async def init_db(engine: AsyncEngine | None = None):
    """Initialize database tables."""
    engine = engine or get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
