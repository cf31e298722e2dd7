# models/band.py
"""SQLAlchemy models for band allocation."""

from datetime import datetime, timezone

from sqlalchemy import JSON, Boolean, Column, DateTime, Float, Integer, String

from ..config import settings
from ..database import Base

DEFAULT_AMOUNT = 50.0
DEFAULT_USER_ID = "user1"
DEFAULT_ROLE = "unassigned"


def utc_now():
    """Return current UTC time (timezone-aware)."""
    return datetime.now(timezone.utc)


class Entry(Base):
    """One allocated band number."""
    __tablename__ = settings.entries_table
    __table_args__ = {"schema": settings.database_schema}

    id = Column(Integer, primary_key=True, autoincrement=True)
    # Unique across the whole table, not per user
    band_no = Column(Integer, nullable=False, unique=True, index=True)
    name = Column(String, nullable=False)
    zone = Column(String, nullable=False)
    community = Column(String, nullable=False)
    amount = Column(Float, nullable=False, default=DEFAULT_AMOUNT)
    user_id = Column(String, nullable=False, index=True, default=DEFAULT_USER_ID)  # owner's username
    entry_group_id = Column(String, index=True)  # rows saved in one submission
    edited = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), default=utc_now)
    updated_at = Column(DateTime(timezone=True), default=utc_now)


class User(Base):
    """Login identity. Entries reference users by username."""
    __tablename__ = settings.users_table
    __table_args__ = {"schema": settings.database_schema}

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String, nullable=False, unique=True, index=True)
    password = Column(String, nullable=False)  # passlib hash
    role = Column(String, default=DEFAULT_ROLE)  # free-form, e.g. Desk, Admin
    user_zone = Column(JSON, nullable=True)  # list of zone codes
    is_admin = Column(Boolean, default=False)
    created_at = Column(DateTime(timezone=True), default=utc_now)
    updated_at = Column(DateTime(timezone=True), default=utc_now)
