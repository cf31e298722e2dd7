# dependencies.py
"""Centralized dependencies for FastAPI application."""

from .database import get_session_factory


def get_db():
    """Database session dependency.

    Yields a session from the process-wide factory and ensures it's closed
    after use. Usage: db: Session = Depends(get_db)
    """
    db = get_session_factory()()
    try:
        yield db
    finally:
        db.close()
