# database.py
"""Database configuration and session management.

The engine is created on first use and cached for the lifetime of the
process. Concurrent first callers are serialised on a lock so exactly one
engine exists.
"""

import logging
import threading
from typing import Optional

from sqlalchemy import create_engine, text, NullPool
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from .config import settings
from .errors import StoreError

logger = logging.getLogger(__name__)

# Base class for models
Base = declarative_base()

_engine: Optional[Engine] = None
_session_factory: Optional[sessionmaker] = None
_lock = threading.Lock()


def _create_engine(database_url: str) -> Engine:
    url = make_url(database_url)

    if url.get_backend_name() == "sqlite":
        kwargs = {"connect_args": {"check_same_thread": False}}
        if not url.database or url.database == ":memory:":
            # An in-memory database only exists on its one connection
            kwargs["poolclass"] = StaticPool
        return create_engine(url, **kwargs)

    if url.get_driver_name() == "psycopg2":
        return create_engine(url, client_encoding="utf8", poolclass=NullPool)
    return create_engine(url, poolclass=NullPool)


def init_db(engine: Engine) -> None:
    """Create the optional schema and every table that does not exist yet."""
    from . import models  # noqa: F401  registers the tables on Base.metadata

    if settings.database_schema:
        with engine.connect() as connection:
            connection.execute(text(f'CREATE SCHEMA IF NOT EXISTS "{settings.database_schema}"'))
            connection.commit()

    Base.metadata.create_all(bind=engine)


def get_session_factory() -> sessionmaker:
    """Return the process-wide session factory, creating it on first call."""
    global _engine, _session_factory

    if _session_factory is None:
        with _lock:
            if _session_factory is None:
                if not settings.database_url:
                    raise StoreError(
                        "DATABASE_URL environment variable is not set. "
                        "Please set it in your .env file or environment."
                    )
                logger.info("Connecting to database...")
                engine = _create_engine(settings.database_url)
                init_db(engine)
                _engine = engine
                _session_factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    return _session_factory


def get_engine() -> Engine:
    get_session_factory()
    return _engine
