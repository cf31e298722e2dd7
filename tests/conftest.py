import os

# Must be set before the application reads its settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.pop("DATABASE_SCHEMA", None)

import pytest
from fastapi.testclient import TestClient

from band_allocation.database import Base, get_engine, get_session_factory
from band_allocation.main import app


@pytest.fixture(autouse=True)
def reset_db():
    engine = get_engine()
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def db():
    session = get_session_factory()()
    try:
        yield session
    finally:
        session.close()
