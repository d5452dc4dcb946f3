"""Pytest fixtures for unit tests."""
import copy

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from src.catalog.models import Base

PRODUCT_PAYLOAD = {
    "description": "Paper lanterns over a night market",
    "alt_description": "red lanterns",
    "likes": 42,
    "urls": {
        "regular": "https://images.example.com/p1?w=1080",
        "small": "https://images.example.com/p1?w=400",
        "thumb": "https://images.example.com/p1?w=200",
    },
    "links": {
        "self": "https://api.example.com/photos/p1",
        "html": "https://example.com/photos/p1",
    },
    "user": {
        "id": "u1",
        "first_name": "Ada",
        "last_name": "Lovelace",
        "portfolio_url": "https://ada.example.com",
        "username": "ada",
    },
    "tags": [{"title": "studio"}, {"title": "night"}],
}


@pytest.fixture(scope="function")
def db():
    """Create an in-memory SQLite database for unit testing."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def product_payload():
    """Return a factory for valid product payloads; keyword args override fields."""
    def make(**overrides):
        payload = copy.deepcopy(PRODUCT_PAYLOAD)
        payload.update(overrides)
        return payload
    return make
