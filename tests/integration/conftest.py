"""Pytest fixtures for integration tests."""
import copy

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from src.catalog.models import Base
from src.catalog.main import app

PRODUCT_PAYLOAD = {
    "description": "Paper lanterns over a night market",
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
    "user": {"id": "u1", "first_name": "Ada", "username": "ada"},
    "tags": [{"title": "studio"}],
}


@pytest.fixture(scope="function")
def db():
    """Create an in-memory SQLite database for integration testing."""
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


@pytest.fixture(scope="function")
def client(db):
    """Create a test client with a test database session."""
    def override_get_db():
        yield db

    from src.catalog import database
    app.dependency_overrides[database.get_db] = override_get_db
    test_client = TestClient(app)
    yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def product_payload():
    def make(**overrides):
        payload = copy.deepcopy(PRODUCT_PAYLOAD)
        payload.update(overrides)
        return payload
    return make


@pytest.fixture
def create_product(client, product_payload):
    """POST a product and return its JSON body."""
    def create(**overrides):
        response = client.post("/products", json=product_payload(**overrides))
        assert response.status_code == 201, response.text
        return response.json()
    return create
