# tests/conftest.py

import logging

import pytest
from fastapi.testclient import TestClient

from product_api.db import Database
from product_api.main import create_app

# Suppress noisy logs from SQLAlchemy/FastAPI during tests for cleaner output
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
logging.getLogger("uvicorn.error").setLevel(logging.WARNING)
logging.getLogger("fastapi").setLevel(logging.WARNING)

PRODUCTS_URL = "/api/products/"


# --- Pytest Fixtures ---
@pytest.fixture(scope="function")
def app():
    """A fresh application backed by its own in-memory SQLite database."""
    test_app = create_app(database_url="sqlite://")
    yield test_app
    test_app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture(scope="function")
def db_session():
    database = Database("sqlite://")
    database.connect()
    session = database.session()
    try:
        yield session
    finally:
        session.close()
        database.shutdown()


@pytest.fixture
def create_product(client):
    def _create(name="Monitor", price=300):
        response = client.post(PRODUCTS_URL, json={"name": name, "price": price})
        assert response.status_code == 201
        return response.json()["data"]

    return _create
