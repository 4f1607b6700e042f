# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from inventory_api.config import Settings
from inventory_api.database import MemoryProductStore
from inventory_api.main import create_app


@pytest.fixture
def store():
    return MemoryProductStore()


@pytest.fixture
def app(store):
    return create_app(store=store, settings=Settings(_env_file=None))


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def make_product(client):
    """Create a product through the API and return its JSON."""
    def _make(**fields):
        fields.setdefault("name", "Test Product")
        r = client.post("/products", json=fields)
        assert r.status_code == 201, r.text
        return r.json()
    return _make
