# tests/test_service.py
import asyncio
import logging

import pytest
from fastapi.testclient import TestClient

from inventory_api.config import Settings
from inventory_api.core import InventoryService
from inventory_api.database import MemoryProductStore
from inventory_api.errors import (
    StoreUnavailable, InsufficientStockError, NotFoundError, InvalidIdError, ValidationError,
)
from inventory_api.main import create_app


class BrokenStore(MemoryProductStore):
    async def find_all(self):
        raise StoreUnavailable("connection refused")

    async def insert(self, draft):
        raise RuntimeError("driver exploded")

    async def find_low_stock(self):
        await asyncio.sleep(5)
        return []


@pytest.fixture
def broken_client():
    settings = Settings(_env_file=None, store_timeout=0.05)
    return TestClient(create_app(store=BrokenStore(), settings=settings))


def test_store_outage_is_a_generic_500(broken_client, caplog):
    with caplog.at_level(logging.ERROR, logger="inventory_api"):
        r = broken_client.get("/products")
    assert r.status_code == 500
    assert r.json() == {"error": "Server error while fetching products"}
    # the cause is logged, not returned
    assert "connection refused" not in r.text
    assert any("fetching products" in rec.getMessage() for rec in caplog.records)


def test_unexpected_failure_is_a_generic_500(broken_client):
    r = broken_client.post("/products", json={"name": "x"})
    assert r.status_code == 500
    assert r.json() == {"error": "Server error while creating product"}


def test_validation_runs_before_the_store(broken_client):
    r = broken_client.post("/products", json={})
    assert r.status_code == 400
    assert r.json() == {"error": "Product name is required"}


def test_slow_store_times_out(broken_client):
    r = broken_client.get("/products/low-stock")
    assert r.status_code == 500
    assert r.json() == {"error": "Server error while fetching low stock products"}


def test_other_routes_still_work_during_outage(broken_client):
    assert broken_client.get("/").status_code == 200


def test_service_errors_and_timestamps():
    async def run():
        service = InventoryService(MemoryProductStore())
        created = await service.create_product({"name": "Crate", "stockQuantity": 4})
        assert created.updated_at == created.created_at

        with pytest.raises(InsufficientStockError):
            await service.decrease_stock(created.id, {"amount": 5})
        assert (await service.get_product(created.id)).stock_quantity == 4

        adjusted = await service.decrease_stock(created.id, {"amount": 4})
        assert adjusted.stock_quantity == 0
        assert adjusted.updated_at >= created.updated_at
        assert adjusted.created_at == created.created_at

        with pytest.raises(ValidationError):
            await service.increase_stock(created.id, {"amount": 0})
        with pytest.raises(InvalidIdError):
            await service.delete_product("nope")

        deleted = await service.delete_product(created.id)
        assert deleted.id == created.id
        with pytest.raises(NotFoundError):
            await service.get_product(created.id)
        assert await service.list_products() == []

    asyncio.run(run())


def test_returned_products_are_copies():
    async def run():
        store = MemoryProductStore()
        service = InventoryService(store)
        created = await service.create_product({"name": "Crate"})
        created.stock_quantity = 999
        assert (await service.get_product(created.id)).stock_quantity == 0

    asyncio.run(run())
