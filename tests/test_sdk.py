# tests/test_sdk.py
import pytest

from sdk.pyinventory import InventoryClient, InventoryAPIError


@pytest.fixture
def sdk(client):
    # the TestClient stands in for the requests session
    return InventoryClient(base_url="http://testserver", session=client)


def test_sdk_product_lifecycle(sdk):
    p = sdk.create_product("Pallet", stock_quantity=4, low_stock_threshold=5, description="wood")
    assert p["stockQuantity"] == 4

    assert [x["id"] for x in sdk.list_products()] == [p["id"]]
    assert [x["id"] for x in sdk.low_stock()] == [p["id"]]

    assert sdk.increase_stock(p["id"], 6)["stockQuantity"] == 10
    assert sdk.low_stock() == []
    assert sdk.decrease_stock(p["id"], 3)["stockQuantity"] == 7

    updated = sdk.update_product(p["id"], name="Euro pallet")
    assert updated["name"] == "Euro pallet"
    assert sdk.get_product(p["id"])["name"] == "Euro pallet"

    assert sdk.delete_product(p["id"])["message"] == "Product deleted successfully"
    assert sdk.list_products() == []


def test_sdk_raises_server_message(sdk):
    p = sdk.create_product("Pallet", stock_quantity=1)
    with pytest.raises(InventoryAPIError) as exc:
        sdk.decrease_stock(p["id"], 2)
    assert exc.value.status_code == 400
    assert exc.value.message == "Insufficient stock"

    with pytest.raises(InventoryAPIError) as exc:
        sdk.get_product("nope")
    assert exc.value.message == "Invalid product ID"
