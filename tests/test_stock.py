# tests/test_stock.py
import pytest
from bson import ObjectId


def _stock(client, pid):
    return client.get(f"/products/{pid}").json()["stockQuantity"]


def test_increase_stock(client, make_product):
    p = make_product(stockQuantity=50)
    r = client.patch(f"/products/{p['id']}/increase", json={"amount": 25})
    assert r.status_code == 200
    assert r.json()["stockQuantity"] == 75


def test_decrease_stock(client, make_product):
    p = make_product(stockQuantity=50)
    r = client.patch(f"/products/{p['id']}/decrease", json={"amount": 20})
    assert r.status_code == 200
    assert r.json()["stockQuantity"] == 30


def test_decrease_below_zero_is_rejected(client, make_product):
    p = make_product(stockQuantity=50)
    r = client.patch(f"/products/{p['id']}/decrease", json={"amount": 60})
    assert r.status_code == 400
    assert r.json() == {"error": "Insufficient stock"}
    assert _stock(client, p["id"]) == 50

    # failing again changes nothing either
    client.patch(f"/products/{p['id']}/decrease", json={"amount": 51})
    assert _stock(client, p["id"]) == 50


def test_decrease_to_exactly_zero(client, make_product):
    p = make_product(stockQuantity=50)
    r = client.patch(f"/products/{p['id']}/decrease", json={"amount": 50})
    assert r.status_code == 200
    assert r.json()["stockQuantity"] == 0


@pytest.mark.parametrize("amount", [1, 7, 40])
def test_increase_then_decrease_restores_stock(client, make_product, amount):
    p = make_product(stockQuantity=12)
    client.patch(f"/products/{p['id']}/increase", json={"amount": amount})
    r = client.patch(f"/products/{p['id']}/decrease", json={"amount": amount})
    assert r.status_code == 200
    assert r.json()["stockQuantity"] == 12


@pytest.mark.parametrize("direction", ["increase", "decrease"])
@pytest.mark.parametrize("payload,message", [
    ({"amount": -10}, "Amount must be a positive number"),
    ({"amount": 0}, "Amount must be a positive number"),
    ({}, "Amount must be a positive number"),
    ({"amount": 2.5}, "Amount must be an integer"),
])
def test_bad_amounts(client, make_product, direction, payload, message):
    p = make_product(stockQuantity=50)
    r = client.patch(f"/products/{p['id']}/{direction}", json=payload)
    assert r.status_code == 400
    assert r.json() == {"error": message}
    assert _stock(client, p["id"]) == 50


def test_missing_body_counts_as_missing_amount(client, make_product):
    p = make_product(stockQuantity=5)
    r = client.patch(f"/products/{p['id']}/increase")
    assert r.status_code == 400
    assert r.json() == {"error": "Amount must be a positive number"}


@pytest.mark.parametrize("direction", ["increase", "decrease"])
def test_adjust_unknown_and_invalid_ids(client, direction):
    r = client.patch(f"/products/{ObjectId()}/{direction}", json={"amount": 1})
    assert r.status_code == 404
    assert r.json() == {"error": "Product not found"}

    r = client.patch(f"/products/bad-id/{direction}", json={"amount": 1})
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid product ID"}


def test_amount_is_validated_before_the_id(client):
    r = client.patch("/products/bad-id/decrease", json={"amount": -1})
    assert r.status_code == 400
    assert r.json() == {"error": "Amount must be a positive number"}


def test_adjustment_moves_product_in_and_out_of_low_stock(client, make_product):
    p = make_product(stockQuantity=10, lowStockThreshold=10)
    assert client.get("/products/low-stock").json() == []

    client.patch(f"/products/{p['id']}/decrease", json={"amount": 1})
    assert [x["id"] for x in client.get("/products/low-stock").json()] == [p["id"]]

    client.patch(f"/products/{p['id']}/increase", json={"amount": 1})
    assert client.get("/products/low-stock").json() == []
