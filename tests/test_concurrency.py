# tests/test_concurrency.py
import asyncio
import httpx


async def _decrease(app, product_id, amount):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        return await ac.patch(f"/products/{product_id}/decrease", json={"amount": amount})


def test_concurrent_decreases_never_oversell(app, client, make_product):
    p = make_product(stockQuantity=3)

    async def run():
        return await asyncio.gather(*[_decrease(app, p["id"], 1) for _ in range(8)])

    results = asyncio.run(run())
    statuses = sorted(r.status_code for r in results)
    # exactly the three units on hand can be taken, the rest are refused
    assert statuses == [200] * 3 + [400] * 5
    assert all(r.json() == {"error": "Insufficient stock"} for r in results if r.status_code == 400)
    assert client.get(f"/products/{p['id']}").json()["stockQuantity"] == 0


def test_concurrent_mixed_adjustments(app, client, make_product):
    p = make_product(stockQuantity=10)

    async def _increase(amount):
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
            return await ac.patch(f"/products/{p['id']}/increase", json={"amount": amount})

    async def run():
        return await asyncio.gather(
            *[_increase(2) for _ in range(5)],
            *[_decrease(app, p["id"], 1) for _ in range(5)],
        )

    results = asyncio.run(run())
    assert all(r.status_code == 200 for r in results)
    assert client.get(f"/products/{p['id']}").json()["stockQuantity"] == 10 + 10 - 5
