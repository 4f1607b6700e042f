import asyncio
from sdk.pyinventory import InventoryClient


async def ship(client, picker, product_id, qty):
    r = await client.decrease_stock_async(product_id, qty)
    if r.status_code == 200:
        print(f"✅ {picker} shipped {qty} units (stock now {r.json()['stockQuantity']})")
    elif r.status_code == 400:
        print(f"❌ {picker} rejected: {r.json()['error']}")
    else:
        print(f"⚠️  {picker} unexpected response {r.status_code}: {r.text}")


async def main():
    c = InventoryClient(base_url="http://127.0.0.1:8085")

    # Two units on hand, five pickers each trying to ship one
    product = c.create_product("Gaming Laptop", stock_quantity=2, low_stock_threshold=1)
    product_id = product["id"]
    print(f"\n🖥️  Created product: {product}")

    print("\n⚡ Simulating concurrent shipments...")
    await asyncio.gather(*[
        ship(c, f"picker-{i}", product_id, 1) for i in range(5)
    ])

    # Exactly two shipments succeed and stock never goes negative
    print("\n📦 Final product state:", c.get_product(product_id))


if __name__ == "__main__":
    asyncio.run(main())
