#!/usr/bin/env python
from sdk.pyinventory import InventoryClient, InventoryAPIError


def main():
    c = InventoryClient(base_url="http://127.0.0.1:8085")

    # -----------------------------
    # Create products
    # -----------------------------
    print("Creating products...")
    bolts = c.create_product("Bolts M8", stock_quantity=5, low_stock_threshold=10)
    nuts = c.create_product("Nuts M8", stock_quantity=8, low_stock_threshold=15)
    washers = c.create_product("Washers", stock_quantity=50, description="Zinc plated")
    print(bolts)
    print(nuts)
    print(washers)

    # -----------------------------
    # Low stock report
    # -----------------------------
    print("\nLow stock products...")
    for p in c.low_stock():
        print(f"  {p['name']}: {p['stockQuantity']} < {p['lowStockThreshold']}")

    # -----------------------------
    # Adjust stock
    # -----------------------------
    print("\nRestocking bolts by 25...")
    print(c.increase_stock(bolts["id"], 25))

    print("\nShipping 60 washers (only 50 on hand)...")
    try:
        c.decrease_stock(washers["id"], 60)
    except InventoryAPIError as e:
        print(f"  rejected: {e.message}")
    print("  washers still at", c.get_product(washers["id"])["stockQuantity"])

    # -----------------------------
    # Update and delete
    # -----------------------------
    print("\nRenaming nuts...")
    print(c.update_product(nuts["id"], name="Hex nuts M8"))

    print("\nDeleting washers...")
    print(c.delete_product(washers["id"]))

    print("\nRemaining products...")
    print(c.list_products())


if __name__ == "__main__":
    main()
