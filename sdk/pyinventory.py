# sdk/pyinventory.py
import requests
import httpx
from typing import Optional, Dict, Any, List
from rich import print


class InventoryAPIError(Exception):
    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"HTTP {status_code}: {message}")


def _unwrap(r) -> Any:
    # works for requests and httpx responses alike
    if r.status_code >= 400:
        try:
            message = r.json().get("error", r.text)
        except ValueError:
            message = r.text
        raise InventoryAPIError(r.status_code, message)
    return r.json()


class InventoryClient:
    def __init__(self, base_url: str = "http://localhost:8085", timeout: int = 10, session=None):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _url(self, *parts: str) -> str:
        return "/".join([self.base_url, "products", *parts])

    # Products
    def create_product(self, name: str, stock_quantity: Optional[int] = None,
                       low_stock_threshold: Optional[int] = None, description: Optional[str] = None):
        payload: Dict[str, Any] = {"name": name}
        if description is not None:
            payload["description"] = description
        if stock_quantity is not None:
            payload["stockQuantity"] = stock_quantity
        if low_stock_threshold is not None:
            payload["lowStockThreshold"] = low_stock_threshold
        r = self.session.post(self._url(), json=payload, timeout=self.timeout)
        return _unwrap(r)

    def list_products(self) -> List[Dict[str, Any]]:
        r = self.session.get(self._url(), timeout=self.timeout)
        return _unwrap(r)

    def low_stock(self) -> List[Dict[str, Any]]:
        r = self.session.get(self._url("low-stock"), timeout=self.timeout)
        return _unwrap(r)

    def get_product(self, product_id: str):
        r = self.session.get(self._url(product_id), timeout=self.timeout)
        return _unwrap(r)

    def update_product(self, product_id: str, **fields):
        """PUT only the given fields, e.g. ``update_product(pid, name="Bolt", stockQuantity=5)``."""
        r = self.session.put(self._url(product_id), json=fields, timeout=self.timeout)
        return _unwrap(r)

    def delete_product(self, product_id: str):
        r = self.session.delete(self._url(product_id), timeout=self.timeout)
        return _unwrap(r)

    # Stock
    def increase_stock(self, product_id: str, amount: int):
        r = self.session.patch(self._url(product_id, "increase"), json={"amount": amount}, timeout=self.timeout)
        return _unwrap(r)

    def decrease_stock(self, product_id: str, amount: int):
        r = self.session.patch(self._url(product_id, "decrease"), json={"amount": amount}, timeout=self.timeout)
        return _unwrap(r)

    # Async decrease (used by the concurrency demo)
    async def decrease_stock_async(self, product_id: str, amount: int):
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            r = await client.patch(self._url(product_id, "decrease"), json={"amount": amount})
            # do not unwrap: callers inspect 200 vs 400 themselves
            return r


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Inventory CLI")
    parser.add_argument("--base-url", default="http://127.0.0.1:8085")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list-products", help="List all products")
    subparsers.add_parser("low-stock", help="List products below their threshold")

    gp = subparsers.add_parser("get-product", help="Get a product by its ID")
    gp.add_argument("--product-id", required=True, help="ID of the product")

    cp = subparsers.add_parser("create-product", help="Create a new product")
    cp.add_argument("--name", required=True, help="Product name")
    cp.add_argument("--description", help="Product description")
    cp.add_argument("--quantity", type=int, help="Initial stock quantity")
    cp.add_argument("--threshold", type=int, help="Low stock threshold")

    dp = subparsers.add_parser("delete-product", help="Delete a product")
    dp.add_argument("--product-id", required=True)

    for cmd in ("increase", "decrease"):
        sp = subparsers.add_parser(cmd, help=f"{cmd.capitalize()} stock of a product")
        sp.add_argument("--product-id", required=True)
        sp.add_argument("--amount", type=int, required=True)

    args = parser.parse_args()
    c = InventoryClient(base_url=args.base_url)

    try:
        if args.command == "list-products":
            print(c.list_products())
        elif args.command == "low-stock":
            print(c.low_stock())
        elif args.command == "get-product":
            print(c.get_product(args.product_id))
        elif args.command == "create-product":
            print(c.create_product(args.name, args.quantity, args.threshold, args.description))
        elif args.command == "delete-product":
            print(c.delete_product(args.product_id))
        elif args.command == "increase":
            print(c.increase_stock(args.product_id, args.amount))
        elif args.command == "decrease":
            print(c.decrease_stock(args.product_id, args.amount))
    except InventoryAPIError as e:
        print(f"[red]{e}[/red]")
        raise SystemExit(1)
