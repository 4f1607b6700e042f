# inventory_api/core.py
import asyncio
import functools
import logging
from typing import Optional, Dict, Any, List

from .database import ProductStore
from .errors import (
    InventoryError, ServerError, NotFoundError, InvalidIdError, InsufficientStockError,
    RecordNotFound, InvalidIdentifier, ConditionFailed, StoreUnavailable,
)
from .models import Product
from .validation import validate_new_product, validate_product_changes, validate_amount

# Business operations behind the HTTP routes. Each public coroutine either
# returns its result or raises an InventoryError subclass; nothing else leaks.

logger = logging.getLogger(__name__)

DEFAULT_STORE_TIMEOUT = 5.0


def operation(description: str):
    """Map store failures of the wrapped operation onto the public error set.

    ``description`` completes "Server error while ..." for the 500 message.
    """
    def decorator(fn):
        @functools.wraps(fn)
        async def wrapper(self, *args, **kwargs):
            try:
                return await fn(self, *args, **kwargs)
            except InventoryError:
                raise
            except RecordNotFound:
                raise NotFoundError()
            except InvalidIdentifier:
                raise InvalidIdError()
            except ConditionFailed:
                raise InsufficientStockError()
            except StoreUnavailable:
                logger.error("Store unavailable while %s", description, exc_info=True)
                raise ServerError(f"Server error while {description}")
            except Exception:
                logger.exception("Unexpected failure while %s", description)
                raise ServerError(f"Server error while {description}")
        return wrapper
    return decorator


class InventoryService:
    def __init__(self, store: ProductStore, timeout: float = DEFAULT_STORE_TIMEOUT):
        self.store = store
        self.timeout = timeout

    async def _call(self, coro):
        try:
            return await asyncio.wait_for(coro, self.timeout)
        except asyncio.TimeoutError as exc:
            raise StoreUnavailable(f"store call exceeded {self.timeout}s") from exc

    @operation("creating product")
    async def create_product(self, payload: Optional[Dict[str, Any]]) -> Product:
        draft = validate_new_product(payload)
        product = await self._call(self.store.insert(draft))
        logger.info("Created product %s (%s)", product.id, product.name)
        return product

    @operation("fetching products")
    async def list_products(self) -> List[Product]:
        return await self._call(self.store.find_all())

    @operation("fetching product")
    async def get_product(self, product_id: str) -> Product:
        return await self._call(self.store.find_by_id(product_id))

    @operation("updating product")
    async def update_product(self, product_id: str, payload: Optional[Dict[str, Any]]) -> Product:
        # absolute values are trusted here; only the adjustments enforce the floor
        changes = validate_product_changes(payload).changes()
        return await self._call(self.store.update(product_id, changes))

    @operation("deleting product")
    async def delete_product(self, product_id: str) -> Product:
        product = await self._call(self.store.delete(product_id))
        logger.info("Deleted product %s", product_id)
        return product

    @operation("increasing stock")
    async def increase_stock(self, product_id: str, payload: Optional[Dict[str, Any]]) -> Product:
        amount = validate_amount(payload)
        return await self._call(self.store.adjust_stock(product_id, amount))

    @operation("decreasing stock")
    async def decrease_stock(self, product_id: str, payload: Optional[Dict[str, Any]]) -> Product:
        amount = validate_amount(payload)
        return await self._call(self.store.adjust_stock(product_id, -amount))

    @operation("fetching low stock products")
    async def low_stock_products(self) -> List[Product]:
        return await self._call(self.store.find_low_stock())
