# inventory_api/database.py
import abc
import asyncio
import functools
import logging
from datetime import datetime, timezone
from typing import Optional, Dict, Any, List

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

from .errors import RecordNotFound, InvalidIdentifier, ConditionFailed, StoreUnavailable
from .models import Product, ProductCreate, DEFAULT_STOCK_QUANTITY, DEFAULT_LOW_STOCK_THRESHOLD
from .validation import is_low_stock

# Product persistence. Two backends share one contract: an in-memory store used
# for tests and local runs, and a MongoDB store for real deployments.

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _object_id(product_id: str) -> ObjectId:
    if not isinstance(product_id, str) or not ObjectId.is_valid(product_id):
        raise InvalidIdentifier(product_id)
    return ObjectId(product_id)


def _key(product_id: str) -> str:
    # canonical lowercase hex, so any spelling of an ObjectId finds the record
    return str(_object_id(product_id))


class ProductStore(abc.ABC):
    """Store contract. Every method raises only the StoreError subclasses.

    adjust_stock must apply the delta and the ``stock_quantity >= 0`` check as
    one atomic step; it raises ConditionFailed (leaving the record untouched)
    when the result would be negative.
    """

    @abc.abstractmethod
    async def insert(self, draft: ProductCreate) -> Product: ...

    @abc.abstractmethod
    async def find_all(self) -> List[Product]: ...

    @abc.abstractmethod
    async def find_by_id(self, product_id: str) -> Product: ...

    @abc.abstractmethod
    async def update(self, product_id: str, changes: Dict[str, Any]) -> Product: ...

    @abc.abstractmethod
    async def delete(self, product_id: str) -> Product: ...

    @abc.abstractmethod
    async def adjust_stock(self, product_id: str, delta: int) -> Product: ...

    @abc.abstractmethod
    async def find_low_stock(self) -> List[Product]: ...

    async def close(self) -> None:
        pass


# ---------------------------
# In-memory backend
# ---------------------------
class MemoryProductStore(ProductStore):
    """Dict-backed store. Mutations of one product are serialized by a lock."""

    def __init__(self):
        self._products: Dict[str, Product] = {}
        self._locks: Dict[str, asyncio.Lock] = {}

    def _get_lock(self, key: str) -> asyncio.Lock:
        if key not in self._locks:
            self._locks[key] = asyncio.Lock()
        return self._locks[key]

    def _lookup(self, key: str) -> Product:
        p = self._products.get(key)
        if p is None:
            raise RecordNotFound(key)
        return p

    async def insert(self, draft: ProductCreate) -> Product:
        now = _now()
        product = Product(id=str(ObjectId()), created_at=now, updated_at=now, **draft.model_dump())
        self._products[product.id] = product
        return product.model_copy()

    async def find_all(self) -> List[Product]:
        return [p.model_copy() for p in self._products.values()]

    async def find_by_id(self, product_id: str) -> Product:
        return self._lookup(_key(product_id)).model_copy()

    async def update(self, product_id: str, changes: Dict[str, Any]) -> Product:
        key = _key(product_id)
        lock = self._get_lock(f"product:{key}")
        await lock.acquire()
        try:
            current = self._lookup(key)
            updated = current.model_copy(update={**changes, "updated_at": _now()})
            self._products[key] = updated
            return updated.model_copy()
        finally:
            lock.release()

    async def delete(self, product_id: str) -> Product:
        key = _key(product_id)
        lock = self._get_lock(f"product:{key}")
        await lock.acquire()
        try:
            product = self._lookup(key)
            del self._products[key]
            return product
        finally:
            lock.release()
            self._locks.pop(f"product:{key}", None)

    async def adjust_stock(self, product_id: str, delta: int) -> Product:
        key = _key(product_id)
        lock = self._get_lock(f"product:{key}")
        await lock.acquire()
        try:
            current = self._lookup(key)
            quantity = current.stock_quantity + delta
            if quantity < 0:
                raise ConditionFailed(product_id)
            updated = current.model_copy(update={"stock_quantity": quantity, "updated_at": _now()})
            self._products[key] = updated
            return updated.model_copy()
        finally:
            lock.release()

    async def find_low_stock(self) -> List[Product]:
        return [p.model_copy() for p in self._products.values() if is_low_stock(p)]


# ---------------------------
# MongoDB backend
# ---------------------------
def _translate_driver_errors(fn):
    @functools.wraps(fn)
    async def wrapper(*args, **kwargs):
        try:
            return await fn(*args, **kwargs)
        except PyMongoError as exc:
            raise StoreUnavailable(str(exc)) from exc
    return wrapper


def _to_product(doc: Dict[str, Any]) -> Product:
    # field names follow the existing "products" collection
    return Product(
        id=str(doc["_id"]),
        name=doc["name"],
        description=doc.get("description") or "",
        stock_quantity=doc.get("stock_quantity", DEFAULT_STOCK_QUANTITY),
        low_stock_threshold=doc.get("low_stock_threshold", DEFAULT_LOW_STOCK_THRESHOLD),
        created_at=doc["createdAt"],
        updated_at=doc["updatedAt"],
    )


class MongoProductStore(ProductStore):
    """Products in a MongoDB collection, accessed through motor.

    The client connects lazily, so constructing the store never blocks on the
    server; an unreachable server surfaces per call as StoreUnavailable after
    ``timeout`` seconds of server selection.
    """

    def __init__(self, uri: Optional[str] = None, database: str = "inventory", timeout: float = 5.0,
                 client=None):
        if client is None:
            ms = int(timeout * 1000)
            client = AsyncIOMotorClient(
                uri, serverSelectionTimeoutMS=ms, connectTimeoutMS=ms, tz_aware=True
            )
            db = client.get_default_database(default=database)
        else:
            # an injected client (e.g. a mock in tests) uses ``database`` as given
            db = client[database]
        self._client = client
        self._products = db["products"]

    @_translate_driver_errors
    async def insert(self, draft: ProductCreate) -> Product:
        now = _now()
        doc = {**draft.model_dump(), "createdAt": now, "updatedAt": now}
        result = await self._products.insert_one(doc)
        doc["_id"] = result.inserted_id
        return _to_product(doc)

    @_translate_driver_errors
    async def find_all(self) -> List[Product]:
        docs = await self._products.find().to_list(length=None)
        return [_to_product(d) for d in docs]

    @_translate_driver_errors
    async def find_by_id(self, product_id: str) -> Product:
        doc = await self._products.find_one({"_id": _object_id(product_id)})
        if doc is None:
            raise RecordNotFound(product_id)
        return _to_product(doc)

    @_translate_driver_errors
    async def update(self, product_id: str, changes: Dict[str, Any]) -> Product:
        doc = await self._products.find_one_and_update(
            {"_id": _object_id(product_id)},
            {"$set": {**changes, "updatedAt": _now()}},
            return_document=ReturnDocument.AFTER,
        )
        if doc is None:
            raise RecordNotFound(product_id)
        return _to_product(doc)

    @_translate_driver_errors
    async def delete(self, product_id: str) -> Product:
        doc = await self._products.find_one_and_delete({"_id": _object_id(product_id)})
        if doc is None:
            raise RecordNotFound(product_id)
        return _to_product(doc)

    @_translate_driver_errors
    async def adjust_stock(self, product_id: str, delta: int) -> Product:
        oid = _object_id(product_id)
        query: Dict[str, Any] = {"_id": oid}
        if delta < 0:
            query["stock_quantity"] = {"$gte": -delta}
        doc = await self._products.find_one_and_update(
            query,
            {"$inc": {"stock_quantity": delta}, "$set": {"updatedAt": _now()}},
            return_document=ReturnDocument.AFTER,
        )
        if doc is not None:
            return _to_product(doc)
        # no match: either the product is gone or the floor check failed
        if await self._products.count_documents({"_id": oid}, limit=1):
            raise ConditionFailed(product_id)
        raise RecordNotFound(product_id)

    @_translate_driver_errors
    async def find_low_stock(self) -> List[Product]:
        cursor = self._products.find({"$expr": {"$lt": ["$stock_quantity", "$low_stock_threshold"]}})
        return [_to_product(d) for d in await cursor.to_list(length=None)]

    async def close(self) -> None:
        self._client.close()
        logger.debug("MongoDB client closed")
