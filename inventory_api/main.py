# inventory_api/main.py
import logging
from contextlib import asynccontextmanager
from typing import Optional, Dict, Any

from fastapi import APIRouter, Body, Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings
from .core import InventoryService
from .database import ProductStore, MemoryProductStore, MongoProductStore
from .errors import InventoryError

logger = logging.getLogger(__name__)


def build_store(settings: Settings) -> ProductStore:
    if settings.mongodb_uri:
        logger.info("Using MongoDB store (database %r)", settings.mongodb_database)
        return MongoProductStore(settings.mongodb_uri, settings.mongodb_database, settings.store_timeout)
    logger.warning("MONGODB_URI is not set; products are kept in memory and lost on restart")
    return MemoryProductStore()


def get_service(request: Request) -> InventoryService:
    return request.app.state.service


# ---------------------------
# Product endpoints
# ---------------------------
router = APIRouter(prefix="/products")


@router.post("", status_code=201)
async def create_product(payload: Optional[Dict[str, Any]] = Body(None),
                         service: InventoryService = Depends(get_service)):
    product = await service.create_product(payload)
    return product.to_json()


@router.get("")
async def list_products(service: InventoryService = Depends(get_service)):
    return [p.to_json() for p in await service.list_products()]


# must be registered before /{product_id}, or "low-stock" is taken for an id
@router.get("/low-stock")
async def low_stock_products(service: InventoryService = Depends(get_service)):
    return [p.to_json() for p in await service.low_stock_products()]


@router.get("/{product_id}")
async def get_product(product_id: str, service: InventoryService = Depends(get_service)):
    product = await service.get_product(product_id)
    return product.to_json()


@router.put("/{product_id}")
async def update_product(product_id: str, payload: Optional[Dict[str, Any]] = Body(None),
                         service: InventoryService = Depends(get_service)):
    product = await service.update_product(product_id, payload)
    return product.to_json()


@router.delete("/{product_id}")
async def delete_product(product_id: str, service: InventoryService = Depends(get_service)):
    product = await service.delete_product(product_id)
    return {"message": "Product deleted successfully", "product": product.to_json()}


@router.patch("/{product_id}/increase")
async def increase_stock(product_id: str, payload: Optional[Dict[str, Any]] = Body(None),
                         service: InventoryService = Depends(get_service)):
    product = await service.increase_stock(product_id, payload)
    return product.to_json()


@router.patch("/{product_id}/decrease")
async def decrease_stock(product_id: str, payload: Optional[Dict[str, Any]] = Body(None),
                         service: InventoryService = Depends(get_service)):
    product = await service.decrease_stock(product_id, payload)
    return product.to_json()


# ---------------------------
# Error rendering: every failure is {"error": message}
# ---------------------------
async def _inventory_error(request: Request, exc: InventoryError):
    return JSONResponse({"error": exc.message}, status_code=exc.status_code)


async def _request_validation_error(request: Request, exc: RequestValidationError):
    logger.debug("Rejected request body on %s: %s", request.url.path, exc.errors())
    return JSONResponse({"error": "Invalid request body"}, status_code=400)


async def _http_error(request: Request, exc: StarletteHTTPException):
    return JSONResponse({"error": str(exc.detail)}, status_code=exc.status_code,
                        headers=getattr(exc, "headers", None))


async def _unhandled_error(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse({"error": "Internal server error"}, status_code=500)


def create_app(store: Optional[ProductStore] = None, settings: Optional[Settings] = None) -> FastAPI:
    """Build the application around *store*.

    When no store is given one is chosen from *settings*. The store is never
    contacted here, so the app starts even if the database is down.
    """
    settings = settings or Settings()
    store = store or build_store(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        await store.close()

    app = FastAPI(title="Inventory Management System API", lifespan=lifespan)
    app.state.service = InventoryService(store, timeout=settings.store_timeout)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(InventoryError, _inventory_error)
    app.add_exception_handler(RequestValidationError, _request_validation_error)
    app.add_exception_handler(StarletteHTTPException, _http_error)
    app.add_exception_handler(Exception, _unhandled_error)

    @app.get("/")
    async def root():
        return {"message": "Welcome to Inventory Management System API"}

    app.include_router(router)
    return app


app = create_app()
