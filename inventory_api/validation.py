# inventory_api/validation.py
from typing import Optional, Dict, Any, Type, TypeVar

import pydantic

from .errors import ValidationError
from .models import Product, ProductCreate, ProductUpdate, StockAdjustment

# Input checks for product payloads and stock adjustments. The rules live on
# the pydantic models; these helpers shape the raw JSON and turn the first
# model error into our ValidationError. Nothing here touches the store.

M = TypeVar("M", bound=pydantic.BaseModel)

_SNAKE_ALIASES = {
    "stock_quantity": "stockQuantity",
    "low_stock_threshold": "lowStockThreshold",
}

_INPUT_KEYS = ("name", "description", "stockQuantity", "lowStockThreshold")


def _normalize(payload: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    data = dict(payload or {})
    for snake, camel in _SNAKE_ALIASES.items():
        if snake in data:
            value = data.pop(snake)
            data.setdefault(camel, value)
    fields = {key: data[key] for key in _INPUT_KEYS if key in data}
    # null counts are treated as "not supplied"
    for key in ("stockQuantity", "lowStockThreshold"):
        if fields.get(key, 0) is None:
            del fields[key]
    return fields


def _first_message(exc: pydantic.ValidationError) -> str:
    error = exc.errors()[0]
    cause = (error.get("ctx") or {}).get("error")
    return str(cause) if cause is not None else error["msg"]


def _build(model: Type[M], fields: Dict[str, Any]) -> M:
    try:
        return model(**fields)
    except pydantic.ValidationError as exc:
        raise ValidationError(_first_message(exc)) from None


def validate_new_product(payload: Optional[Dict[str, Any]]) -> ProductCreate:
    """Check a creation payload and fill in defaults.

    Raises ValidationError naming the first violated constraint. The name is
    checked first so a payload without one always reports it.
    """
    fields = _normalize(payload)
    fields.setdefault("name", None)
    return _build(ProductCreate, fields)


def validate_product_changes(payload: Optional[Dict[str, Any]]) -> ProductUpdate:
    """Check a partial update; unknown keys are ignored."""
    return _build(ProductUpdate, _normalize(payload))


def validate_amount(payload: Optional[Dict[str, Any]]) -> int:
    return _build(StockAdjustment, {"amount": (payload or {}).get("amount")}).amount


def is_low_stock(product: Product) -> bool:
    # strictly below: a product sitting exactly at its threshold is fine
    return product.stock_quantity < product.low_stock_threshold
