# inventory_api/models.py
from datetime import datetime
from typing import Optional, Dict, Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

DEFAULT_STOCK_QUANTITY = 0
DEFAULT_LOW_STOCK_THRESHOLD = 10
# bound for counts and amounts; a stored count plus an amount stays far inside int64
MAX_QUANTITY = 2**31 - 1

_COUNT_LABELS = {
    "stock_quantity": "Stock quantity",
    "low_stock_threshold": "Low stock threshold",
}


class _CamelModel(BaseModel):
    # snake_case in Python, camelCase on the wire
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_integral(value: Any) -> bool:
    return _is_number(value) and not (isinstance(value, float) and not value.is_integer())


class _ProductInput(_CamelModel):
    """Input checks shared by creation and update payloads.

    Validators raise ValueError with the exact message returned to the caller.
    """

    @field_validator("name", mode="before", check_fields=False)
    @classmethod
    def _check_name(cls, value):
        if value is None:
            raise ValueError("Product name is required")
        if not isinstance(value, str):
            raise ValueError("Product name must be a string")
        value = value.strip()
        if not value:
            raise ValueError("Product name is required")
        return value

    @field_validator("description", mode="before", check_fields=False)
    @classmethod
    def _check_description(cls, value):
        if value is None:
            return ""
        if not isinstance(value, str):
            raise ValueError("Description must be a string")
        return value.strip()

    @field_validator("stock_quantity", "low_stock_threshold", mode="before", check_fields=False)
    @classmethod
    def _check_count(cls, value, info: ValidationInfo):
        label = _COUNT_LABELS[info.field_name]
        if not _is_number(value):
            raise ValueError(f"{label} must be an integer")
        if value < 0:
            raise ValueError(f"{label} cannot be negative")
        if not _is_integral(value):
            raise ValueError(f"{label} must be an integer")
        if value > MAX_QUANTITY:
            raise ValueError(f"{label} is too large")
        return int(value)


class ProductCreate(_ProductInput):
    name: str
    description: str = ""
    stock_quantity: int = Field(DEFAULT_STOCK_QUANTITY, ge=0)
    low_stock_threshold: int = Field(DEFAULT_LOW_STOCK_THRESHOLD, ge=0)


class ProductUpdate(_ProductInput):
    name: Optional[str] = None
    description: Optional[str] = None
    stock_quantity: Optional[int] = Field(None, ge=0)
    low_stock_threshold: Optional[int] = Field(None, ge=0)

    def changes(self) -> Dict[str, Any]:
        """Only the fields the caller actually supplied."""
        return self.model_dump(exclude_unset=True)


class StockAdjustment(BaseModel):
    amount: int

    @field_validator("amount", mode="before")
    @classmethod
    def _check_amount(cls, value):
        # "positive" is checked first, so absent and zero share its message
        if not value or (_is_number(value) and value <= 0):
            raise ValueError("Amount must be a positive number")
        if not _is_integral(value):
            raise ValueError("Amount must be an integer")
        if value > MAX_QUANTITY:
            raise ValueError("Amount is too large")
        return int(value)


class Product(_CamelModel):
    id: str
    name: str
    description: str = ""
    stock_quantity: int = Field(DEFAULT_STOCK_QUANTITY, ge=0)
    low_stock_threshold: int = Field(DEFAULT_LOW_STOCK_THRESHOLD, ge=0)
    created_at: datetime
    updated_at: datetime

    def to_json(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")
