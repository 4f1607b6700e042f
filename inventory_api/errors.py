# inventory_api/errors.py
from typing import Optional

# Errors raised by the service layer. Each one knows the HTTP status it maps to
# and carries the message returned to the caller as {"error": message}.


class InventoryError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(InventoryError):
    status_code = 400
    default_message = "Validation failed"


class InvalidIdError(InventoryError):
    status_code = 400
    default_message = "Invalid product ID"


class NotFoundError(InventoryError):
    status_code = 404
    default_message = "Product not found"


class InsufficientStockError(InventoryError):
    status_code = 400
    default_message = "Insufficient stock"


class ServerError(InventoryError):
    status_code = 500


# Errors raised by a ProductStore backend. This is the complete set; the
# service translates each of them into one of the errors above.


class StoreError(Exception):
    pass


class RecordNotFound(StoreError):
    pass


class InvalidIdentifier(StoreError):
    pass


class ConditionFailed(StoreError):
    """The conditional write was rejected (the stock floor would be crossed)."""


class StoreUnavailable(StoreError):
    pass
