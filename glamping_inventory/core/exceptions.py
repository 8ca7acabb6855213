from typing import Optional


class InventoryError(Exception):
    """Base class for ledger failures the API layer turns into client errors.

    ``message_key`` is a translation key, not user-facing text.
    """

    status_code: int = 400
    message_key: str = "error.inventory"

    def __init__(self, message_key: Optional[str] = None):
        if message_key is not None:
            self.message_key = message_key
        super().__init__(self.message_key)


class InvalidQuantity(InventoryError):
    message_key = "error.invalidInventoryQuantity"

    def __init__(self, quantity):
        self.quantity = quantity
        super().__init__()


class InsufficientStock(InventoryError):
    message_key = "error.noProductsFoundInStock"

    def __init__(self, product_id: int, requested: int, available: int):
        self.product_id = product_id
        self.requested = requested
        self.available = available
        super().__init__()
