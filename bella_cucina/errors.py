"""
Order error taxonomy.

Validation and availability errors are raised before anything is written.
StorageFailure is raised after the unit of work has been rolled back, so the
caller can always report "order not placed" without ambiguity.
"""

from typing import Any, Dict, Optional


class OrderError(Exception):
    """Base class for all order workflow errors."""


class ValidationError(OrderError):
    """A missing or malformed field that the customer can correct."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")

    def to_dict(self) -> Dict[str, str]:
        return {"field": self.field, "message": self.message}


class ItemUnavailable(OrderError):
    """The named menu item does not exist or cannot be ordered right now."""

    def __init__(self, menu_item_id: Any):
        self.menu_item_id = menu_item_id
        super().__init__(f"Menu item {menu_item_id} not found or unavailable")


class OrderNumberExhausted(OrderError):
    """Could not find an unused order number within the allowed attempts."""

    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(f"Could not generate a unique order number after {attempts} attempts")


class StorageFailure(OrderError):
    """The transaction could not be committed and was rolled back."""


class OrderNotFound(OrderError):
    def __init__(self, order_ref: Any):
        self.order_ref = order_ref
        super().__init__(f"Order {order_ref} not found")


class OrderStatusError(OrderError):
    """A status change that the order lifecycle does not allow."""

    def __init__(self, current: str, requested: str, reason: Optional[str] = None):
        self.current = current
        self.requested = requested
        self.reason = reason or f"Cannot change order status from '{current}' to '{requested}'"
        super().__init__(self.reason)


class PaymentNotFound(OrderError):
    def __init__(self, payment_ref: Any):
        self.payment_ref = payment_ref
        super().__init__(f"Payment {payment_ref} not found")
