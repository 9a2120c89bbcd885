"""
Schemas Package for Bella Cucina
================================

Pydantic models used for request validation and response serialization.

Schema Organization:
--------------------
- **menu.py**: Menu item schemas
- **cart.py**: Cart request bodies
- **orders.py**: Checkout request, order responses and status updates
- **payments.py**: Payment requests and responses

Naming Conventions:
-------------------
- *Out: Response models (e.g., MenuItemOut)
- *Create / *Update / *Add: Request bodies
- *Request / *Response: Complex request and response structures
"""

from .menu import MenuItemOut, MenuItemCreate, MenuItemUpdate
from .cart import CartItemAdd, CartItemUpdate
from .orders import (
    CheckoutLineIn,
    CheckoutRequest,
    CheckoutResponse,
    OrderItemOut,
    OrderSummaryOut,
    OrderDetailOut,
    OrderStatusUpdate,
    OrderListResponse,
)
from .payments import PaymentCreate, PaymentOut, PaymentStatusUpdate, PaymentVerifyOut

__all__ = [
    "MenuItemOut",
    "MenuItemCreate",
    "MenuItemUpdate",
    "CartItemAdd",
    "CartItemUpdate",
    "CheckoutLineIn",
    "CheckoutRequest",
    "CheckoutResponse",
    "OrderItemOut",
    "OrderSummaryOut",
    "OrderDetailOut",
    "OrderStatusUpdate",
    "OrderListResponse",
    "PaymentCreate",
    "PaymentOut",
    "PaymentStatusUpdate",
    "PaymentVerifyOut",
]
