"""
Order Schemas for Bella Cucina
==============================

Pydantic models for checkout requests and order responses.

Endpoint Coverage:
------------------
- POST /orders: CheckoutRequest -> CheckoutResponse
- GET /orders, /orders/{id}, /orders/track/{order_number}: OrderDetailOut
- PUT /orders/{id}/status: OrderStatusUpdate
- GET /admin/orders: OrderListResponse

Checkout Request:
-----------------
The storefront posts camelCase field names (fullName, zipCode,
paymentMethod, menuItemId); snake_case names are accepted as well. Every
field is optional at the schema level so that the checkout service can
report the first missing field with a field-level error instead of a bulk
schema failure. Any "price" sent with an item is ignored; prices always come
from the menu.

Money Fields:
-------------
Money is stored as Decimal. Response models expose it as a float rounded to
cents, which is what the storefront's JavaScript expects.
"""

from decimal import Decimal
from typing import List, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


def _money(value):
    if isinstance(value, Decimal):
        return float(value)
    return value


class CheckoutLineIn(BaseModel):
    """One {menuItemId, quantity} pair from the checkout form."""
    model_config = ConfigDict(populate_by_name=True)

    menu_item_id: Optional[Union[int, str]] = Field(
        default=None,
        validation_alias=AliasChoices("menuItemId", "menu_item_id", "id"),
    )
    quantity: Optional[int] = None


class CheckoutRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    full_name: Optional[str] = Field(default=None, validation_alias=AliasChoices("fullName", "full_name"))
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = Field(default=None, validation_alias=AliasChoices("zipCode", "zip_code"))
    delivery_notes: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("deliveryNotes", "delivery_notes")
    )
    payment_method: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("paymentMethod", "payment_method")
    )
    items: Optional[List[CheckoutLineIn]] = None


class CheckoutResponse(BaseModel):
    orderId: int
    orderNumber: str
    total: float
    status: str
    estimatedDelivery: str


class OrderItemOut(BaseModel):
    """
    Response model for an order line item.

    name and price are the values captured at checkout, not the current menu.
    """
    model_config = ConfigDict(from_attributes=True)

    id: int
    menu_item_id: str
    name: str
    price: float
    quantity: int
    subtotal: float

    @field_validator("price", "subtotal", mode="before")
    @classmethod
    def decimal_to_float(cls, v):
        return _money(v)


class OrderSummaryOut(BaseModel):
    """Order header without line items, used in listings."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    order_number: str
    user_id: Optional[int] = None
    full_name: str
    email: str
    phone: str
    address: str
    city: str
    state: str
    zip_code: str
    delivery_notes: Optional[str] = None
    subtotal: float
    delivery_fee: float
    tax: float
    total: float
    payment_method: str
    status: str
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @field_validator("subtotal", "delivery_fee", "tax", "total", mode="before")
    @classmethod
    def decimal_to_float(cls, v):
        return _money(v)

    @field_validator("created_at", "updated_at", mode="before")
    @classmethod
    def format_timestamp(cls, v):
        """ISO format; naive SQLite timestamps are UTC."""
        if v is None or isinstance(v, str):
            return v
        if v.tzinfo is None:
            return v.isoformat() + "Z"
        return v.isoformat()


class OrderDetailOut(OrderSummaryOut):
    items: List[OrderItemOut]


class OrderStatusUpdate(BaseModel):
    status: str


class OrderListResponse(BaseModel):
    """
    Paginated response for order listing.

    Example:
        {
            "items": [...],
            "page": 1,
            "page_size": 10,
            "total": 42,
            "has_next": true
        }
    """
    items: List[OrderSummaryOut]
    page: int
    page_size: int
    total: int
    has_next: bool
