"""
Order Routes for Bella Cucina
=============================

Checkout, order lookup, tracking and cancellation.

Endpoints:
----------
- POST /orders: Place an order (guest or signed-in)
- GET /orders: The signed-in customer's orders, newest first
- GET /orders/track/{order_number}: Public tracking by order number
- GET /orders/{id}: One of the signed-in customer's orders
- POST /orders/{id}/cancel: Cancel own order while still pending
- PUT /orders/{id}/status: Admin status change (HTTP Basic Auth)

Error Responses:
----------------
Domain errors raised by the order service are turned into responses by
exception_handlers.py: 400 validation, 404 unavailable item or unknown
order, 409 status policy violation, 500 storage failure.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from .. import config
from ..auth import get_current_user_id, require_user_id, verify_admin_credentials
from ..db import get_db
from ..errors import OrderNotFound
from ..rate_limit import limiter
from ..schemas.orders import (
    CheckoutRequest,
    CheckoutResponse,
    OrderDetailOut,
    OrderStatusUpdate,
    OrderSummaryOut,
)
from ..services.order import OrderTransaction, cancel_order, update_order_status
from ..services.order_store import OrderStore


logger = logging.getLogger(__name__)

orders_router = APIRouter(prefix="/orders", tags=["Orders"])


@orders_router.post("", response_model=CheckoutResponse, status_code=201)
@limiter.limit(config.get_rate_limit_orders)
def create_order(
    request: Request,
    payload: CheckoutRequest,
    user_id: Optional[int] = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> CheckoutResponse:
    """
    Place an order.

    Prices are always taken from the menu. Signed-in customers have their
    cart emptied as part of the same transaction.
    """
    result = OrderTransaction(db).place_order(payload, user_id=user_id)
    return CheckoutResponse(**result.to_response())


@orders_router.get("", response_model=List[OrderSummaryOut])
def list_my_orders(
    user_id: int = Depends(require_user_id),
    db: Session = Depends(get_db),
) -> List[OrderSummaryOut]:
    orders = OrderStore(db).list_for_user(user_id)
    return [OrderSummaryOut.model_validate(o) for o in orders]


@orders_router.get("/track/{order_number}", response_model=OrderDetailOut)
def track_order(order_number: str, db: Session = Depends(get_db)) -> OrderDetailOut:
    order = OrderStore(db).get_by_number(order_number.strip())
    if order is None:
        raise OrderNotFound(order_number)
    return OrderDetailOut.model_validate(order)


@orders_router.get("/{order_id}", response_model=OrderDetailOut)
def get_order(
    order_id: int,
    user_id: int = Depends(require_user_id),
    db: Session = Depends(get_db),
) -> OrderDetailOut:
    order = OrderStore(db).get(order_id)
    # Other customers' orders are reported as missing
    if order is None or order.user_id != user_id:
        raise OrderNotFound(order_id)
    return OrderDetailOut.model_validate(order)


@orders_router.post("/{order_id}/cancel", response_model=OrderDetailOut)
def cancel_my_order(
    order_id: int,
    user_id: int = Depends(require_user_id),
    db: Session = Depends(get_db),
) -> OrderDetailOut:
    order = cancel_order(db, order_id, user_id)
    return OrderDetailOut.model_validate(order)


@orders_router.put("/{order_id}/status", response_model=OrderDetailOut)
def set_order_status(
    order_id: int,
    payload: OrderStatusUpdate,
    db: Session = Depends(get_db),
    _admin: str = Depends(verify_admin_credentials),
) -> OrderDetailOut:
    order = update_order_status(db, order_id, payload.status)
    return OrderDetailOut.model_validate(order)
