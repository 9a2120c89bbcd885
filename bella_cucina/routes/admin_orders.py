"""
Admin Orders Routes for Bella Cucina
====================================

Admin endpoints for viewing customer orders. Status changes go through
PUT /orders/{id}/status (see orders.py).

Endpoints:
----------
- GET /admin/orders: List orders with pagination and filtering
- GET /admin/orders/{id}: Get detailed order information

Authentication:
---------------
All endpoints require admin authentication via HTTP Basic Auth.

Order States:
-------------
- pending: Placed, not yet accepted by the kitchen
- confirmed: Accepted
- preparing: Being cooked
- out_for_delivery: With the driver
- delivered: Done
- cancelled: Cancelled while still pending

Usage:
------
    # List recent pending orders
    GET /admin/orders?status=pending&page=1&page_size=20

    # Get order details
    GET /admin/orders/123
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ..auth import verify_admin_credentials
from ..db import get_db
from ..schemas.orders import OrderDetailOut, OrderListResponse, OrderSummaryOut
from ..services.order import ORDER_STATUSES, normalize_status
from ..services.order_store import OrderStore


logger = logging.getLogger(__name__)

admin_orders_router = APIRouter(prefix="/admin/orders", tags=["Admin - Orders"])


@admin_orders_router.get("", response_model=OrderListResponse)
def list_orders(
    db: Session = Depends(get_db),
    _admin: str = Depends(verify_admin_credentials),
    status: Optional[str] = Query(
        None,
        description=f"Filter by status ({', '.join(ORDER_STATUSES)}), or leave empty for all",
    ),
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=100),
) -> OrderListResponse:
    """Return a paginated list of orders, newest first."""
    status_filter = None
    if status:
        status_filter = normalize_status(status)
        if status_filter is None:
            raise HTTPException(status_code=400, detail="Unknown order status")

    orders, total = OrderStore(db).list_page(status=status_filter, page=page, page_size=page_size)
    items = [OrderSummaryOut.model_validate(o) for o in orders]
    offset = (page - 1) * page_size

    return OrderListResponse(
        items=items,
        page=page,
        page_size=page_size,
        total=total,
        has_next=offset + len(items) < total,
    )


@admin_orders_router.get("/{order_id}", response_model=OrderDetailOut)
def get_order_detail(
    order_id: int,
    db: Session = Depends(get_db),
    _admin: str = Depends(verify_admin_credentials),
) -> OrderDetailOut:
    order = OrderStore(db).get(order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return OrderDetailOut.model_validate(order)
