"""
Cart Routes for Bella Cucina
============================

Server-side cart for signed-in customers (X-User-Id) and guests
(X-Session-Id).

Endpoints:
----------
- GET /cart: Cart lines and a price summary
- POST /cart: Add an item (adds to the quantity if already present)
- PUT /cart/{cart_id}: Set a line's quantity
- DELETE /cart/{cart_id}: Remove a line
- DELETE /cart: Empty the cart

The summary uses the same pricing rules as checkout, so the totals shown
here are the totals the customer will be charged at current menu prices.
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..auth import get_cart_owner
from ..db import get_db
from ..schemas.cart import CartItemAdd, CartItemUpdate
from ..services.cart import CartOwner, CartStore


logger = logging.getLogger(__name__)

cart_router = APIRouter(prefix="/cart", tags=["Cart"])


@cart_router.get("", response_model=Dict[str, Any])
def get_cart(
    owner: CartOwner = Depends(get_cart_owner),
    db: Session = Depends(get_db),
) -> Dict[str, Any]:
    return CartStore(db).summary(owner)


@cart_router.post("", response_model=Dict[str, Any], status_code=201)
def add_to_cart(
    payload: CartItemAdd,
    owner: CartOwner = Depends(get_cart_owner),
    db: Session = Depends(get_db),
) -> Dict[str, Any]:
    store = CartStore(db)
    line = store.add(owner, payload.menu_item_id, payload.quantity)
    db.commit()
    logger.debug("Cart line %d now has quantity %d", line.id, line.quantity)
    return store.summary(owner)


@cart_router.put("/{cart_id}", response_model=Dict[str, Any])
def update_cart_item(
    cart_id: int,
    payload: CartItemUpdate,
    owner: CartOwner = Depends(get_cart_owner),
    db: Session = Depends(get_db),
) -> Dict[str, Any]:
    store = CartStore(db)
    if store.update_quantity(owner, cart_id, payload.quantity) is None:
        raise HTTPException(status_code=404, detail="Cart item not found")
    db.commit()
    return store.summary(owner)


@cart_router.delete("/{cart_id}", response_model=Dict[str, Any])
def remove_cart_item(
    cart_id: int,
    owner: CartOwner = Depends(get_cart_owner),
    db: Session = Depends(get_db),
) -> Dict[str, Any]:
    store = CartStore(db)
    if not store.remove(owner, cart_id):
        raise HTTPException(status_code=404, detail="Cart item not found")
    db.commit()
    return store.summary(owner)


@cart_router.delete("", response_model=Dict[str, Any])
def clear_cart(
    owner: CartOwner = Depends(get_cart_owner),
    db: Session = Depends(get_db),
) -> Dict[str, Any]:
    store = CartStore(db)
    removed = store.clear(owner)
    db.commit()
    logger.debug("Cleared %d cart lines", removed)
    return store.summary(owner)
