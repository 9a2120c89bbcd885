"""
Admin Menu Routes for Bella Cucina
==================================

Admin endpoints for managing menu items.

Endpoints:
----------
- GET /admin/menu: List all menu items
- POST /admin/menu: Create a new menu item
- GET /admin/menu/{id}: Get a specific menu item
- PUT /admin/menu/{id}: Update a menu item
- DELETE /admin/menu/{id}: Delete a menu item

Authentication:
---------------
All endpoints require admin authentication via HTTP Basic Auth.

Price Changes:
--------------
Changing a price or marking an item unavailable affects new checkouts only.
Existing orders keep the name and price captured when they were placed.

Usage:
------
    POST /admin/menu
    {
        "id": "margherita",
        "name": "Margherita Pizza",
        "category": "pizza",
        "price": 18.00
    }

    # Take an item off the menu for the evening
    PUT /admin/menu/osso-buco
    {"is_available": false}
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..auth import verify_admin_credentials
from ..db import get_db
from ..models import MenuItem
from ..schemas.menu import MenuItemOut, MenuItemCreate, MenuItemUpdate


logger = logging.getLogger(__name__)

admin_menu_router = APIRouter(prefix="/admin/menu", tags=["Admin - Menu"])


@admin_menu_router.get("", response_model=List[MenuItemOut])
def admin_menu(
    db: Session = Depends(get_db),
    _admin: str = Depends(verify_admin_credentials),
) -> List[MenuItemOut]:
    """List all menu items, including unavailable ones."""
    items = db.query(MenuItem).order_by(MenuItem.category.asc(), MenuItem.name.asc()).all()
    return [MenuItemOut.model_validate(m) for m in items]


@admin_menu_router.post("", response_model=MenuItemOut, status_code=201)
def create_menu_item(
    payload: MenuItemCreate,
    db: Session = Depends(get_db),
    _admin: str = Depends(verify_admin_credentials),
) -> MenuItemOut:
    if db.get(MenuItem, payload.id) is not None:
        raise HTTPException(status_code=409, detail="Menu item id already exists")

    item = MenuItem(
        id=payload.id,
        name=payload.name,
        category=payload.category,
        description=payload.description,
        price=payload.price,
        is_available=payload.is_available,
    )
    db.add(item)
    db.commit()
    db.refresh(item)
    logger.info("Created menu item: %s (id=%s)", item.name, item.id)
    return MenuItemOut.model_validate(item)


@admin_menu_router.get("/{item_id}", response_model=MenuItemOut)
def get_menu_item(
    item_id: str,
    db: Session = Depends(get_db),
    _admin: str = Depends(verify_admin_credentials),
) -> MenuItemOut:
    item = db.get(MenuItem, item_id)
    if not item:
        raise HTTPException(status_code=404, detail="Menu item not found")
    return MenuItemOut.model_validate(item)


@admin_menu_router.put("/{item_id}", response_model=MenuItemOut)
def update_menu_item(
    item_id: str,
    payload: MenuItemUpdate,
    db: Session = Depends(get_db),
    _admin: str = Depends(verify_admin_credentials),
) -> MenuItemOut:
    item = db.get(MenuItem, item_id)
    if not item:
        raise HTTPException(status_code=404, detail="Menu item not found")

    if payload.name is not None:
        item.name = payload.name
    if payload.category is not None:
        item.category = payload.category
    if payload.description is not None:
        item.description = payload.description
    if payload.price is not None:
        item.price = payload.price
    if payload.is_available is not None:
        item.is_available = payload.is_available

    db.commit()
    db.refresh(item)
    logger.info("Updated menu item: %s (id=%s)", item.name, item.id)
    return MenuItemOut.model_validate(item)


@admin_menu_router.delete("/{item_id}", status_code=204)
def delete_menu_item(
    item_id: str,
    db: Session = Depends(get_db),
    _admin: str = Depends(verify_admin_credentials),
) -> None:
    item = db.get(MenuItem, item_id)
    if not item:
        raise HTTPException(status_code=404, detail="Menu item not found")
    logger.info("Deleting menu item: %s (id=%s)", item.name, item.id)
    db.delete(item)
    db.commit()
    return None
