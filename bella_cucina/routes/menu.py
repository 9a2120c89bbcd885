"""
Public Menu Routes for Bella Cucina
===================================

Read-only menu browsing for the storefront. No authentication required.

Endpoints:
----------
- GET /menu: List menu items, optionally filtered by category/availability
- GET /menu/meta/categories: Distinct category names
- GET /menu/{id}: Get a single menu item
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ..db import get_db
from ..schemas.menu import MenuItemOut
from ..services.catalog import MenuCatalog


logger = logging.getLogger(__name__)

menu_router = APIRouter(prefix="/menu", tags=["Menu"])


@menu_router.get("", response_model=List[MenuItemOut])
def list_menu(
    db: Session = Depends(get_db),
    category: Optional[str] = Query(None, description="Only items in this category"),
    available: Optional[bool] = Query(None, description="Filter by availability"),
) -> List[MenuItemOut]:
    items = MenuCatalog(db).list_items(category=category, available=available)
    return [MenuItemOut.model_validate(item) for item in items]


@menu_router.get("/meta/categories", response_model=List[str])
def list_categories(db: Session = Depends(get_db)) -> List[str]:
    return MenuCatalog(db).list_categories()


@menu_router.get("/{item_id}", response_model=MenuItemOut)
def get_menu_item(item_id: str, db: Session = Depends(get_db)) -> MenuItemOut:
    item = MenuCatalog(db).get_by_id(item_id)
    if not item:
        raise HTTPException(status_code=404, detail="Menu item not found")
    return MenuItemOut.model_validate(item)
