"""
Menu Catalog
============

Read access to the authoritative menu. The checkout path only ever prices
items through get_by_id, so the catalog is the single source of item
identity, price and availability.
"""

import logging
from typing import Any, List, Optional

from sqlalchemy.orm import Session

from ..models import MenuItem


logger = logging.getLogger(__name__)


def normalize_item_id(menu_item_id: Any) -> Optional[str]:
    """Menu ids are strings; clients may send integers."""
    if menu_item_id is None or isinstance(menu_item_id, bool):
        return None
    value = str(menu_item_id).strip()
    return value or None


class MenuCatalog:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, menu_item_id: Any) -> Optional[MenuItem]:
        item_id = normalize_item_id(menu_item_id)
        if item_id is None:
            return None
        return self.db.get(MenuItem, item_id)

    def get_available(self, menu_item_id: Any) -> Optional[MenuItem]:
        """Return the item only if it exists and can be ordered."""
        item = self.get_by_id(menu_item_id)
        if item is None or not item.is_available:
            return None
        return item

    def list_items(
        self,
        category: Optional[str] = None,
        available: Optional[bool] = None,
    ) -> List[MenuItem]:
        query = self.db.query(MenuItem)
        if category:
            query = query.filter(MenuItem.category == category)
        if available is not None:
            query = query.filter(MenuItem.is_available == available)
        return query.order_by(MenuItem.category.asc(), MenuItem.name.asc()).all()

    def list_categories(self) -> List[str]:
        rows = (
            self.db.query(MenuItem.category)
            .distinct()
            .order_by(MenuItem.category.asc())
            .all()
        )
        return [row[0] for row in rows]
