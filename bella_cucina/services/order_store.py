"""
Order Store
===========

Durable storage for order headers and their line items.

insert_order_with_items adds the header and all items and flushes, but never
commits: the caller owns the transaction, so the insert can be grouped with
clearing the cart and rolled back as one unit.
"""

import logging
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session, selectinload

from ..models import Order, OrderItem


logger = logging.getLogger(__name__)


class OrderStore:
    def __init__(self, db: Session):
        self.db = db

    def insert_order_with_items(self, order: Order, items: List[OrderItem]) -> int:
        """Stage an order and its items in the current transaction; return the new id."""
        self.db.add(order)
        self.db.flush()  # populate order.id
        for item in items:
            item.order_id = order.id
            self.db.add(item)
        self.db.flush()
        return order.id

    def order_number_exists(self, order_number: str) -> bool:
        return (
            self.db.query(Order.id).filter(Order.order_number == order_number).first()
            is not None
        )

    def get(self, order_id: int) -> Optional[Order]:
        return (
            self.db.query(Order)
            .options(selectinload(Order.items))
            .filter(Order.id == order_id)
            .first()
        )

    def get_by_number(self, order_number: str) -> Optional[Order]:
        return (
            self.db.query(Order)
            .options(selectinload(Order.items))
            .filter(Order.order_number == order_number)
            .first()
        )

    def list_for_user(self, user_id: int) -> List[Order]:
        return (
            self.db.query(Order)
            .filter(Order.user_id == user_id)
            .order_by(Order.created_at.desc(), Order.id.desc())
            .all()
        )

    def list_page(
        self,
        status: Optional[str] = None,
        page: int = 1,
        page_size: int = 10,
    ) -> Tuple[List[Order], int]:
        """Return one page of orders (newest first) and the total match count."""
        query = self.db.query(Order)
        if status:
            query = query.filter(Order.status == status)

        total = query.count()
        offset = (page - 1) * page_size
        orders = (
            query.order_by(Order.created_at.desc(), Order.id.desc())
            .offset(offset)
            .limit(page_size)
            .all()
        )
        return orders, total
