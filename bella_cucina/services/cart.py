"""
Cart Store
==========

Server-side cart lines, owned either by a signed-in user (user_id) or by an
anonymous guest session (session_id). A cart line exists until checkout or
until the customer removes it.

None of the functions here commit. Route handlers commit simple cart edits
themselves, and checkout clears the cart inside its own transaction so that
a cart is never emptied without a placed order.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session, joinedload

from .. import config
from ..errors import ItemUnavailable, ValidationError
from ..models import CartItem
from .catalog import MenuCatalog
from .pricing import PriceBreakdown, calculate_order_total, line_subtotal


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CartOwner:
    """Who a cart belongs to. A signed-in user takes precedence over a session."""

    user_id: Optional[int] = None
    session_id: Optional[str] = None

    @property
    def is_guest(self) -> bool:
        return self.user_id is None


def _check_quantity(quantity: Optional[int]) -> None:
    if quantity is None or quantity < 1:
        raise ValidationError("quantity", "Quantity must be at least 1")
    if quantity > config.MAX_ITEM_QUANTITY:
        raise ValidationError("quantity", f"Quantity cannot exceed {config.MAX_ITEM_QUANTITY}")


class CartStore:
    def __init__(self, db: Session):
        self.db = db

    def _query(self, owner: CartOwner):
        query = self.db.query(CartItem)
        if owner.user_id is not None:
            return query.filter(CartItem.user_id == owner.user_id)
        if owner.session_id:
            return query.filter(CartItem.user_id.is_(None), CartItem.session_id == owner.session_id)
        raise ValueError("Cart owner needs a user_id or a session_id")

    def list_lines(self, owner: CartOwner) -> List[CartItem]:
        return (
            self._query(owner)
            .options(joinedload(CartItem.menu_item))
            .order_by(CartItem.created_at.desc(), CartItem.id.desc())
            .all()
        )

    def list_for_user(self, user_id: int) -> List[CartItem]:
        return self.list_lines(CartOwner(user_id=user_id))

    def add(self, owner: CartOwner, menu_item_id: Any, quantity: int) -> CartItem:
        """Add an item, or increase its quantity if it is already in the cart."""
        _check_quantity(quantity)

        item = MenuCatalog(self.db).get_available(menu_item_id)
        if item is None:
            raise ItemUnavailable(menu_item_id)

        line = self._query(owner).filter(CartItem.menu_item_id == item.id).first()
        if line is not None:
            _check_quantity(line.quantity + quantity)
            line.quantity += quantity
        else:
            line = CartItem(
                user_id=owner.user_id,
                session_id=None if owner.user_id is not None else owner.session_id,
                menu_item_id=item.id,
                quantity=quantity,
            )
            self.db.add(line)
        self.db.flush()
        return line

    def update_quantity(self, owner: CartOwner, cart_id: int, quantity: int) -> Optional[CartItem]:
        _check_quantity(quantity)
        line = self._query(owner).filter(CartItem.id == cart_id).first()
        if line is None:
            return None
        line.quantity = quantity
        self.db.flush()
        return line

    def remove(self, owner: CartOwner, cart_id: int) -> bool:
        line = self._query(owner).filter(CartItem.id == cart_id).first()
        if line is None:
            return False
        self.db.delete(line)
        self.db.flush()
        return True

    def clear(self, owner: CartOwner) -> int:
        removed = self._query(owner).delete(synchronize_session=False)
        self.db.flush()
        return removed

    def clear_for_user(self, user_id: Optional[int]) -> int:
        """Empty a user's cart. Guests (user_id None) have nothing to clear."""
        if user_id is None:
            return 0
        removed = self.clear(CartOwner(user_id=user_id))
        logger.debug("Cleared %d cart lines for user %s", removed, user_id)
        return removed

    def summary(self, owner: CartOwner) -> Dict[str, Any]:
        """Cart lines plus a price summary computed with checkout rules."""
        lines = self.list_lines(owner)
        items = [
            {
                "cart_id": line.id,
                "menu_item_id": line.menu_item_id,
                "name": line.menu_item.name,
                "category": line.menu_item.category,
                "price": float(line.menu_item.price),
                "quantity": line.quantity,
                "subtotal": float(line_subtotal(line.menu_item.price, line.quantity)),
                "is_available": line.menu_item.is_available,
            }
            for line in lines
        ]

        if lines:
            breakdown = calculate_order_total(
                (line.menu_item.price, line.quantity) for line in lines
            )
        else:
            zero = Decimal("0.00")
            breakdown = PriceBreakdown(subtotal=zero, delivery_fee=zero, tax=zero)

        summary = breakdown.as_dict()
        summary["itemCount"] = sum(line.quantity for line in lines)
        return {"items": items, "summary": summary}
