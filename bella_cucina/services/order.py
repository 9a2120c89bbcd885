"""
Order Transaction Service for Bella Cucina
==========================================

This module turns a checkout request into a durable, internally consistent
order, and manages the order's status afterwards.

Key Functions:
--------------
- OrderTransaction.place_order: validate, price, persist, clear the cart
- update_order_status: admin status change
- cancel_order: customer cancellation (pending orders only)

Checkout Sequence:
------------------
1. Validate delivery contact fields and the payment method
2. Validate the item list, then look every item up in the menu catalog.
   Names and prices are snapshotted here; client-sent prices are ignored.
3. Price the order (see services/pricing.py)
4. Generate an order number that is not in use yet
5. In ONE transaction: insert the order, insert its items, clear the
   customer's cart, commit. Any database error rolls all of it back.

Steps 1-4 never write, so validation and availability errors leave the
database untouched.

Order Lifecycle:
----------------
pending -> confirmed -> preparing -> out_for_delivery -> delivered

- cancelled is reachable from pending only, for customers and admins alike
- cancelled is terminal
- other admin changes are not restricted to the linear order above

New orders start as ORDER_INITIAL_STATUS (pending by default). A successful
payment (services/payment.py) moves a pending order to confirmed.
"""

import logging
import secrets
import time
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional

from email_validator import EmailNotValidError, validate_email
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .. import config
from ..errors import (
    ItemUnavailable,
    OrderNotFound,
    OrderNumberExhausted,
    OrderStatusError,
    StorageFailure,
    ValidationError,
)
from ..models import Order, OrderItem
from .cart import CartStore
from .catalog import MenuCatalog, normalize_item_id
from .order_store import OrderStore
from .pricing import PriceBreakdown, calculate_order_total, line_subtotal, round_money


logger = logging.getLogger(__name__)


# =============================================================================
# Order Status
# =============================================================================

PENDING = "pending"
CONFIRMED = "confirmed"
PREPARING = "preparing"
OUT_FOR_DELIVERY = "out_for_delivery"
DELIVERED = "delivered"
CANCELLED = "cancelled"

ORDER_STATUSES = [PENDING, CONFIRMED, PREPARING, OUT_FOR_DELIVERY, DELIVERED, CANCELLED]

STATUS_ALIASES = {"on_the_way": OUT_FOR_DELIVERY}


def normalize_status(status: Optional[str]) -> Optional[str]:
    """Return the canonical status name, or None if it is not a known status."""
    if not status:
        return None
    value = status.strip().lower()
    value = STATUS_ALIASES.get(value, value)
    return value if value in ORDER_STATUSES else None


def check_status_transition(current: str, requested: str) -> None:
    """Raise OrderStatusError if current -> requested is not allowed."""
    if current == requested:
        return
    if current == CANCELLED:
        raise OrderStatusError(current, requested, "Cancelled orders cannot change status")
    if requested == CANCELLED and current != PENDING:
        raise OrderStatusError(
            current, requested, f"Only pending orders can be cancelled (order is '{current}')"
        )


def initial_status() -> str:
    if config.ORDER_INITIAL_STATUS == CONFIRMED:
        return CONFIRMED
    return PENDING


# =============================================================================
# Order Numbers
# =============================================================================

def generate_order_number(prefix: Optional[str] = None) -> str:
    """Prefix + last 6 digits of the millisecond clock + 4 random digits."""
    prefix = config.ORDER_NUMBER_PREFIX if prefix is None else prefix
    timestamp = str(int(time.time() * 1000))[-6:]
    random_part = f"{secrets.randbelow(10000):04d}"
    return f"{prefix}{timestamp}{random_part}"


# =============================================================================
# Checkout
# =============================================================================

# (attribute on the request, name reported to the client, message)
REQUIRED_CONTACT_FIELDS = [
    ("full_name", "fullName", "Full name is required"),
    ("email", "email", "Email is required"),
    ("phone", "phone", "Phone is required"),
    ("address", "address", "Address is required"),
    ("city", "city", "City is required"),
    ("state", "state", "State is required"),
    ("zip_code", "zipCode", "ZIP code is required"),
]


@dataclass(frozen=True)
class PricedLine:
    """A validated order line with name and price copied from the catalog."""

    menu_item_id: str
    name: str
    price: Decimal
    quantity: int

    @property
    def subtotal(self) -> Decimal:
        return line_subtotal(self.price, self.quantity)


@dataclass(frozen=True)
class OrderResult:
    order_id: int
    order_number: str
    status: str
    breakdown: PriceBreakdown

    @property
    def total(self) -> Decimal:
        return self.breakdown.total

    def to_response(self) -> Dict[str, Any]:
        return {
            "orderId": self.order_id,
            "orderNumber": self.order_number,
            "total": float(self.total),
            "status": self.status,
            "estimatedDelivery": config.ESTIMATED_DELIVERY,
        }


def _clean(value: Any) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


class OrderTransaction:
    """
    One checkout, processed as a single unit of work on a database session.

    The collaborators default to the SQLAlchemy-backed stores bound to the
    same session, which is what makes the insert and the cart clear commit
    or roll back together.
    """

    def __init__(
        self,
        db: Session,
        catalog: Optional[MenuCatalog] = None,
        carts: Optional[CartStore] = None,
        orders: Optional[OrderStore] = None,
        order_number_factory: Optional[Callable[[], str]] = None,
    ):
        self.db = db
        self.catalog = catalog or MenuCatalog(db)
        self.carts = carts or CartStore(db)
        self.orders = orders or OrderStore(db)
        self.order_number_factory = order_number_factory or generate_order_number

    def place_order(self, request: Any, user_id: Optional[int] = None) -> OrderResult:
        """
        Validate and persist a checkout request.

        Args:
            request: CheckoutRequest (or any object with the same attributes)
            user_id: Acting user, or None for guest checkout

        Returns:
            OrderResult with the new order's id, number, status and totals

        Raises:
            ValidationError: missing or malformed input (nothing written)
            ItemUnavailable: unknown or unavailable menu item (nothing written)
            OrderNumberExhausted: no free order number found (nothing written)
            StorageFailure: commit failed, everything rolled back
        """
        contact = self.validate_contact(request)
        payment_method = self.validate_payment_method(getattr(request, "payment_method", None))
        lines = self.price_lines(getattr(request, "items", None))

        breakdown = calculate_order_total((line.price, line.quantity) for line in lines)
        if breakdown.subtotal < config.MINIMUM_ORDER:
            raise ValidationError("items", f"Minimum order amount is ${round_money(config.MINIMUM_ORDER)}")

        status = initial_status()

        try:
            order_number = self.next_order_number()
            order = Order(
                order_number=order_number,
                user_id=user_id,
                payment_method=payment_method,
                status=status,
                subtotal=breakdown.subtotal,
                delivery_fee=breakdown.delivery_fee,
                tax=breakdown.tax,
                total=breakdown.total,
                **contact,
            )
            items = [
                OrderItem(
                    menu_item_id=line.menu_item_id,
                    name=line.name,
                    price=line.price,
                    quantity=line.quantity,
                    subtotal=line.subtotal,
                )
                for line in lines
            ]
            order_id = self.orders.insert_order_with_items(order, items)
            self.carts.clear_for_user(user_id)
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Order could not be committed; transaction rolled back")
            raise StorageFailure("Order could not be saved") from exc

        logger.info(
            "Order #%d (%s) created: subtotal=$%s, delivery=$%s, tax=$%s, total=$%s, status=%s",
            order_id, order_number, breakdown.subtotal, breakdown.delivery_fee,
            breakdown.tax, breakdown.total, status,
        )
        logger.debug("Order %s contact: %s <%s>", order_number, contact["full_name"], contact["email"])

        return OrderResult(
            order_id=order_id,
            order_number=order_number,
            status=status,
            breakdown=breakdown,
        )

    def validate_contact(self, request: Any) -> Dict[str, Optional[str]]:
        contact: Dict[str, Optional[str]] = {}
        for attr, field, message in REQUIRED_CONTACT_FIELDS:
            value = _clean(getattr(request, attr, None))
            if value is None:
                raise ValidationError(field, message)
            contact[attr] = value

        try:
            result = validate_email(contact["email"], check_deliverability=False)
        except EmailNotValidError:
            raise ValidationError("email", "Valid email is required")
        contact["email"] = result.normalized

        contact["delivery_notes"] = _clean(getattr(request, "delivery_notes", None))
        return contact

    def validate_payment_method(self, payment_method: Any) -> str:
        method = (_clean(payment_method) or "").lower()
        if method not in config.PAYMENT_METHODS:
            raise ValidationError("paymentMethod", "Valid payment method is required")
        return method

    def price_lines(self, items: Optional[List[Any]]) -> List[PricedLine]:
        """Check the item list, then snapshot each line from the catalog."""
        if not items:
            raise ValidationError("items", "Order must contain at least one item")

        requested = []
        for index, item in enumerate(items):
            menu_item_id = normalize_item_id(getattr(item, "menu_item_id", None))
            if menu_item_id is None:
                raise ValidationError(f"items[{index}].menuItemId", "Menu item ID is required")
            quantity = getattr(item, "quantity", None)
            if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity < 1:
                raise ValidationError(f"items[{index}].quantity", "Quantity must be at least 1")
            if quantity > config.MAX_ITEM_QUANTITY:
                raise ValidationError(
                    f"items[{index}].quantity",
                    f"Quantity cannot exceed {config.MAX_ITEM_QUANTITY}",
                )
            requested.append((menu_item_id, quantity))

        lines = []
        for menu_item_id, quantity in requested:
            menu_item = self.catalog.get_available(menu_item_id)
            if menu_item is None:
                raise ItemUnavailable(menu_item_id)
            lines.append(
                PricedLine(
                    menu_item_id=menu_item.id,
                    name=menu_item.name,
                    price=round_money(menu_item.price),
                    quantity=quantity,
                )
            )
        return lines

    def next_order_number(self) -> str:
        attempts = config.ORDER_NUMBER_MAX_ATTEMPTS
        for attempt in range(1, attempts + 1):
            candidate = self.order_number_factory()
            if not self.orders.order_number_exists(candidate):
                return candidate
            logger.warning("Order number collision on attempt %d/%d", attempt, attempts)
        logger.error("Order number generation exhausted after %d attempts", attempts)
        raise OrderNumberExhausted(attempts)


# =============================================================================
# Status Changes
# =============================================================================

def _commit_status(db: Session, order: Order, status: str) -> Order:
    previous = order.status
    order.status = status
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Status change for order #%d could not be committed", order.id)
        raise StorageFailure("Order status could not be saved") from exc
    db.refresh(order)
    logger.info("Order #%d status: %s -> %s", order.id, previous, status)
    return order


def update_order_status(db: Session, order_id: int, status: str) -> Order:
    """Admin status change. Only the cancellation rules are enforced."""
    requested = normalize_status(status)
    if requested is None:
        raise ValidationError("status", f"Invalid status. Must be one of: {', '.join(ORDER_STATUSES)}")

    order = OrderStore(db).get(order_id)
    if order is None:
        raise OrderNotFound(order_id)

    check_status_transition(order.status, requested)
    if order.status == requested:
        return order
    return _commit_status(db, order, requested)


def cancel_order(db: Session, order_id: int, user_id: int) -> Order:
    """Cancel a customer's own order while it is still pending."""
    order = OrderStore(db).get(order_id)
    if order is None or order.user_id is None or order.user_id != user_id:
        raise OrderNotFound(order_id)

    check_status_transition(order.status, CANCELLED)
    if order.status == CANCELLED:
        return order
    return _commit_status(db, order, CANCELLED)
