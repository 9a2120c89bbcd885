"""
Payment Service for Bella Cucina
================================

Records payments against placed orders. Payment is what confirms an order:
recording a successful payment moves a pending order to confirmed in the same
commit as the payment row.

There is no card gateway behind this module. Card and wallet payments are
recorded as successful immediately; methods listed in DEFERRED_PAYMENT_METHODS
(cash by default) are collected on delivery and recorded as pending until an
admin marks them successful.

Payment Statuses:
-----------------
- pending: recorded, money not collected yet
- success: collected; confirms the order if it is still pending
- failed: declined or not collected
- refunded: returned to the customer; the order status is left alone
"""

import logging
import secrets
import time
from decimal import Decimal
from typing import Any, Callable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .. import config
from ..errors import (
    OrderNotFound,
    OrderStatusError,
    PaymentNotFound,
    StorageFailure,
    ValidationError,
)
from ..models import Order, Payment
from .order import CANCELLED, CONFIRMED, PENDING as ORDER_PENDING
from .order_store import OrderStore
from .pricing import round_money


logger = logging.getLogger(__name__)


PENDING = "pending"
SUCCESS = "success"
FAILED = "failed"
REFUNDED = "refunded"

PAYMENT_STATUSES = [PENDING, SUCCESS, FAILED, REFUNDED]


def generate_transaction_id(prefix: Optional[str] = None) -> str:
    """Prefix + millisecond clock + 3 random digits."""
    prefix = config.TRANSACTION_ID_PREFIX if prefix is None else prefix
    return f"{prefix}{int(time.time() * 1000)}{secrets.randbelow(1000):03d}"


def _owned_order(db: Session, order_id: int, user_id: Optional[int]) -> Order:
    """Orders placed by a signed-in customer are only visible to that customer."""
    order = OrderStore(db).get(order_id)
    if order is None or (order.user_id is not None and order.user_id != user_id):
        raise OrderNotFound(order_id)
    return order


def _confirm_if_pending(order: Order) -> None:
    if order.status == ORDER_PENDING:
        order.status = CONFIRMED
        logger.info("Order #%d confirmed by payment", order.id)


def record_payment(
    db: Session,
    order_id: int,
    payment_method: Any,
    amount: Optional[Decimal] = None,
    card_last4: Optional[str] = None,
    user_id: Optional[int] = None,
    transaction_id_factory: Optional[Callable[[], str]] = None,
) -> Payment:
    """
    Record a payment for an order and confirm the order when it succeeds.

    Args:
        order_id: Order being paid
        payment_method: One of config.PAYMENT_METHODS
        amount: Amount paid; defaults to the order total and must match it
        card_last4: Last four card digits, kept for receipts
        user_id: Acting user, or None for guests

    Raises:
        ValidationError: bad method, amount or card digits
        OrderNotFound: unknown order, or another customer's order
        OrderStatusError: order is cancelled or already paid
        StorageFailure: commit failed, nothing was saved
    """
    method = str(payment_method or "").strip().lower()
    if method not in config.PAYMENT_METHODS:
        raise ValidationError("payment_method", "Valid payment method is required")

    if card_last4 is not None and (len(card_last4) != 4 or not card_last4.isdigit()):
        raise ValidationError("card_last4", "Card digits must be the last 4 digits of the card")

    order = _owned_order(db, order_id, user_id)

    if order.status == CANCELLED:
        raise OrderStatusError(order.status, CONFIRMED, "Cancelled orders cannot be paid")
    if any(p.payment_status == SUCCESS for p in order.payments):
        raise OrderStatusError(order.status, order.status, "Order has already been paid")

    paid = order.total if amount is None else round_money(amount)
    if paid != order.total:
        raise ValidationError("amount", f"Amount must equal the order total (${order.total})")

    payment_status = PENDING if method in config.DEFERRED_PAYMENT_METHODS else SUCCESS
    factory = transaction_id_factory or generate_transaction_id

    payment = Payment(
        order_id=order.id,
        amount=paid,
        payment_method=method,
        payment_status=payment_status,
        transaction_id=factory(),
        card_last4=card_last4,
    )
    try:
        db.add(payment)
        db.flush()
        if payment_status == SUCCESS:
            _confirm_if_pending(order)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Payment for order #%d could not be committed; transaction rolled back", order_id)
        raise StorageFailure("Payment could not be saved") from exc

    db.refresh(payment)
    logger.info(
        "Payment %s recorded for order #%d: $%s via %s, status=%s",
        payment.transaction_id, order.id, paid, method, payment_status,
    )
    logger.debug("Payment %s card ending %s", payment.transaction_id, card_last4)
    return payment


def update_payment_status(db: Session, payment_id: int, payment_status: Any) -> Payment:
    """Admin or gateway callback status change. A success confirms a pending order."""
    requested = str(payment_status or "").strip().lower()
    if requested not in PAYMENT_STATUSES:
        raise ValidationError(
            "payment_status", f"Invalid payment status. Must be one of: {', '.join(PAYMENT_STATUSES)}"
        )

    payment = db.get(Payment, payment_id)
    if payment is None:
        raise PaymentNotFound(payment_id)
    if payment.payment_status == requested:
        return payment

    previous = payment.payment_status
    try:
        payment.payment_status = requested
        if requested == SUCCESS:
            _confirm_if_pending(payment.order)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Status change for payment #%d could not be committed", payment_id)
        raise StorageFailure("Payment status could not be saved") from exc

    db.refresh(payment)
    logger.info("Payment #%d status: %s -> %s", payment.id, previous, requested)
    return payment


def get_payment_for_order(db: Session, order_id: int, user_id: Optional[int] = None) -> Payment:
    """The latest payment recorded for an order."""
    order = _owned_order(db, order_id, user_id)
    if not order.payments:
        raise PaymentNotFound(f"for order {order_id}")
    return order.payments[-1]


def get_payment_by_transaction(db: Session, transaction_id: str) -> Payment:
    payment = db.query(Payment).filter(Payment.transaction_id == transaction_id).first()
    if payment is None:
        raise PaymentNotFound(transaction_id)
    return payment
