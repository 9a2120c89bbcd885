"""
Price calculation utilities.

Used by both the cart summary and checkout so a customer always sees the same
numbers they will be charged. All arithmetic is done on Decimal; each
component is rounded to cents before the total is summed, which keeps
`total == subtotal + delivery_fee + tax` exact.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional, Tuple, Union

from .. import config

CENT = Decimal("0.01")

Number = Union[Decimal, int, float, str]


def to_decimal(amount: Number) -> Decimal:
    """Convert a number to Decimal without inheriting binary float error."""
    if isinstance(amount, Decimal):
        return amount
    if isinstance(amount, float):
        return Decimal(repr(amount))
    return Decimal(amount)


def round_money(amount: Number) -> Decimal:
    """Round to 2 decimal places for currency (half up)."""
    return to_decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)


def line_subtotal(unit_price: Number, quantity: int) -> Decimal:
    return round_money(to_decimal(unit_price) * quantity)


@dataclass(frozen=True)
class PriceBreakdown:
    """Monetary breakdown of an order or cart."""

    subtotal: Decimal
    delivery_fee: Decimal
    tax: Decimal

    @property
    def total(self) -> Decimal:
        return self.subtotal + self.delivery_fee + self.tax

    def as_dict(self) -> dict:
        return {
            "subtotal": float(self.subtotal),
            "deliveryFee": float(self.delivery_fee),
            "tax": float(self.tax),
            "total": float(self.total),
        }


def calculate_delivery_fee(
    subtotal: Decimal,
    threshold: Optional[Decimal] = None,
    fee: Optional[Decimal] = None,
) -> Decimal:
    """Delivery is free at or above the threshold, flat fee below it."""
    threshold = config.FREE_DELIVERY_THRESHOLD if threshold is None else threshold
    fee = config.DELIVERY_FEE if fee is None else fee
    if subtotal >= threshold:
        return round_money(0)
    return round_money(fee)


def calculate_tax(subtotal: Decimal, rate: Optional[Decimal] = None) -> Decimal:
    rate = config.TAX_RATE if rate is None else to_decimal(rate)
    return round_money(subtotal * rate)


def calculate_order_total(lines: Iterable[Tuple[Number, int]]) -> PriceBreakdown:
    """
    Calculate the full breakdown for (unit_price, quantity) pairs.

    Args:
        lines: Iterable of (unit_price, quantity). Prices must come from the
               menu catalog, never from the client.

    Returns:
        PriceBreakdown with subtotal, delivery_fee and tax rounded to cents
    """
    subtotal = round_money(sum((line_subtotal(price, qty) for price, qty in lines), Decimal("0")))
    return PriceBreakdown(
        subtotal=subtotal,
        delivery_fee=calculate_delivery_fee(subtotal),
        tax=calculate_tax(subtotal),
    )
