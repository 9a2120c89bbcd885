"""Tests for order pricing: subtotal, delivery fee, tax and total."""
from decimal import Decimal

import pytest

import bella_cucina.config as config_mod
from bella_cucina.services.pricing import (
    PriceBreakdown,
    calculate_delivery_fee,
    calculate_order_total,
    calculate_tax,
    line_subtotal,
    round_money,
    to_decimal,
)


class TestOrderTotals:
    def test_free_delivery_above_threshold(self):
        breakdown = calculate_order_total([(Decimal("18.00"), 2)])

        assert breakdown.subtotal == Decimal("36.00")
        assert breakdown.delivery_fee == Decimal("0.00")
        assert breakdown.tax == Decimal("3.15")
        assert breakdown.total == Decimal("39.15")

    def test_delivery_fee_below_threshold(self):
        breakdown = calculate_order_total([(Decimal("12.00"), 1)])

        assert breakdown.subtotal == Decimal("12.00")
        assert breakdown.delivery_fee == Decimal("5.00")
        assert breakdown.tax == Decimal("1.05")
        assert breakdown.total == Decimal("18.05")

    def test_total_is_exact_sum_of_rounded_parts(self):
        breakdown = calculate_order_total([
            (Decimal("9.99"), 3),
            (Decimal("0.10"), 7),
            (Decimal("4.45"), 1),
        ])

        assert breakdown.subtotal == Decimal("35.12")
        assert breakdown.total == breakdown.subtotal + breakdown.delivery_fee + breakdown.tax
        assert breakdown.total.as_tuple().exponent == -2

    def test_float_prices_do_not_drift(self):
        breakdown = calculate_order_total([(0.1, 3)])
        assert breakdown.subtotal == Decimal("0.30")

    def test_as_dict_uses_storefront_keys(self):
        breakdown = PriceBreakdown(Decimal("12.00"), Decimal("5.00"), Decimal("1.05"))
        assert breakdown.as_dict() == {
            "subtotal": 12.0,
            "deliveryFee": 5.0,
            "tax": 1.05,
            "total": 18.05,
        }


class TestDeliveryFee:
    def test_threshold_is_inclusive(self):
        assert calculate_delivery_fee(Decimal("30.00")) == Decimal("0.00")

    def test_just_below_threshold(self):
        assert calculate_delivery_fee(Decimal("29.99")) == Decimal("5.00")

    def test_reads_config_at_call_time(self, monkeypatch):
        monkeypatch.setattr(config_mod, "FREE_DELIVERY_THRESHOLD", Decimal("50.00"))
        monkeypatch.setattr(config_mod, "DELIVERY_FEE", Decimal("3.50"))
        assert calculate_delivery_fee(Decimal("36.00")) == Decimal("3.50")


class TestTax:
    def test_half_cent_rounds_up(self):
        # 10.00 * 0.0875 = 0.875
        assert calculate_tax(Decimal("10.00")) == Decimal("0.88")

    def test_custom_rate(self):
        assert calculate_tax(Decimal("20.00"), rate="0.1") == Decimal("2.00")


@pytest.mark.parametrize("value,expected", [
    (Decimal("1.005"), Decimal("1.01")),
    (Decimal("1.004"), Decimal("1.00")),
    (2, Decimal("2.00")),
    ("3.335", Decimal("3.34")),
    (0.1, Decimal("0.10")),
])
def test_round_money(value, expected):
    assert round_money(value) == expected


def test_to_decimal_float_uses_repr():
    assert to_decimal(0.1) == Decimal("0.1")


def test_line_subtotal():
    assert line_subtotal(Decimal("18.00"), 2) == Decimal("36.00")
