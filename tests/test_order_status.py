"""Tests for the order lifecycle: admin status changes and customer cancellation."""
import pytest

from bella_cucina.errors import OrderNotFound, OrderStatusError, ValidationError
from bella_cucina.models import Order
from bella_cucina.schemas.orders import CheckoutRequest
from bella_cucina.services.order import (
    CANCELLED,
    OUT_FOR_DELIVERY,
    OrderTransaction,
    cancel_order,
    check_status_transition,
    normalize_status,
    update_order_status,
)


OWNER_ID = 7


@pytest.fixture
def order_id(db_session, checkout_payload):
    result = OrderTransaction(db_session).place_order(
        CheckoutRequest.model_validate(checkout_payload()), user_id=OWNER_ID
    )
    return result.order_id


class TestNormalizeStatus:
    def test_known_status(self):
        assert normalize_status("Preparing") == "preparing"

    def test_alias(self):
        assert normalize_status("on_the_way") == OUT_FOR_DELIVERY

    @pytest.mark.parametrize("value", [None, "", "shipped"])
    def test_unknown(self, value):
        assert normalize_status(value) is None


class TestTransitionRules:
    def test_pending_can_be_cancelled(self):
        check_status_transition("pending", CANCELLED)

    @pytest.mark.parametrize("current", ["confirmed", "preparing", "out_for_delivery", "delivered"])
    def test_only_pending_can_be_cancelled(self, current):
        with pytest.raises(OrderStatusError):
            check_status_transition(current, CANCELLED)

    def test_cancelled_is_terminal(self):
        with pytest.raises(OrderStatusError):
            check_status_transition(CANCELLED, "pending")

    def test_admin_may_skip_steps(self):
        check_status_transition("pending", "delivered")
        check_status_transition("delivered", "preparing")

    def test_same_status_is_allowed(self):
        check_status_transition(CANCELLED, CANCELLED)


class TestUpdateOrderStatus:
    def test_walks_the_lifecycle(self, db_session, order_id):
        for status in ["confirmed", "preparing", "on_the_way", "delivered"]:
            update_order_status(db_session, order_id, status)

        assert db_session.get(Order, order_id).status == "delivered"

    def test_alias_is_stored_canonically(self, db_session, order_id):
        order = update_order_status(db_session, order_id, "on_the_way")
        assert order.status == OUT_FOR_DELIVERY

    def test_invalid_status(self, db_session, order_id):
        with pytest.raises(ValidationError) as exc_info:
            update_order_status(db_session, order_id, "shipped")
        assert exc_info.value.field == "status"

    def test_unknown_order(self, db_session):
        with pytest.raises(OrderNotFound):
            update_order_status(db_session, 9999, "confirmed")

    def test_admin_cannot_cancel_after_pending(self, db_session, order_id):
        update_order_status(db_session, order_id, "preparing")

        with pytest.raises(OrderStatusError) as exc_info:
            update_order_status(db_session, order_id, "cancelled")

        assert exc_info.value.current == "preparing"
        assert db_session.get(Order, order_id).status == "preparing"

    def test_cancelled_order_stays_cancelled(self, db_session, order_id):
        update_order_status(db_session, order_id, "cancelled")

        with pytest.raises(OrderStatusError):
            update_order_status(db_session, order_id, "confirmed")
        assert db_session.get(Order, order_id).status == CANCELLED


class TestCancelOrder:
    def test_owner_cancels_pending_order(self, db_session, order_id):
        order = cancel_order(db_session, order_id, OWNER_ID)
        assert order.status == CANCELLED

    def test_cancel_twice_is_a_no_op(self, db_session, order_id):
        cancel_order(db_session, order_id, OWNER_ID)
        assert cancel_order(db_session, order_id, OWNER_ID).status == CANCELLED

    def test_cannot_cancel_once_preparing(self, db_session, order_id):
        update_order_status(db_session, order_id, "preparing")

        with pytest.raises(OrderStatusError):
            cancel_order(db_session, order_id, OWNER_ID)
        assert db_session.get(Order, order_id).status == "preparing"

    def test_other_customer_gets_not_found(self, db_session, order_id):
        with pytest.raises(OrderNotFound):
            cancel_order(db_session, order_id, OWNER_ID + 1)
        assert db_session.get(Order, order_id).status == "pending"

    def test_guest_order_cannot_be_cancelled_by_customer(self, db_session, checkout_payload):
        result = OrderTransaction(db_session).place_order(
            CheckoutRequest.model_validate(checkout_payload())
        )
        with pytest.raises(OrderNotFound):
            cancel_order(db_session, result.order_id, OWNER_ID)
