"""
Tests for payments (services/payment.py and the /payments routes).

A successful payment confirms a pending order in the same commit; cash is
collected on delivery and stays pending until an admin marks it paid.
"""
from decimal import Decimal

import pytest
from sqlalchemy.exc import OperationalError

import bella_cucina.config as config_mod
from bella_cucina.errors import OrderNotFound, OrderStatusError, StorageFailure, ValidationError
from bella_cucina.models import Order, Payment
from bella_cucina.schemas.orders import CheckoutRequest
from bella_cucina.services.order import OrderTransaction, update_order_status
from bella_cucina.services.payment import (
    generate_transaction_id,
    get_payment_for_order,
    record_payment,
    update_payment_status,
)


USER = {"X-User-Id": "7"}
OTHER_USER = {"X-User-Id": "8"}


def _order(db_session, checkout_payload, user_id=None, **kwargs):
    request = CheckoutRequest.model_validate(checkout_payload(**kwargs))
    result = OrderTransaction(db_session).place_order(request, user_id=user_id)
    return result.order_id


def _place(client, payload, headers=None):
    resp = client.post("/orders", json=payload, headers=headers or {})
    assert resp.status_code == 201, resp.text
    return resp.json()


def _pay(client, order_id, method="credit", headers=None, **extra):
    body = {"order_id": order_id, "payment_method": method, **extra}
    return client.post("/payments", json=body, headers=headers or {})


class TestRecordPayment:
    def test_card_payment_confirms_order(self, db_session, checkout_payload):
        order_id = _order(db_session, checkout_payload)

        payment = record_payment(db_session, order_id, "credit", card_last4="4242")

        assert payment.payment_status == "success"
        assert payment.amount == Decimal("39.15")
        assert payment.card_last4 == "4242"
        assert payment.transaction_id.startswith("TXN")
        assert db_session.get(Order, order_id).status == "confirmed"

    def test_cash_stays_pending(self, db_session, checkout_payload):
        order_id = _order(db_session, checkout_payload)

        payment = record_payment(db_session, order_id, "cash")

        assert payment.payment_status == "pending"
        assert db_session.get(Order, order_id).status == "pending"

    def test_deferred_methods_are_configurable(self, db_session, checkout_payload, monkeypatch):
        monkeypatch.setattr(config_mod, "DEFERRED_PAYMENT_METHODS", ["cash", "paypal"])
        order_id = _order(db_session, checkout_payload)

        assert record_payment(db_session, order_id, "paypal").payment_status == "pending"

    def test_explicit_amount_must_match_total(self, db_session, checkout_payload):
        order_id = _order(db_session, checkout_payload)

        with pytest.raises(ValidationError) as exc:
            record_payment(db_session, order_id, "credit", amount=Decimal("10.00"))

        assert exc.value.field == "amount"
        assert db_session.query(Payment).count() == 0

    def test_matching_amount_is_accepted(self, db_session, checkout_payload):
        order_id = _order(db_session, checkout_payload)
        payment = record_payment(db_session, order_id, "debit", amount=Decimal("39.150"))
        assert payment.amount == Decimal("39.15")

    @pytest.mark.parametrize("method", ["", "bitcoin", None])
    def test_unknown_method(self, db_session, checkout_payload, method):
        order_id = _order(db_session, checkout_payload)

        with pytest.raises(ValidationError) as exc:
            record_payment(db_session, order_id, method)

        assert exc.value.field == "payment_method"

    def test_bad_card_digits(self, db_session, checkout_payload):
        order_id = _order(db_session, checkout_payload)
        with pytest.raises(ValidationError):
            record_payment(db_session, order_id, "credit", card_last4="42a2")

    def test_unknown_order(self, db_session):
        with pytest.raises(OrderNotFound):
            record_payment(db_session, 999, "credit")

    def test_other_customers_order(self, db_session, checkout_payload):
        order_id = _order(db_session, checkout_payload, user_id=7)
        with pytest.raises(OrderNotFound):
            record_payment(db_session, order_id, "credit", user_id=8)

    def test_cancelled_order_cannot_be_paid(self, db_session, checkout_payload):
        order_id = _order(db_session, checkout_payload)
        update_order_status(db_session, order_id, "cancelled")

        with pytest.raises(OrderStatusError):
            record_payment(db_session, order_id, "credit")

        assert db_session.query(Payment).count() == 0

    def test_paid_order_cannot_be_paid_again(self, db_session, checkout_payload):
        order_id = _order(db_session, checkout_payload)
        record_payment(db_session, order_id, "credit")

        with pytest.raises(OrderStatusError):
            record_payment(db_session, order_id, "debit")

        assert db_session.query(Payment).count() == 1

    def test_failed_commit_saves_nothing(self, db_session, checkout_payload):
        order_id = _order(db_session, checkout_payload)

        def failing_commit():
            raise OperationalError("COMMIT", {}, Exception("database is locked"))

        db_session.commit = failing_commit
        with pytest.raises(StorageFailure) as exc:
            record_payment(db_session, order_id, "credit")

        assert str(exc.value) == "Payment could not be saved"
        assert db_session.query(Payment).count() == 0
        assert db_session.get(Order, order_id).status == "pending"


class TestPaymentStatus:
    def test_success_confirms_pending_order(self, db_session, checkout_payload):
        order_id = _order(db_session, checkout_payload)
        payment = record_payment(db_session, order_id, "cash")

        update_payment_status(db_session, payment.id, "Success")

        assert payment.payment_status == "success"
        assert db_session.get(Order, order_id).status == "confirmed"

    def test_refund_leaves_order_status(self, db_session, checkout_payload):
        order_id = _order(db_session, checkout_payload)
        payment = record_payment(db_session, order_id, "credit")
        update_order_status(db_session, order_id, "delivered")

        update_payment_status(db_session, payment.id, "refunded")

        assert payment.payment_status == "refunded"
        assert db_session.get(Order, order_id).status == "delivered"

    def test_latest_payment_is_returned(self, db_session, checkout_payload):
        order_id = _order(db_session, checkout_payload)
        first = record_payment(db_session, order_id, "cash")
        update_payment_status(db_session, first.id, "failed")
        second = record_payment(db_session, order_id, "credit")

        assert get_payment_for_order(db_session, order_id).id == second.id


def test_transaction_id_format(monkeypatch):
    monkeypatch.setattr(config_mod, "TRANSACTION_ID_PREFIX", "BCP")

    txn = generate_transaction_id()

    assert txn.startswith("BCP")
    assert txn[3:].isdigit()
    assert generate_transaction_id(prefix="").isdigit()


class TestPaymentApi:
    def test_card_payment_confirms_order(self, client, checkout_payload):
        placed = _place(client, checkout_payload())

        resp = _pay(client, placed["orderId"], cardLast4="4242")

        assert resp.status_code == 201
        data = resp.json()
        assert data["order_id"] == placed["orderId"]
        assert data["amount"] == 39.15
        assert data["payment_status"] == "success"
        assert data["card_last4"] == "4242"
        assert data["payment_date"]
        tracked = client.get(f"/orders/track/{placed['orderNumber']}").json()
        assert tracked["status"] == "confirmed"

    def test_cash_payment_leaves_order_pending(self, client, checkout_payload):
        placed = _place(client, checkout_payload(paymentMethod="cash"))

        resp = _pay(client, placed["orderId"], method="cash")

        assert resp.status_code == 201
        assert resp.json()["payment_status"] == "pending"
        assert client.get(f"/orders/track/{placed['orderNumber']}").json()["status"] == "pending"

    def test_camel_case_body(self, client, checkout_payload):
        placed = _place(client, checkout_payload())
        resp = client.post("/payments", json={"orderId": placed["orderId"], "paymentMethod": "paypal"})
        assert resp.status_code == 201

    def test_amount_mismatch(self, client, checkout_payload):
        placed = _place(client, checkout_payload())

        resp = _pay(client, placed["orderId"], amount="1.00")

        assert resp.status_code == 400
        assert resp.json()["errors"][0]["field"] == "amount"

    def test_full_card_number_rejected(self, client, checkout_payload):
        placed = _place(client, checkout_payload())
        resp = _pay(client, placed["orderId"], card_last4="4242424242424242")
        assert resp.status_code == 400

    def test_double_payment_conflict(self, client, checkout_payload):
        placed = _place(client, checkout_payload())
        assert _pay(client, placed["orderId"]).status_code == 201

        assert _pay(client, placed["orderId"]).status_code == 409

    def test_cancelled_order_conflict(self, client, checkout_payload, admin_auth):
        placed = _place(client, checkout_payload())
        client.put(f"/orders/{placed['orderId']}/status", json={"status": "cancelled"}, auth=admin_auth)

        assert _pay(client, placed["orderId"]).status_code == 409

    def test_other_customers_order_is_not_found(self, client, checkout_payload):
        placed = _place(client, checkout_payload(), headers=USER)

        assert _pay(client, placed["orderId"], headers=OTHER_USER).status_code == 404
        assert _pay(client, placed["orderId"]).status_code == 404
        assert _pay(client, placed["orderId"], headers=USER).status_code == 201

    def test_unknown_order(self, client):
        resp = _pay(client, 999)
        assert resp.status_code == 404
        assert resp.json()["detail"] == "Order not found"

    def test_get_order_payment(self, client, checkout_payload):
        placed = _place(client, checkout_payload(), headers=USER)
        paid = _pay(client, placed["orderId"], headers=USER).json()

        resp = client.get(f"/payments/order/{placed['orderId']}", headers=USER)

        assert resp.status_code == 200
        assert resp.json()["transaction_id"] == paid["transaction_id"]
        assert client.get(f"/payments/order/{placed['orderId']}", headers=OTHER_USER).status_code == 404

    def test_unpaid_order_has_no_payment(self, client, checkout_payload):
        placed = _place(client, checkout_payload())

        resp = client.get(f"/payments/order/{placed['orderId']}")

        assert resp.status_code == 404
        assert resp.json()["detail"] == "Payment not found"

    def test_verify(self, client, checkout_payload):
        card = _pay(client, _place(client, checkout_payload())["orderId"]).json()
        cash = _pay(client, _place(client, checkout_payload())["orderId"], method="cash").json()

        verified = client.get(f"/payments/verify/{card['transaction_id']}").json()
        unverified = client.get(f"/payments/verify/{cash['transaction_id']}").json()

        assert verified["verified"] is True
        assert verified["payment"]["id"] == card["id"]
        assert unverified["verified"] is False

    def test_verify_unknown_transaction(self, client):
        assert client.get("/payments/verify/TXN000").status_code == 404

    def test_mounted_under_api_prefix(self, client, checkout_payload):
        placed = _place(client, checkout_payload())
        resp = client.post("/api/payments", json={"order_id": placed["orderId"], "payment_method": "credit"})
        assert resp.status_code == 201


class TestPaymentStatusApi:
    def test_admin_marks_cash_paid(self, client, checkout_payload, admin_auth):
        placed = _place(client, checkout_payload(paymentMethod="cash"))
        payment = _pay(client, placed["orderId"], method="cash").json()

        resp = client.put(f"/payments/{payment['id']}/status", json={"status": "success"}, auth=admin_auth)

        assert resp.status_code == 200
        assert resp.json()["payment_status"] == "success"
        assert client.get(f"/orders/track/{placed['orderNumber']}").json()["status"] == "confirmed"

    def test_unknown_status(self, client, checkout_payload, admin_auth):
        payment = _pay(client, _place(client, checkout_payload())["orderId"]).json()

        resp = client.put(f"/payments/{payment['id']}/status", json={"payment_status": "paid"}, auth=admin_auth)

        assert resp.status_code == 400
        assert resp.json()["errors"][0]["field"] == "payment_status"

    def test_unknown_payment(self, client, admin_auth):
        resp = client.put("/payments/999/status", json={"status": "success"}, auth=admin_auth)
        assert resp.status_code == 404

    def test_requires_admin(self, client, checkout_payload):
        payment = _pay(client, _place(client, checkout_payload())["orderId"]).json()

        resp = client.put(f"/payments/{payment['id']}/status", json={"status": "refunded"})

        assert resp.status_code == 401
