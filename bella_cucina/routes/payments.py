"""
Payment Routes for Bella Cucina
===============================

Endpoints:
----------
- POST /payments: Pay for an order (confirms it when the payment succeeds)
- GET /payments/order/{order_id}: Latest payment for an order
- GET /payments/verify/{transaction_id}: Check a transaction
- PUT /payments/{id}/status: Admin status change (HTTP Basic Auth)

Orders placed by a signed-in customer can only be paid or looked up with
that customer's X-User-Id; guest orders need no header.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from .. import config
from ..auth import get_current_user_id, verify_admin_credentials
from ..db import get_db
from ..rate_limit import limiter
from ..schemas.payments import PaymentCreate, PaymentOut, PaymentStatusUpdate, PaymentVerifyOut
from ..services.payment import (
    SUCCESS,
    get_payment_by_transaction,
    get_payment_for_order,
    record_payment,
    update_payment_status,
)


logger = logging.getLogger(__name__)

payments_router = APIRouter(prefix="/payments", tags=["Payments"])


@payments_router.post("", response_model=PaymentOut, status_code=201)
@limiter.limit(config.get_rate_limit_orders)
def create_payment(
    request: Request,
    payload: PaymentCreate,
    user_id: Optional[int] = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> PaymentOut:
    payment = record_payment(
        db,
        payload.order_id,
        payload.payment_method,
        amount=payload.amount,
        card_last4=payload.card_last4,
        user_id=user_id,
    )
    return PaymentOut.model_validate(payment)


@payments_router.get("/order/{order_id}", response_model=PaymentOut)
def get_order_payment(
    order_id: int,
    user_id: Optional[int] = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> PaymentOut:
    return PaymentOut.model_validate(get_payment_for_order(db, order_id, user_id))


@payments_router.get("/verify/{transaction_id}", response_model=PaymentVerifyOut)
def verify_payment(transaction_id: str, db: Session = Depends(get_db)) -> PaymentVerifyOut:
    payment = get_payment_by_transaction(db, transaction_id.strip())
    return PaymentVerifyOut(
        verified=payment.payment_status == SUCCESS,
        payment=PaymentOut.model_validate(payment),
    )


@payments_router.put("/{payment_id}/status", response_model=PaymentOut)
def set_payment_status(
    payment_id: int,
    payload: PaymentStatusUpdate,
    db: Session = Depends(get_db),
    _admin: str = Depends(verify_admin_credentials),
) -> PaymentOut:
    payment = update_payment_status(db, payment_id, payload.payment_status)
    return PaymentOut.model_validate(payment)
