"""
Payment Schemas for Bella Cucina
================================

Endpoint Coverage:
------------------
- POST /payments: PaymentCreate -> PaymentOut
- GET /payments/order/{order_id}: PaymentOut
- GET /payments/verify/{transaction_id}: PaymentVerifyOut
- PUT /payments/{id}/status: PaymentStatusUpdate -> PaymentOut

Request fields use the snake_case names the payment form sends; camelCase
names are accepted as well.
"""

from decimal import Decimal
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class PaymentCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    order_id: int = Field(validation_alias=AliasChoices("order_id", "orderId"))
    payment_method: str = Field(validation_alias=AliasChoices("payment_method", "paymentMethod"))
    # Defaults to the order total
    amount: Optional[Decimal] = Field(default=None, ge=0)
    card_last4: Optional[str] = Field(
        default=None,
        pattern=r"^\d{4}$",
        validation_alias=AliasChoices("card_last4", "cardLast4"),
    )


class PaymentStatusUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    payment_status: str = Field(validation_alias=AliasChoices("payment_status", "status"))


class PaymentOut(BaseModel):
    """
    Response model for a payment.

    card_last4 is only ever the last four digits; full card numbers are never
    sent to this API.
    """
    model_config = ConfigDict(from_attributes=True)

    id: int
    order_id: int
    amount: float
    payment_method: str
    payment_status: str
    transaction_id: str
    card_last4: Optional[str] = None
    payment_date: Optional[str] = None

    @field_validator("amount", mode="before")
    @classmethod
    def decimal_to_float(cls, v):
        if isinstance(v, Decimal):
            return float(v)
        return v

    @field_validator("payment_date", mode="before")
    @classmethod
    def format_timestamp(cls, v):
        if v is None or isinstance(v, str):
            return v
        if v.tzinfo is None:
            return v.isoformat() + "Z"
        return v.isoformat()


class PaymentVerifyOut(BaseModel):
    verified: bool
    payment: PaymentOut
