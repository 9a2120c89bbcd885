"""
Translate order workflow errors into HTTP responses.

Route handlers let domain errors propagate; the handlers registered here give
every endpoint the same response shapes:

- ValidationError / request body errors -> 400 {"detail", "errors": [{"field", "message"}]}
- ItemUnavailable                       -> 404 {"detail", "menuItemId"}
- OrderNotFound                         -> 404 {"detail"}
- PaymentNotFound                       -> 404 {"detail"}
- OrderStatusError                      -> 409 {"detail", "currentStatus", "requestedStatus"}
- StorageFailure                        -> 500 {"detail"} (what failed to save; details are logged)
- OrderNumberExhausted                  -> 503 {"detail"}
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .errors import (
    ItemUnavailable,
    OrderNotFound,
    OrderNumberExhausted,
    OrderStatusError,
    PaymentNotFound,
    StorageFailure,
    ValidationError,
)


logger = logging.getLogger(__name__)


def _field_name(loc) -> str:
    parts = [str(part) for part in loc if part != "body"]
    name = ""
    for part in parts:
        if part.isdigit():
            name += f"[{part}]"
        else:
            name += f".{part}" if name else part
    return name or "body"


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {"field": _field_name(err.get("loc", ())), "message": err.get("msg", "Invalid value")}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Invalid request", "errors": errors},
    )


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": exc.message, "errors": [exc.to_dict()]},
    )


async def item_unavailable_handler(request: Request, exc: ItemUnavailable) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"detail": str(exc), "menuItemId": exc.menu_item_id},
    )


async def order_not_found_handler(request: Request, exc: OrderNotFound) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"detail": "Order not found"},
    )


async def payment_not_found_handler(request: Request, exc: PaymentNotFound) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"detail": "Payment not found"},
    )


async def order_status_handler(request: Request, exc: OrderStatusError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={
            "detail": exc.reason,
            "currentStatus": exc.current,
            "requestedStatus": exc.requested,
        },
    )


async def storage_failure_handler(request: Request, exc: StorageFailure) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": f"{exc}. Please try again."},
    )


async def order_number_exhausted_handler(request: Request, exc: OrderNumberExhausted) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "Orders cannot be accepted right now. Please try again shortly."},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(ItemUnavailable, item_unavailable_handler)
    app.add_exception_handler(OrderNotFound, order_not_found_handler)
    app.add_exception_handler(PaymentNotFound, payment_not_found_handler)
    app.add_exception_handler(OrderStatusError, order_status_handler)
    app.add_exception_handler(StorageFailure, storage_failure_handler)
    app.add_exception_handler(OrderNumberExhausted, order_number_exhausted_handler)
