"""
Configuration Module for Bella Cucina
=====================================

This module centralizes all configuration settings, environment variables, and
constants used throughout the ordering API. All values are read once at import
time, parsed into their proper types, and exposed as module-level constants.

Configuration Categories:
-------------------------
- **Database**: Connection URL and the busy timeout that bounds how long a
  checkout waits for the SQLite write lock.

- **Pricing**: Delivery fee, free-delivery threshold, tax rate and minimum
  order amount. Money values are parsed into Decimal so that totals never
  pick up floating point drift.

- **Order Policy**: Initial status of new orders, the per-line quantity cap,
  and order number generation settings.

- **Payments**: Methods that are collected on delivery and the transaction id
  prefix.

- **Rate Limiting**: Throttling for the checkout endpoint.

- **CORS Settings**: Cross-Origin Resource Sharing configuration for the
  static frontend.

- **Admin Authentication**: HTTP Basic credentials for admin endpoints.

Environment Variables:
----------------------
- DATABASE_URL: SQLAlchemy URL (default: "sqlite:///./bella_cucina.db")
- DB_TIMEOUT_SECONDS: SQLite busy timeout (default: 5)
- FREE_DELIVERY_THRESHOLD: Subtotal that waives delivery (default: "30.00")
- DELIVERY_FEE: Fee charged below the threshold (default: "5.00")
- TAX_RATE: Sales tax rate applied to the subtotal (default: "0.0875")
- MINIMUM_ORDER: Minimum subtotal for checkout (default: "0.00", disabled)
- ORDER_INITIAL_STATUS: "pending" or "confirmed" (default: "pending")
- MAX_ITEM_QUANTITY: Largest quantity allowed on one order or cart line (default: 99)
- ORDER_NUMBER_PREFIX: Prefix for order numbers (default: "BC")
- ORDER_NUMBER_MAX_ATTEMPTS: Collision retries (default: 5)
- ESTIMATED_DELIVERY: Text returned after checkout (default: "30-45 minutes")
- DEFERRED_PAYMENT_METHODS: Comma-separated methods paid on delivery; their
  payments stay pending (default: "cash")
- TRANSACTION_ID_PREFIX: Prefix for payment transaction ids (default: "TXN")
- RATE_LIMIT_ORDERS: Checkout rate limit (default: "10 per minute")
- RATE_LIMIT_ENABLED: Enable/disable rate limiting (default: "true")
- CORS_ORIGINS: Comma-separated allowed origins (default: "*")
- ADMIN_USERNAME: Admin username (default: "admin")
- ADMIN_PASSWORD: Admin password (required for admin access)

Usage:
------
    from bella_cucina import config

    if subtotal >= config.FREE_DELIVERY_THRESHOLD:
        ...
"""

import os
from decimal import Decimal
from typing import List


# =============================================================================
# Database Configuration
# =============================================================================

DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./bella_cucina.db")

# How long a connection waits on a locked SQLite database before failing.
DB_TIMEOUT_SECONDS: float = float(os.getenv("DB_TIMEOUT_SECONDS", "5"))


# =============================================================================
# Pricing Configuration
# =============================================================================

FREE_DELIVERY_THRESHOLD: Decimal = Decimal(os.getenv("FREE_DELIVERY_THRESHOLD", "30.00"))
DELIVERY_FEE: Decimal = Decimal(os.getenv("DELIVERY_FEE", "5.00"))
TAX_RATE: Decimal = Decimal(os.getenv("TAX_RATE", "0.0875"))

# A zero minimum disables the check
MINIMUM_ORDER: Decimal = Decimal(os.getenv("MINIMUM_ORDER", "0.00"))


# =============================================================================
# Order Policy Configuration
# =============================================================================

PAYMENT_METHODS: List[str] = ["credit", "debit", "paypal", "cash"]

ORDER_INITIAL_STATUS: str = os.getenv("ORDER_INITIAL_STATUS", "pending").strip().lower()

MAX_ITEM_QUANTITY: int = int(os.getenv("MAX_ITEM_QUANTITY", "99"))

ORDER_NUMBER_PREFIX: str = os.getenv("ORDER_NUMBER_PREFIX", "BC")
ORDER_NUMBER_MAX_ATTEMPTS: int = int(os.getenv("ORDER_NUMBER_MAX_ATTEMPTS", "5"))

ESTIMATED_DELIVERY: str = os.getenv("ESTIMATED_DELIVERY", "30-45 minutes")


# =============================================================================
# Payment Configuration
# =============================================================================
# A successful payment confirms a pending order. Deferred methods are collected
# by the driver, so their payment is recorded as pending.

_deferred_env = os.getenv("DEFERRED_PAYMENT_METHODS", "cash")
DEFERRED_PAYMENT_METHODS: List[str] = [
    method.strip().lower()
    for method in _deferred_env.split(",")
    if method.strip()
]

TRANSACTION_ID_PREFIX: str = os.getenv("TRANSACTION_ID_PREFIX", "TXN")


# =============================================================================
# Rate Limiting Configuration
# =============================================================================
# Format: "X per Y" where Y is second, minute, hour, or day

RATE_LIMIT_ORDERS: str = os.getenv("RATE_LIMIT_ORDERS", "10 per minute")
RATE_LIMIT_ENABLED: bool = os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"


def get_rate_limit_orders() -> str:
    """Return the current checkout rate limit (allows dynamic override in tests)."""
    return RATE_LIMIT_ORDERS


# =============================================================================
# CORS Configuration
# =============================================================================

_cors_origins_env = os.getenv("CORS_ORIGINS", "")
CORS_ORIGINS: List[str] = [
    origin.strip()
    for origin in _cors_origins_env.split(",")
    if origin.strip()
] or ["*"]


# =============================================================================
# Admin Authentication Configuration
# =============================================================================
# ADMIN_PASSWORD must be set in production for admin access to work.

ADMIN_USERNAME: str = os.getenv("ADMIN_USERNAME", "admin")
ADMIN_PASSWORD: str = os.getenv("ADMIN_PASSWORD", "")
