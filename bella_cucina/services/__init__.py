"""
Services Package for Bella Cucina
=================================

Business logic behind the HTTP routes. Services receive a SQLAlchemy session
rather than creating one, and none of the store classes commit on their own;
the checkout transaction and the route handlers decide when to commit.

Available Services:
-------------------
- **catalog**: MenuCatalog, read-only menu lookups
- **cart**: CartStore, per-user or per-guest-session cart lines
- **order_store**: OrderStore, order header and item persistence
- **order**: OrderTransaction (checkout) and order status changes
- **payment**: Payment recording; a successful payment confirms the order
- **pricing**: Decimal money rounding and order totals

Usage:
------
    from bella_cucina.services.order import OrderTransaction

    result = OrderTransaction(db).place_order(request, user_id=42)
"""

from . import catalog
from . import cart
from . import order_store
from . import order
from . import payment
from . import pricing

__all__ = ["catalog", "cart", "order_store", "order", "payment", "pricing"]
