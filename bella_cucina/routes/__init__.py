"""
Routes Package for Bella Cucina
===============================

API route definitions organized by domain. Each module defines a FastAPI
APIRouter with related endpoints grouped together.

Customer-Facing Routes:
-----------------------
- menu.py: Menu browsing
- cart.py: Server-side cart for signed-in customers and guest sessions
- orders.py: Checkout, order lookup, tracking, cancellation, admin status
- payments.py: Paying for orders, payment lookup and verification

Admin Routes (HTTP Basic Auth):
-------------------------------
- admin_menu.py: Menu item CRUD
- admin_orders.py: Order listing and details

Router Registration:
--------------------
All routers are registered in main.py under two prefixes:
1. /api/* - The path the storefront calls
2. /* - Root paths

Error Handling:
---------------
Routes raise HTTPException for request-level problems and let order errors
(bella_cucina.errors) propagate to the handlers in exception_handlers.py:
- 400: Validation errors
- 401: Missing or invalid credentials
- 404: Unknown order, payment, menu item or cart line
- 409: Status change not allowed
- 429: Too many requests (rate limited)
- 500: Order could not be saved
- 503: No free order number, or admin auth not configured
"""

from .menu import menu_router
from .cart import cart_router
from .orders import orders_router
from .payments import payments_router
from .admin_menu import admin_menu_router
from .admin_orders import admin_orders_router

ALL_ROUTERS = [
    menu_router,
    cart_router,
    orders_router,
    payments_router,
    admin_menu_router,
    admin_orders_router,
]

__all__ = [
    "menu_router",
    "cart_router",
    "orders_router",
    "payments_router",
    "admin_menu_router",
    "admin_orders_router",
    "ALL_ROUTERS",
]
