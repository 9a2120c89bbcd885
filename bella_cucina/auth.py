"""
Authentication Module for Bella Cucina
======================================

Identity dependencies for the ordering API.

Authentication Methods:
-----------------------
1. **HTTP Basic Auth (Admin)**: Used for all admin endpoints, including order
   status changes. Credentials are configured via environment variables
   (ADMIN_USERNAME, ADMIN_PASSWORD) and compared in constant time.

2. **Customer Identity**: Customers sign in through the storefront's auth
   service, which is not part of this API. Its gateway forwards the signed-in
   customer's id in the X-User-Id header. Requests without it are guests.

3. **Guest Sessions**: Anonymous shoppers keep a cart under the session id
   the storefront generates and sends in the X-Session-Id header.

Usage:
------
    from bella_cucina.auth import get_current_user_id, verify_admin_credentials

    @router.post("/orders")
    def create_order(
        user_id: Optional[int] = Depends(get_current_user_id),
        db: Session = Depends(get_db),
    ):
        ...

The admin dependency will:
- Return 503 if ADMIN_PASSWORD is not configured
- Return 401 with WWW-Authenticate header if credentials are invalid
- Return the username string if authentication succeeds
"""

import secrets
from typing import Optional

from fastapi import Depends, Header, HTTPException, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from . import config
from .services.cart import CartOwner


# =============================================================================
# HTTP Basic Auth Setup
# =============================================================================
# The realm is shared across all admin routes so browsers cache credentials.

security = HTTPBasic(realm="Bella Cucina Admin")


def verify_admin_credentials(
    credentials: HTTPBasicCredentials = Depends(security),
) -> str:
    """
    Verify HTTP Basic Auth credentials for admin endpoints.

    Raises:
        HTTPException (503): If ADMIN_PASSWORD is not set.
        HTTPException (401): If credentials are invalid.
    """
    # Fail closed: if password not configured, deny all access
    if not config.ADMIN_PASSWORD:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Admin authentication not configured. Set ADMIN_PASSWORD environment variable.",
        )

    username_correct = secrets.compare_digest(
        credentials.username.encode("utf-8"),
        config.ADMIN_USERNAME.encode("utf-8"),
    )
    password_correct = secrets.compare_digest(
        credentials.password.encode("utf-8"),
        config.ADMIN_PASSWORD.encode("utf-8"),
    )

    if not (username_correct and password_correct):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid admin credentials",
            headers={"WWW-Authenticate": "Basic"},
        )

    return credentials.username


# =============================================================================
# Customer Identity
# =============================================================================

def get_current_user_id(
    x_user_id: Optional[str] = Header(default=None),
) -> Optional[int]:
    """The signed-in customer's id, or None for guests."""
    if x_user_id is None or not x_user_id.strip():
        return None
    try:
        user_id = int(x_user_id)
    except ValueError:
        user_id = 0
    if user_id < 1:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid X-User-Id header",
        )
    return user_id


def require_user_id(
    user_id: Optional[int] = Depends(get_current_user_id),
) -> int:
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Sign in required",
        )
    return user_id


def get_cart_owner(
    user_id: Optional[int] = Depends(get_current_user_id),
    x_session_id: Optional[str] = Header(default=None),
) -> CartOwner:
    """Signed-in user's cart, else the guest session's cart."""
    if user_id is not None:
        return CartOwner(user_id=user_id)
    session_id = (x_session_id or "").strip()
    if not session_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="X-User-Id or X-Session-Id header is required",
        )
    return CartOwner(session_id=session_id)
