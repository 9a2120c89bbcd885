# Load environment variables FIRST, before any module imports that need them
from dotenv import load_dotenv
load_dotenv()

import logging
import uuid
from contextlib import asynccontextmanager
from typing import Dict

from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.middleware.base import BaseHTTPMiddleware

from . import config
from . import db
from .exception_handlers import register_exception_handlers
from .logging_config import request_id_var, setup_logging
from .rate_limit import limiter
from .routes import ALL_ROUTERS

# Configure logging at module load time
setup_logging()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    db.init_db()
    logger.info("Bella Cucina API started")
    yield


app = FastAPI(
    title="Bella Cucina API",
    description="Menu, cart and ordering API for the Bella Cucina storefront",
    version="1.0.0",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "Health", "description": "Health check endpoints"},
        {"name": "Menu", "description": "Public menu browsing"},
        {"name": "Cart", "description": "Customer and guest carts"},
        {"name": "Orders", "description": "Checkout, tracking and status"},
        {"name": "Payments", "description": "Order payments"},
        {"name": "Admin - Menu", "description": "Admin endpoints for menu management"},
        {"name": "Admin - Orders", "description": "Admin endpoints for order management"},
    ],
)


# ---------- Request ID Middleware ----------
# Adds a unique request ID to each request for debugging and log correlation


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Middleware that adds a unique request ID to each request.
    The ID is available in request.state.request_id, stamped on every log line
    written while the request is handled, and returned in the X-Request-ID header.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id
        token = request_id_var.set(request_id)
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers["X-Request-ID"] = request_id
        return response


app.add_middleware(RequestIDMiddleware)

# Add rate limit exception handler
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

register_exception_handlers(app)

# In production, set CORS_ORIGINS to restrict allowed origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health", tags=["Health"])
def health() -> Dict[str, str]:
    """Health check endpoint. Returns ok if the service is running."""
    return {"status": "ok"}


# ---------- Routers ----------
# /api is what the storefront calls; root paths are kept for older clients

api_router = APIRouter(prefix="/api")
for router in ALL_ROUTERS:
    api_router.include_router(router)
app.include_router(api_router)

for router in ALL_ROUTERS:
    app.include_router(router)


def run(host: str = "0.0.0.0", port: int = 8000, reload: bool = False) -> None:
    """Run the API with uvicorn."""
    import uvicorn

    logger.info("Starting server on %s:%d", host, port)
    uvicorn.run("bella_cucina.main:app", host=host, port=port, reload=reload)
