"""Storefront FastAPI application.

Every request runs inside the storefront domain context and carries the
caller's id and role in its log context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from storefront.domain import storefront
from storefront.utils.logging import bind_request_context, clear_request_context, configure_logging

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# Initialized at module level so uvicorn workers share it.
# PROTEAN_ENV selects the config overlay from domain.toml.
configure_logging()
storefront.init()

logger = structlog.get_logger(__name__)

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Storefront API",
    description="Catalogue, cart, orders, reviews and notifications",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the storefront domain context and request log context."""
    bind_request_context(
        path=request.url.path,
        method=request.method,
        user_id=request.headers.get("x-user-id"),
        role=request.headers.get("x-user-role"),
    )
    try:
        with storefront.domain_context():
            response = await call_next(request)
        logger.debug("request_completed", status_code=response.status_code)
        return response
    finally:
        clear_request_context()


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from storefront.api.errors import register_error_handlers  # noqa: E402
from storefront.catalogue.api import (  # noqa: E402
    category_router,
    collection_router,
    likes_router,
    product_router,
    subcategory_router,
)
from storefront.notifications.api import router as notification_router  # noqa: E402
from storefront.ordering.api import cart_router, order_router  # noqa: E402
from storefront.reviews.api import router as review_router  # noqa: E402

register_error_handlers(app)

app.include_router(product_router)
app.include_router(likes_router)
app.include_router(category_router)
app.include_router(subcategory_router)
app.include_router(collection_router)
app.include_router(cart_router)
app.include_router(order_router)
app.include_router(review_router)
app.include_router(notification_router)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domain": storefront.name})
