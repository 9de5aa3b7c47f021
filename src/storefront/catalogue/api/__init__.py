"""Catalogue API package."""

from storefront.catalogue.api.routes import (
    category_router,
    collection_router,
    likes_router,
    product_router,
    subcategory_router,
)

__all__ = ["product_router", "likes_router", "category_router", "subcategory_router", "collection_router"]
