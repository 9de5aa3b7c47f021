"""Storefront error taxonomy.

Field-level problems are raised as Protean ``ValidationError`` and repository
misses as ``ObjectNotFoundError``; both are mapped to HTTP responses by
``protean.integrations.fastapi``. The errors below carry storefront-specific
meaning and each declares the HTTP status it maps to at the API boundary.
"""


class StorefrontError(Exception):
    """Base class for storefront errors surfaced to API callers."""

    status_code = 500

    def __init__(self, message: str, **context):
        super().__init__(message)
        self.message = message
        self.context = context

    def to_dict(self) -> dict:
        return {"error": self.message, **self.context}


class NotFound(StorefrontError):
    status_code = 404


class Unauthorized(StorefrontError):
    status_code = 401


class Forbidden(StorefrontError):
    status_code = 403


class StockExceeded(StorefrontError):
    """Requested quantity is beyond what is available for a product size."""

    status_code = 400

    def __init__(self, size: str, available: int, in_cart: int = 0):
        if in_cart > 0:
            message = (
                f"Only {available} items available in stock for size {size}. "
                f"You already have {in_cart} in your cart."
            )
        else:
            message = f"Only {available} items available in stock for size {size}"
        super().__init__(message, size=size, available=available, in_cart=in_cart)
        self.size = size
        self.available = available
        self.in_cart = in_cart


class DuplicateName(StorefrontError):
    status_code = 400


class DuplicateReview(StorefrontError):
    status_code = 400


class InvalidEligibility(StorefrontError):
    """The referenced order does not allow reviewing the product."""

    status_code = 400
