"""Stock lookups the cart performs against the catalogue before mutating."""

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from storefront.catalogue.product.product import Product
from storefront.errors import NotFound


def load_product(product_id):
    try:
        return current_domain.repository_for(Product).get(product_id)
    except ObjectNotFoundError:
        raise NotFound("Product not found") from None


def available_stock(product, size):
    """Units on hand for ``size``; a size the product does not offer is invalid input."""
    entry = product.size_entry(size)
    if entry is None:
        raise ValidationError({"size": [f"Size {size} not available for this product"]})
    return entry.stock or 0


def stock_for_line(product_id, size):
    """Units on hand for an existing cart line, or None when nothing can be checked.

    A product removed from the catalogue, or a size it no longer offers,
    leaves the line editable without a stock limit.
    """
    try:
        product = current_domain.repository_for(Product).get(product_id)
    except ObjectNotFoundError:
        return None
    entry = product.size_entry(size)
    return None if entry is None else entry.stock or 0
