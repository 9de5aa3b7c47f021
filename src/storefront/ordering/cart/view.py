"""Cart contents as returned to the shopper."""

from protean.utils.globals import current_domain

from storefront.catalogue.queries import find_product, product_summary
from storefront.ordering.cart.cart import Cart

EMPTY_CART = {"items": [], "total": 0, "item_count": 0}


def cart_contents(user_id):
    """Items with product data resolved, plus total and item count.

    A user without a cart gets the empty shape rather than an error.
    """
    cart = current_domain.repository_for(Cart).for_user(user_id)
    if cart is None:
        return dict(EMPTY_CART, items=[])

    items = [
        {
            "id": str(item.id),
            "product": product_summary(find_product(item.product_id)),
            "product_id": str(item.product_id),
            "size": item.size,
            "color": {"name": item.color_name, "hex": item.color_hex},
            "quantity": item.quantity,
            "price": item.price,
        }
        for item in cart.items
    ]
    return {
        "id": str(cart.id),
        "items": items,
        "total": cart.total,
        "item_count": cart.item_count,
    }
