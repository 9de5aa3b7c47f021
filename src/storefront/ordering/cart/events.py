"""Domain events for the Cart aggregate."""

from protean.fields import Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Cart")
class CartItemAdded:
    __version__ = 1

    cart_id: Identifier(required=True)
    user_id: Identifier(required=True)
    item_id: Identifier(required=True)
    product_id: Identifier(required=True)
    size: String(required=True)
    quantity: Integer(required=True)


@storefront.event(part_of="Cart")
class CartItemQuantityUpdated:
    __version__ = 1

    cart_id: Identifier(required=True)
    item_id: Identifier(required=True)
    previous_quantity: Integer(required=True)
    new_quantity: Integer(required=True)


@storefront.event(part_of="Cart")
class CartItemRemoved:
    __version__ = 1

    cart_id: Identifier(required=True)
    item_id: Identifier(required=True)


@storefront.event(part_of="Cart")
class CartCleared:
    """Every line was removed, either on request or after checkout."""

    __version__ = 1

    cart_id: Identifier(required=True)
    user_id: Identifier(required=True)
