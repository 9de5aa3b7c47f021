"""Cart aggregate — one per user, created on first add and emptied at checkout.

Stock is checked inside the aggregate methods: callers pass in the units
available for the line's product and size, and the method refuses a quantity
beyond that before touching any line. The cart is never deleted.
"""

from datetime import UTC, datetime

from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from storefront.domain import storefront
from storefront.errors import NotFound, StockExceeded
from storefront.ordering.cart.events import (
    CartCleared,
    CartItemAdded,
    CartItemQuantityUpdated,
    CartItemRemoved,
)


@storefront.entity(part_of="Cart")
class CartItem:
    product_id = Identifier(required=True)
    size = String(required=True, max_length=10)
    color_name = String(max_length=100)
    color_hex = String(max_length=20)
    quantity = Integer(required=True, min_value=1)
    price = Float(required=True, min_value=0.0)

    @property
    def line_total(self):
        return self.price * self.quantity


@storefront.aggregate
class Cart:
    user_id = Identifier(required=True, unique=True)
    items = HasMany(CartItem)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, user_id):
        now = datetime.now(UTC)
        return cls(user_id=user_id, created_at=now, updated_at=now)

    @property
    def total(self):
        return sum(item.line_total for item in self.items)

    @property
    def item_count(self):
        return sum(item.quantity for item in self.items)

    def line(self, item_id):
        item = next((i for i in self.items if str(i.id) == str(item_id)), None)
        if item is None:
            raise NotFound("Item not found in cart")
        return item

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_item(self, product_id, size, color_name, color_hex, quantity, price, available_stock):
        """Add ``quantity`` units, merging with a line of the same product, size and color."""
        existing = next(
            (
                i
                for i in self.items
                if str(i.product_id) == str(product_id) and i.size == size and i.color_name == color_name
            ),
            None,
        )
        in_cart = existing.quantity if existing else 0
        if in_cart + quantity > available_stock:
            raise StockExceeded(size=size, available=available_stock, in_cart=in_cart)

        if existing:
            existing.quantity = in_cart + quantity
            item = existing
        else:
            item = CartItem(
                product_id=product_id,
                size=size,
                color_name=color_name,
                color_hex=color_hex,
                quantity=quantity,
                price=price,
            )
            self.add_items(item)

        self.updated_at = datetime.now(UTC)
        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                user_id=str(self.user_id),
                item_id=str(item.id),
                product_id=str(product_id),
                size=size,
                quantity=quantity,
            )
        )
        return item

    def update_item_quantity(self, item_id, quantity, available_stock=None):
        """Replace a line's quantity; zero or less removes the line."""
        item = self.line(item_id)
        if quantity <= 0:
            self.remove_item(item_id)
            return

        if available_stock is not None and quantity > available_stock:
            raise StockExceeded(size=item.size, available=available_stock)

        previous_quantity = item.quantity
        item.quantity = quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemQuantityUpdated(
                cart_id=str(self.id),
                item_id=str(item.id),
                previous_quantity=previous_quantity,
                new_quantity=quantity,
            )
        )

    def remove_item(self, item_id):
        item = self.line(item_id)
        self.remove_items(item)
        self.updated_at = datetime.now(UTC)
        self.raise_(CartItemRemoved(cart_id=str(self.id), item_id=str(item_id)))

    def clear(self):
        for item in list(self.items):
            self.remove_items(item)
        self.updated_at = datetime.now(UTC)
        self.raise_(CartCleared(cart_id=str(self.id), user_id=str(self.user_id)))


@storefront.repository(part_of=Cart)
class CartRepository:
    def for_user(self, user_id):
        return self._dao.query.filter(user_id=str(user_id)).all().first
