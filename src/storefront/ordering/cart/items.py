"""Cart item management — commands and handler."""

import structlog
from protean import handle
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.errors import NotFound
from storefront.ordering.cart.cart import Cart
from storefront.ordering.stock import available_stock, load_product, stock_for_line

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Cart")
class AddToCart:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    size = String(required=True, max_length=10)
    color_name = String(max_length=100)
    color_hex = String(max_length=20)
    quantity = Integer(required=True, min_value=1)


@storefront.command(part_of="Cart")
class UpdateCartItem:
    user_id = Identifier(required=True)
    item_id = Identifier(required=True)
    quantity = Integer(required=True)


@storefront.command(part_of="Cart")
class RemoveCartItem:
    user_id = Identifier(required=True)
    item_id = Identifier(required=True)


@storefront.command(part_of="Cart")
class ClearCart:
    user_id = Identifier(required=True)


def _existing_cart(repo, user_id):
    cart = repo.for_user(user_id)
    if cart is None:
        raise NotFound("Cart not found")
    return cart


@storefront.command_handler(part_of=Cart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.for_user(command.user_id) or Cart.create(command.user_id)

        product = load_product(command.product_id)
        stock = available_stock(product, command.size)

        cart.add_item(
            product_id=command.product_id,
            size=command.size,
            color_name=command.color_name,
            color_hex=command.color_hex,
            quantity=command.quantity,
            price=product.price,
            available_stock=stock,
        )
        repo.add(cart)
        logger.info(
            "cart_item_added",
            user_id=str(command.user_id),
            product_id=str(command.product_id),
            size=command.size,
            quantity=command.quantity,
        )
        return str(cart.id)

    @handle(UpdateCartItem)
    def update_cart_item(self, command):
        repo = current_domain.repository_for(Cart)
        cart = _existing_cart(repo, command.user_id)
        item = cart.line(command.item_id)

        stock = None
        if command.quantity > 0:
            stock = stock_for_line(item.product_id, item.size)

        cart.update_item_quantity(command.item_id, command.quantity, available_stock=stock)
        repo.add(cart)

    @handle(RemoveCartItem)
    def remove_cart_item(self, command):
        repo = current_domain.repository_for(Cart)
        cart = _existing_cart(repo, command.user_id)
        cart.remove_item(command.item_id)
        repo.add(cart)

    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = _existing_cart(repo, command.user_id)
        cart.clear()
        repo.add(cart)
        logger.info("cart_cleared", user_id=str(command.user_id))
