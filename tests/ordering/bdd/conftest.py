"""Shared BDD fixtures and step definitions for ordering scenarios."""

import pytest
from protean import current_domain
from pytest_bdd import given, parsers, then
from storefront.catalogue.product.product import Product
from storefront.errors import StorefrontError
from storefront.ordering.cart.cart import Cart
from storefront.ordering.cart.items import AddToCart


@pytest.fixture()
def shopper_id():
    return "user-bdd-001"


@pytest.fixture()
def error():
    """Container for the error a When step captured."""
    return {"exc": None}


@pytest.fixture()
def add_units(shopper_id):
    def _add(product, quantity, size):
        command = AddToCart(
            user_id=shopper_id,
            product_id=product.id,
            size=size,
            color_name="Sand",
            color_hex="#d8c8a8",
            quantity=quantity,
        )
        current_domain.process(command, asynchronous=False)

    return _add


@pytest.fixture()
def shopper_cart(shopper_id):
    """Callable returning the shopper's cart as currently stored."""
    return lambda: current_domain.repository_for(Cart).for_user(shopper_id)


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(
    parsers.cfparse('a product "{name}" priced {price:f} with {stock:d} units in size "{size}"'),
    target_fixture="stocked_product",
)
def product_in_stock(make_product, name, price, stock, size):
    return make_product(name=name, price=price, sizes=[{"size": size, "stock": stock}])


@given(parsers.cfparse('the shopper added {quantity:d} units in size "{size}"'))
def shopper_added(stocked_product, add_units, quantity, size):
    add_units(stocked_product, quantity, size)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the request is refused with "{message}"'))
def request_refused(error, message):
    assert isinstance(error["exc"], StorefrontError)
    assert error["exc"].message == message


@then(parsers.cfparse("the cart holds {quantity:d} units"))
def cart_holds(shopper_cart, quantity):
    assert shopper_cart().item_count == quantity


@then(parsers.cfparse("the cart total is {total:f}"))
def cart_total(shopper_cart, total):
    assert shopper_cart().total == total


@then(parsers.cfparse("the cart has {count:d} line"))
def cart_has_one_line(shopper_cart, count):
    assert len(shopper_cart().items) == count


@then(parsers.cfparse("the cart has {count:d} lines"))
def cart_has_lines(shopper_cart, count):
    assert len(shopper_cart().items) == count


@then("the shopper has no cart")
def no_cart(shopper_cart):
    assert shopper_cart() is None


@then(parsers.cfparse('{stock:d} units remain in size "{size}"'))
def units_remain(stocked_product, stock, size):
    product = current_domain.repository_for(Product).get(stocked_product.id)
    assert product.size_entry(size).stock == stock
