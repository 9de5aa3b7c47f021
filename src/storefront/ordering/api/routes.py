"""FastAPI routes for the cart and orders.

Thin adapters: request schema → domain command → response. Every route acts
on behalf of the caller named in the request headers.
"""

import json

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from storefront.api.auth import Caller, current_caller
from storefront.api.schemas import StatusResponse
from storefront.ordering.api.schemas import (
    AddToCartRequest,
    PlaceOrderRequest,
    UpdateCartItemRequest,
    UpdateOrderStatusRequest,
)
from storefront.ordering.cart.items import AddToCart, ClearCart, RemoveCartItem, UpdateCartItem
from storefront.ordering.cart.view import cart_contents
from storefront.ordering.order.placement import PlaceOrder
from storefront.ordering.order.queries import get_order, list_orders
from storefront.ordering.order.status import UpdateOrderStatus

cart_router = APIRouter(prefix="/cart", tags=["cart"])
order_router = APIRouter(prefix="/orders", tags=["orders"])


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
@cart_router.get("")
async def view_cart(caller: Caller = Depends(current_caller)) -> dict:
    return cart_contents(caller.user_id)


@cart_router.post("")
async def add_to_cart(body: AddToCartRequest, caller: Caller = Depends(current_caller)) -> dict:
    color = body.color
    command = AddToCart(
        user_id=caller.user_id,
        product_id=body.product_id,
        size=body.size,
        color_name=color.name if color else None,
        color_hex=color.hex if color else None,
        quantity=body.quantity,
    )
    current_domain.process(command, asynchronous=False)
    return cart_contents(caller.user_id)


@cart_router.put("")
async def update_cart_item(body: UpdateCartItemRequest, caller: Caller = Depends(current_caller)) -> dict:
    command = UpdateCartItem(user_id=caller.user_id, item_id=body.item_id, quantity=body.quantity)
    current_domain.process(command, asynchronous=False)
    return cart_contents(caller.user_id)


@cart_router.delete("")
async def remove_from_cart(item_id: str | None = None, caller: Caller = Depends(current_caller)) -> dict:
    """Remove one line when ``item_id`` is given, otherwise empty the cart."""
    if item_id:
        command = RemoveCartItem(user_id=caller.user_id, item_id=item_id)
    else:
        command = ClearCart(user_id=caller.user_id)
    current_domain.process(command, asynchronous=False)
    return cart_contents(caller.user_id)


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
@order_router.get("")
async def orders(caller: Caller = Depends(current_caller)) -> list[dict]:
    return list_orders(caller.user_id, caller.role)


@order_router.post("", status_code=201)
async def place_order(body: PlaceOrderRequest, caller: Caller = Depends(current_caller)) -> dict:
    items = [
        {
            "product_id": line.product_id,
            "size": line.size,
            "color_name": line.color.name if line.color else None,
            "color_hex": line.color.hex if line.color else None,
            "quantity": line.quantity,
            "price": line.price,
        }
        for line in body.items
    ]
    info = body.customer_info
    command = PlaceOrder(
        user_id=caller.user_id,
        items=json.dumps(items),
        total=body.total,
        full_name=info.full_name,
        phone_number=info.phone_number,
        address=info.address,
        notes=info.notes,
        payment_method=body.payment_method,
    )
    order_id = current_domain.process(command, asynchronous=False)
    return get_order(order_id, caller.user_id, caller.role)


@order_router.get("/{order_id}")
async def order_detail(order_id: str, caller: Caller = Depends(current_caller)) -> dict:
    return get_order(order_id, caller.user_id, caller.role)


@order_router.put("/{order_id}", response_model=StatusResponse)
async def update_order_status(
    order_id: str, body: UpdateOrderStatusRequest, caller: Caller = Depends(current_caller)
) -> StatusResponse:
    command = UpdateOrderStatus(order_id=order_id, status=body.status, actor_role=caller.role)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()
