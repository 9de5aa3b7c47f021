"""Order read side: listings and single-order lookups with products resolved."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.catalogue.queries import find_product, product_summary
from storefront.errors import Forbidden, NotFound
from storefront.ordering.order.order import Order
from storefront.ordering.order.status import ADMIN_ROLE


def serialize_order(order):
    info = order.customer_info
    return {
        "id": str(order.id),
        "order_number": order.order_number,
        "user_id": str(order.user_id),
        "items": [
            {
                "id": str(item.id),
                "product_id": str(item.product_id),
                "product": product_summary(find_product(item.product_id)),
                "size": item.size,
                "color": {"name": item.color_name, "hex": item.color_hex},
                "quantity": item.quantity,
                "price": item.price,
            }
            for item in order.items
        ],
        "total": order.total,
        "customer_info": {
            "full_name": info.full_name,
            "phone_number": info.phone_number,
            "address": info.address,
            "notes": info.notes,
        }
        if info
        else None,
        "payment_method": order.payment_method,
        "status": order.status,
        "created_at": order.created_at.isoformat() if order.created_at else None,
        "updated_at": order.updated_at.isoformat() if order.updated_at else None,
    }


def list_orders(user_id, role):
    """Admins see every order; everyone else only their own. Newest first."""
    repo = current_domain.repository_for(Order)
    orders = repo.newest_first() if role == ADMIN_ROLE else repo.newest_first(user_id)
    return [serialize_order(o) for o in orders]


def get_order(order_id, user_id, role):
    try:
        order = current_domain.repository_for(Order).get(order_id)
    except ObjectNotFoundError:
        raise NotFound("Order not found") from None

    if role != ADMIN_ROLE and str(order.user_id) != str(user_id):
        raise Forbidden("You can only view your own orders")
    return serialize_order(order)
