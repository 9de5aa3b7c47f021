"""Review read side: listings and the products a shopper may still review."""

from protean.utils.globals import current_domain

from storefront.catalogue.queries import find_product, product_summary
from storefront.ordering.order.order import Order
from storefront.reviews.review import Review


def serialize_review(review, with_product=False):
    data = {
        "id": str(review.id),
        "user_id": str(review.user_id),
        "product_id": str(review.product_id),
        "order_id": str(review.order_id),
        "rating": review.rating,
        "title": review.title,
        "comment": review.comment,
        "is_verified": review.is_verified,
        "created_at": review.created_at.isoformat() if review.created_at else None,
    }
    if with_product:
        data["product"] = product_summary(find_product(review.product_id))
    return data


def product_reviews(product_id):
    """Published reviews for a product, newest first."""
    reviews = current_domain.repository_for(Review).published(product_id=str(product_id))
    return [serialize_review(r) for r in reviews]


def user_reviews(user_id):
    reviews = current_domain.repository_for(Review).published(user_id=str(user_id))
    return [serialize_review(r, with_product=True) for r in reviews]


def eligible_products(user_id):
    """Products from the user's delivered orders that have no review yet.

    One entry per (order, product); a product bought in two sizes within the
    same order is listed once.
    """
    reviewed = {
        (str(r.order_id), str(r.product_id))
        for r in current_domain.repository_for(Review).published(user_id=str(user_id))
    }

    eligible = []
    for order in current_domain.repository_for(Order).delivered_for(user_id):
        for item in order.items:
            key = (str(order.id), str(item.product_id))
            if key in reviewed:
                continue
            reviewed.add(key)
            eligible.append(
                {
                    "product": product_summary(find_product(item.product_id)),
                    "product_id": str(item.product_id),
                    "order": {
                        "id": str(order.id),
                        "order_number": order.order_number,
                        "updated_at": order.updated_at.isoformat() if order.updated_at else None,
                    },
                }
            )
    return eligible
