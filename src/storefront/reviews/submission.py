"""SubmitReview — rate a product from one of the shopper's delivered orders.

Eligibility and the one-review-per-triple rule need other aggregates, so they
are checked here rather than inside Review.
"""

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from storefront.domain import storefront
from storefront.errors import DuplicateReview, InvalidEligibility
from storefront.ordering.order.order import Order, OrderStatus
from storefront.reviews.review import Review

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Review")
class SubmitReview:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    order_id = Identifier(required=True)
    rating = Integer(required=True, min_value=1, max_value=5)
    title = String(max_length=100)
    comment = String(max_length=1000)


def _ensure_eligible(user_id, product_id, order_id):
    try:
        order = current_domain.repository_for(Order).get(order_id)
    except ObjectNotFoundError:
        order = None

    if (
        order is None
        or str(order.user_id) != str(user_id)
        or order.status != OrderStatus.DELIVERED.value
        or not order.contains_product(product_id)
    ):
        raise InvalidEligibility("Invalid order or order not delivered")


@storefront.command_handler(part_of=Review)
class SubmitReviewHandler:
    @handle(SubmitReview)
    def submit_review(self, command):
        _ensure_eligible(command.user_id, command.product_id, command.order_id)

        repo = current_domain.repository_for(Review)
        if repo.find_triple(command.user_id, command.product_id, command.order_id) is not None:
            raise DuplicateReview("You have already reviewed this product for this order")

        review = Review.submit(
            user_id=command.user_id,
            product_id=command.product_id,
            order_id=command.order_id,
            rating=command.rating,
            title=command.title,
            comment=command.comment,
        )
        repo.add(review)
        logger.info(
            "review_submitted",
            review_id=str(review.id),
            product_id=str(command.product_id),
            rating=command.rating,
        )
        return str(review.id)
