"""DeleteReview — only the author may delete their review."""

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from storefront.domain import storefront
from storefront.errors import NotFound, Unauthorized
from storefront.reviews.review import Review, ReviewStatus

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Review")
class DeleteReview:
    review_id = Identifier(required=True)
    user_id = Identifier(required=True)


@storefront.command_handler(part_of=Review)
class DeleteReviewHandler:
    @handle(DeleteReview)
    def delete_review(self, command):
        repo = current_domain.repository_for(Review)
        try:
            review = repo.get(command.review_id)
        except ObjectNotFoundError:
            raise NotFound("Review not found") from None

        if review.status == ReviewStatus.REMOVED.value:
            raise NotFound("Review not found")
        if str(review.user_id) != str(command.user_id):
            raise Unauthorized("Not authorized to delete this review")

        review.remove()
        repo.add(review)
        logger.info("review_removed", review_id=str(review.id), product_id=str(review.product_id))
