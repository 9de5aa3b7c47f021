"""Review aggregate (CQRS) — a buyer's rating of a product from one delivered order.

A review is keyed by the (user, product, order) triple. Deleting a review
marks it removed so the rating projection can subtract it; removed reviews
no longer count towards the triple's uniqueness.

State Machine:
    PUBLISHED → REMOVED
    REMOVED → (terminal)
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Identifier, Integer, String

from storefront.domain import storefront
from storefront.reviews.events import ReviewRemoved, ReviewSubmitted


class ReviewStatus(Enum):
    PUBLISHED = "published"
    REMOVED = "removed"


@storefront.aggregate
class Review:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    order_id = Identifier(required=True)
    rating = Integer(required=True, min_value=1, max_value=5)
    title = String(max_length=100)
    comment = String(max_length=1000)
    is_verified = Boolean(default=True)
    status = String(choices=ReviewStatus, default=ReviewStatus.PUBLISHED.value)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def submit(cls, user_id, product_id, order_id, rating, title=None, comment=None):
        now = datetime.now(UTC)
        review = cls(
            user_id=user_id,
            product_id=product_id,
            order_id=order_id,
            rating=rating,
            title=title,
            comment=comment,
            is_verified=True,
            status=ReviewStatus.PUBLISHED.value,
            created_at=now,
            updated_at=now,
        )
        review.raise_(
            ReviewSubmitted(
                review_id=str(review.id),
                user_id=str(user_id),
                product_id=str(product_id),
                order_id=str(order_id),
                rating=rating,
                submitted_at=now,
            )
        )
        return review

    def remove(self):
        if self.status == ReviewStatus.REMOVED.value:
            raise ValidationError({"status": ["Review has already been removed"]})

        self.status = ReviewStatus.REMOVED.value
        now = datetime.now(UTC)
        self.updated_at = now
        self.raise_(
            ReviewRemoved(
                review_id=str(self.id),
                product_id=str(self.product_id),
                rating=self.rating,
                removed_at=now,
            )
        )


@storefront.repository(part_of=Review)
class ReviewRepository:
    def published(self, **filters):
        reviews = self._dao.query.filter(status=ReviewStatus.PUBLISHED.value, **filters).limit(None).all().items
        return sorted(reviews, key=lambda r: r.created_at, reverse=True)

    def find_triple(self, user_id, product_id, order_id):
        return next(
            iter(self.published(user_id=str(user_id), product_id=str(product_id), order_id=str(order_id))),
            None,
        )
