"""ProductRating — rating average, count and distribution per product."""

import json

from protean.core.projector import on
from protean.exceptions import ObjectNotFoundError
from protean.fields import DateTime, Float, Identifier, Integer, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.reviews.events import ReviewRemoved, ReviewSubmitted
from storefront.reviews.review import Review


@storefront.projection
class ProductRating:
    product_id = Identifier(identifier=True, required=True)
    average_rating = Float(default=0.0)
    total_reviews = Integer(default=0)
    rating_distribution = Text()  # JSON: {"1": 0, ..., "5": 0}
    updated_at = DateTime()


def empty_distribution():
    return {str(r): 0 for r in range(1, 6)}


def average(distribution):
    total = sum(distribution.values())
    if total == 0:
        return 0.0
    return round(sum(int(rating) * count for rating, count in distribution.items()) / total, 2)


@storefront.projector(projector_for=ProductRating, aggregates=[Review])
class ProductRatingProjector:
    @on(ReviewSubmitted)
    def on_review_submitted(self, event):
        repo = current_domain.repository_for(ProductRating)
        try:
            rating = repo.get(event.product_id)
        except ObjectNotFoundError:
            rating = ProductRating(
                product_id=event.product_id,
                total_reviews=0,
                rating_distribution=json.dumps(empty_distribution()),
            )

        distribution = json.loads(rating.rating_distribution)
        key = str(event.rating)
        distribution[key] = distribution.get(key, 0) + 1

        rating.total_reviews = rating.total_reviews + 1
        rating.rating_distribution = json.dumps(distribution)
        rating.average_rating = average(distribution)
        rating.updated_at = event.submitted_at
        repo.add(rating)

    @on(ReviewRemoved)
    def on_review_removed(self, event):
        repo = current_domain.repository_for(ProductRating)
        try:
            rating = repo.get(event.product_id)
        except ObjectNotFoundError:
            return

        distribution = json.loads(rating.rating_distribution)
        key = str(event.rating)
        distribution[key] = max(0, distribution.get(key, 0) - 1)

        rating.total_reviews = max(0, rating.total_reviews - 1)
        rating.rating_distribution = json.dumps(distribution)
        rating.average_rating = average(distribution)
        rating.updated_at = event.removed_at
        repo.add(rating)


def rating_summary(product_id):
    """Summary for a product; a product with no reviews gets zeros."""
    try:
        rating = current_domain.repository_for(ProductRating).get(product_id)
    except ObjectNotFoundError:
        return {
            "product_id": str(product_id),
            "average_rating": 0.0,
            "total_reviews": 0,
            "rating_distribution": empty_distribution(),
        }
    return {
        "product_id": str(rating.product_id),
        "average_rating": rating.average_rating,
        "total_reviews": rating.total_reviews,
        "rating_distribution": json.loads(rating.rating_distribution),
    }
