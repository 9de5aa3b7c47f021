"""Domain events for the Review aggregate."""

from protean.fields import DateTime, Identifier, Integer

from storefront.domain import storefront


@storefront.event(part_of="Review")
class ReviewSubmitted:
    __version__ = 1

    review_id: Identifier(required=True)
    user_id: Identifier(required=True)
    product_id: Identifier(required=True)
    order_id: Identifier(required=True)
    rating: Integer(required=True)
    submitted_at: DateTime(required=True)


@storefront.event(part_of="Review")
class ReviewRemoved:
    """The author deleted the review; its rating no longer counts."""

    __version__ = 1

    review_id: Identifier(required=True)
    product_id: Identifier(required=True)
    rating: Integer(required=True)
    removed_at: DateTime(required=True)
