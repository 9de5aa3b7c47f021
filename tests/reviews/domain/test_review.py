"""Tests for the Review aggregate."""

import pytest
from protean.exceptions import ValidationError
from storefront.reviews.events import ReviewRemoved, ReviewSubmitted
from storefront.reviews.review import Review, ReviewStatus


def _submit(rating=4, **kwargs):
    return Review.submit(user_id="user-001", product_id="prod-001", order_id="ord-001", rating=rating, **kwargs)


class TestSubmit:
    def test_published_and_verified(self):
        review = _submit(title="Great fit", comment="Soft linen")
        assert review.status == ReviewStatus.PUBLISHED.value
        assert review.is_verified is True
        assert review.title == "Great fit"

    def test_raises_submitted_event(self):
        review = _submit(rating=5)
        event = next(e for e in review._events if isinstance(e, ReviewSubmitted))
        assert event.rating == 5
        assert event.product_id == "prod-001"

    @pytest.mark.parametrize("rating", [0, 6])
    def test_rating_out_of_range(self, rating):
        with pytest.raises(ValidationError):
            _submit(rating=rating)

    def test_comment_length(self):
        with pytest.raises(ValidationError):
            _submit(comment="x" * 1001)


class TestRemove:
    def test_marks_removed(self):
        review = _submit()
        review.remove()
        assert review.status == ReviewStatus.REMOVED.value

    def test_event_carries_rating(self):
        review = _submit(rating=2)
        review.remove()
        event = next(e for e in review._events if isinstance(e, ReviewRemoved))
        assert event.rating == 2

    def test_cannot_remove_twice(self):
        review = _submit()
        review.remove()
        with pytest.raises(ValidationError):
            review.remove()
