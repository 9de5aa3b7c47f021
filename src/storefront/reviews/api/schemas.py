"""Pydantic request schemas for the reviews API."""

from pydantic import BaseModel, Field


class SubmitReviewRequest(BaseModel):
    product_id: str
    order_id: str
    rating: int
    title: str | None = Field(default=None, max_length=100)
    comment: str | None = Field(default=None, max_length=1000)
