"""FastAPI routes for reviews and product ratings."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from storefront.api.auth import Caller, current_caller
from storefront.api.schemas import IdResponse, StatusResponse
from storefront.reviews.api.schemas import SubmitReviewRequest
from storefront.reviews.projections.product_rating import rating_summary
from storefront.reviews.queries import eligible_products, product_reviews, user_reviews
from storefront.reviews.removal import DeleteReview
from storefront.reviews.submission import SubmitReview

router = APIRouter(prefix="/reviews", tags=["reviews"])


@router.get("")
async def list_product_reviews(product_id: str) -> list[dict]:
    return product_reviews(product_id)


@router.post("", status_code=201, response_model=IdResponse)
async def submit_review(body: SubmitReviewRequest, caller: Caller = Depends(current_caller)) -> IdResponse:
    command = SubmitReview(
        user_id=caller.user_id,
        product_id=body.product_id,
        order_id=body.order_id,
        rating=body.rating,
        title=body.title,
        comment=body.comment,
    )
    return IdResponse(id=current_domain.process(command, asynchronous=False))


@router.get("/mine")
async def my_reviews(caller: Caller = Depends(current_caller)) -> list[dict]:
    return user_reviews(caller.user_id)


@router.get("/eligible-products")
async def reviewable_products(caller: Caller = Depends(current_caller)) -> list[dict]:
    return eligible_products(caller.user_id)


@router.get("/rating/{product_id}")
async def product_rating(product_id: str) -> dict:
    return rating_summary(product_id)


@router.delete("/{review_id}", response_model=StatusResponse)
async def delete_review(review_id: str, caller: Caller = Depends(current_caller)) -> StatusResponse:
    current_domain.process(DeleteReview(review_id=review_id, user_id=caller.user_id), asynchronous=False)
    return StatusResponse()
