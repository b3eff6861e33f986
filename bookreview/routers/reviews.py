"""
Reviews Router

CRUD endpoints for book reviews.

Endpoints:
- GET /reviews - List reviews (filter by bookId/userId, paginated)
- GET /reviews/{review_id} - Get a specific review
- POST /reviews - Create a review (authenticated)
- PUT /reviews/{review_id} - Update a review (owner or admin)
- DELETE /reviews/{review_id} - Delete a review (owner or admin)

Business Rules:
- One review per user per book (enforced by database constraint)
- Only the review owner or an admin can update or delete a review
"""

import uuid
from typing import Annotated

from fastapi import APIRouter, Query, Request, Response, status

from bookreview.config import get_settings
from bookreview.dependencies import Actor, Pagination, ReviewServiceDep
from bookreview.schemas import (
    ErrorResponse,
    PaginatedResponse,
    ReviewCreate,
    ReviewData,
    ReviewListData,
    ReviewUpdate,
    SuccessResponse,
)
from bookreview.services.rate_limiter import limiter

settings = get_settings()

# =============================================================================
# Router Configuration
# =============================================================================
router = APIRouter(
    prefix="/reviews",
    tags=["Reviews"],
    responses={
        404: {"model": ErrorResponse, "description": "Review or book not found"},
    },
)

OWNER_OR_ADMIN = {
    401: {"model": ErrorResponse, "description": "Missing or invalid token"},
    403: {"model": ErrorResponse, "description": "Not the owner and not an admin"},
}


@router.get(
    "",
    response_model=PaginatedResponse[ReviewListData],
    summary="List reviews",
    description="""
    List reviews, newest first.

    - **bookId**: only reviews of this book
    - **userId**: only reviews by this user
    - **page** / **limit**: pagination (limit max 100)

    `totalResults` is the number of matching reviews across all pages.
    """,
)
def list_reviews(
    reviews: ReviewServiceDep,
    pagination: Pagination,
    book_id: Annotated[uuid.UUID | None, Query(alias="bookId", description="Filter by book")] = None,
    user_id: Annotated[uuid.UUID | None, Query(alias="userId", description="Filter by user")] = None,
) -> PaginatedResponse[ReviewListData]:
    items, total = reviews.list_reviews(
        book_id=book_id,
        user_id=user_id,
        page=pagination.page,
        limit=pagination.limit,
    )
    return PaginatedResponse[ReviewListData](
        results=len(items),
        total_results=total,
        data=ReviewListData(reviews=items),
    )


@router.get(
    "/{review_id}",
    response_model=SuccessResponse[ReviewData],
    summary="Get a review",
)
def get_review(review_id: uuid.UUID, reviews: ReviewServiceDep) -> SuccessResponse[ReviewData]:
    review = reviews.get_review(review_id)
    return SuccessResponse[ReviewData](data=ReviewData(review=review))


@router.post(
    "",
    response_model=SuccessResponse[ReviewData],
    status_code=status.HTTP_201_CREATED,
    summary="Create a review",
    description="""
    Review a book as the authenticated user.

    - **bookId**: the book being reviewed
    - **rating**: 1-5
    - **comment**: optional

    Each user can review a given book only once (409 on a second attempt).
    """,
    responses={
        401: {"model": ErrorResponse, "description": "Missing or invalid token"},
        409: {"model": ErrorResponse, "description": "Book already reviewed by this user"},
    },
)
@limiter.limit(settings.rate_limit_write)
def create_review(
    request: Request,
    review_data: ReviewCreate,
    reviews: ReviewServiceDep,
    actor: Actor,
) -> SuccessResponse[ReviewData]:
    review = reviews.create_review(review_data, actor)
    return SuccessResponse[ReviewData](data=ReviewData(review=review))


@router.put(
    "/{review_id}",
    response_model=SuccessResponse[ReviewData],
    summary="Update a review",
    description="Change the rating and/or comment. `\"comment\": null` clears the comment.",
    responses=OWNER_OR_ADMIN,
)
@limiter.limit(settings.rate_limit_write)
def update_review(
    request: Request,
    review_id: uuid.UUID,
    review_data: ReviewUpdate,
    reviews: ReviewServiceDep,
    actor: Actor,
) -> SuccessResponse[ReviewData]:
    review = reviews.update_review(review_id, review_data, actor)
    return SuccessResponse[ReviewData](data=ReviewData(review=review))


@router.delete(
    "/{review_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a review",
    responses=OWNER_OR_ADMIN,
)
@limiter.limit(settings.rate_limit_write)
def delete_review(
    request: Request,
    review_id: uuid.UUID,
    reviews: ReviewServiceDep,
    actor: Actor,
) -> Response:
    reviews.delete_review(review_id, actor)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
