"""
Review Pydantic Schemas

Schemas for book reviews with ratings.

Schemas:
- ReviewCreate: Create a new review
- ReviewUpdate: Update an existing review
- ReviewSummary: Review fields only (embedded in book lists)
- BookReviewResponse: Review with its author (embedded in book details)
- ReviewResponse: Full review data with user and book

Business Rules:
- Rating must be 1-5 (validated here and by a database check constraint)
- One review per user per book (enforced at database level)
- Only the owner or an admin can edit/delete a review
"""

import uuid
from datetime import datetime

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from bookreview.schemas.embedded import BookMinimal
from bookreview.schemas.user import SafeUser


def _blank_to_none(v: str | None) -> str | None:
    if v is not None:
        v = v.strip()
        if not v:
            return None
    return v


# =============================================================================
# Request Schemas
# =============================================================================
class ReviewCreate(BaseModel):
    """
    Schema for creating a new review.

    The owner is never taken from the body: it is the authenticated caller.

    Example request body:
    {
        "bookId": "5d1f7f0e-0a8e-4d5f-8a4e-1a2b3c4d5e6f",
        "rating": 5,
        "comment": "One of the best books I've ever read..."
    }
    """

    rating: int = Field(
        ...,
        ge=1,
        le=5,
        description="Rating from 1 to 5 stars",
        examples=[4, 5],
    )

    comment: str | None = Field(
        default=None,
        max_length=5000,
        description="Review text",
        examples=["This book changed my perspective on..."],
    )

    book_id: uuid.UUID = Field(
        ...,
        validation_alias=AliasChoices("bookId", "book_id"),
        description="ID of the book being reviewed",
    )

    model_config = ConfigDict(extra="forbid")

    @field_validator("comment")
    @classmethod
    def comment_blank_is_none(cls, v: str | None) -> str | None:
        """Whitespace-only comments are stored as no comment."""
        return _blank_to_none(v)


class ReviewUpdate(BaseModel):
    """
    Schema for updating an existing review.

    Only rating and comment can change; the book and the owner are fixed.
    Sending `"comment": null` clears the comment.
    """

    rating: int | None = Field(
        default=None,
        ge=1,
        le=5,
        description="Rating from 1 to 5 stars",
    )

    comment: str | None = Field(
        default=None,
        max_length=5000,
        description="Review text (null clears it)",
    )

    model_config = ConfigDict(extra="forbid")

    @field_validator("rating")
    @classmethod
    def rating_cannot_be_null(cls, v: int | None) -> int:
        if v is None:
            raise ValueError("Rating cannot be null")
        return v

    @field_validator("comment")
    @classmethod
    def comment_blank_is_none(cls, v: str | None) -> str | None:
        return _blank_to_none(v)

    @model_validator(mode="after")
    def at_least_one_field(self) -> "ReviewUpdate":
        if not self.model_fields_set:
            raise ValueError("At least rating or comment must be provided for update")
        return self


# =============================================================================
# Response Schemas
# =============================================================================
class ReviewSummary(BaseModel):
    """Review fields without nested relations."""

    id: uuid.UUID = Field(..., description="Unique review identifier")
    rating: int = Field(..., description="Rating from 1 to 5 stars")
    comment: str | None = Field(default=None, description="Review text")
    user_id: uuid.UUID = Field(..., description="ID of the user who wrote the review")
    book_id: uuid.UUID = Field(..., description="ID of the reviewed book")
    created_at: datetime = Field(..., description="When the review was created")
    updated_at: datetime = Field(..., description="When the review was last updated")

    model_config = ConfigDict(from_attributes=True)


class BookReviewResponse(ReviewSummary):
    """Review as embedded in a book's detail view, with its safe author."""

    user: SafeUser = Field(..., description="User who wrote the review")


class ReviewResponse(ReviewSummary):
    """
    Schema for review responses.

    Includes the nested user (safe representation, no password hash) and a
    minimal view of the reviewed book.
    """

    user: SafeUser = Field(..., description="User who wrote the review")
    book: BookMinimal = Field(..., description="Book being reviewed")

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "9a0e8e52-6b7e-4b6f-9c1e-3f2d4a5b6c7d",
                "rating": 5,
                "comment": "A must-read classic!",
                "user_id": "6f1c2a4e-8d0b-4c47-9a43-1f7d2e5b9c10",
                "book_id": "5d1f7f0e-0a8e-4d5f-8a4e-1a2b3c4d5e6f",
                "created_at": "2024-01-15T10:30:00Z",
                "updated_at": "2024-01-15T10:30:00Z",
                "user": {
                    "id": "6f1c2a4e-8d0b-4c47-9a43-1f7d2e5b9c10",
                    "name": "Jane Reader",
                    "email": "jane@example.com",
                    "role": "USER",
                    "created_at": "2024-01-01T00:00:00Z",
                    "updated_at": "2024-01-01T00:00:00Z",
                },
                "book": {
                    "id": "5d1f7f0e-0a8e-4d5f-8a4e-1a2b3c4d5e6f",
                    "title": "1984",
                    "isbn": "9780451524935",
                },
            }
        },
    )


# =============================================================================
# Response Payloads
# =============================================================================
class ReviewData(BaseModel):
    review: ReviewResponse


class ReviewListData(BaseModel):
    reviews: list[ReviewResponse]
