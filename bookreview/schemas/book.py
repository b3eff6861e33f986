"""
Book Pydantic Schemas

The most involved schemas, handling:
- Author associations by ID (authorIds), at least one required on create
- Replace-vs-keep semantics for authors on update
- Nested authors and reviews in responses
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

from bookreview.schemas.author import AuthorResponse
from bookreview.schemas.review import BookReviewResponse, ReviewSummary

TITLE_MAX_LENGTH = 200
ISBN_MAX_LENGTH = 20


def _clean_title(v: str) -> str:
    if not v.strip():
        raise ValueError("Book title cannot be empty")
    return v.strip()


def _clean_isbn(v: str | None) -> str | None:
    if v is None:
        return v
    return v.strip() or None


class BookCreate(BaseModel):
    """
    Schema for creating a new book.

    Every book needs at least one existing author. If any of the IDs does
    not resolve, nothing is created and the error lists all missing IDs.

    Example request body:
    {
        "title": "1984",
        "isbn": "9780451524935",
        "authorIds": ["0b8c5b0e-2f57-4bd4-8d0a-0c3f9c1e6a11"]
    }
    """

    title: str = Field(
        ...,
        min_length=1,
        max_length=TITLE_MAX_LENGTH,
        description="Book title",
        examples=["1984", "Pride and Prejudice"],
    )

    isbn: str | None = Field(
        default=None,
        max_length=ISBN_MAX_LENGTH,
        description="ISBN (unique when present)",
        examples=["9780451524935"],
    )

    author_ids: list[uuid.UUID] = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("authorIds", "author_ids"),
        description="IDs of the book's authors (at least one)",
    )

    model_config = ConfigDict(extra="forbid")

    @field_validator("title")
    @classmethod
    def title_must_not_be_empty(cls, v: str) -> str:
        """Validate and normalize title."""
        return _clean_title(v)

    @field_validator("isbn")
    @classmethod
    def isbn_blank_is_none(cls, v: str | None) -> str | None:
        return _clean_isbn(v)


class BookUpdate(BaseModel):
    """
    Schema for updating an existing book.

    PUT with merge semantics: only the fields sent are applied.
    - authorIds present: REPLACES the whole author set (not additive)
    - authorIds absent: existing associations are left untouched
    - isbn: null removes the ISBN
    """

    title: str | None = Field(
        default=None,
        min_length=1,
        max_length=TITLE_MAX_LENGTH,
        description="Book title",
    )

    isbn: str | None = Field(
        default=None,
        max_length=ISBN_MAX_LENGTH,
        description="ISBN (null removes it)",
    )

    author_ids: list[uuid.UUID] | None = Field(
        default=None,
        min_length=1,
        validation_alias=AliasChoices("authorIds", "author_ids"),
        description="IDs of the book's authors (replaces existing)",
    )

    model_config = ConfigDict(extra="forbid")

    @field_validator("title")
    @classmethod
    def title_must_not_be_empty(cls, v: str | None) -> str:
        if v is None:
            raise ValueError("Book title cannot be null")
        return _clean_title(v)

    @field_validator("isbn")
    @classmethod
    def isbn_blank_is_none(cls, v: str | None) -> str | None:
        return _clean_isbn(v)

    @field_validator("author_ids")
    @classmethod
    def author_ids_cannot_be_null(cls, v: list[uuid.UUID] | None) -> list[uuid.UUID]:
        if v is None:
            raise ValueError("Author IDs cannot be null; omit the field to keep the current authors")
        return v

    @model_validator(mode="after")
    def at_least_one_field(self) -> "BookUpdate":
        if not self.model_fields_set:
            raise ValueError("At least one field must be provided for update")
        return self


class BookResponse(BaseModel):
    """
    Schema for book responses.

    Includes the nested authors and the book's reviews (without their
    users). The detail view (BookDetailResponse) adds the review authors.
    """

    id: uuid.UUID = Field(..., description="Unique identifier")
    title: str = Field(..., description="Book title")
    isbn: str | None = Field(default=None, description="ISBN")
    created_at: datetime = Field(..., description="When the book was created")
    updated_at: datetime = Field(..., description="When the book was last updated")

    authors: list[AuthorResponse] = Field(default=[], description="List of authors")
    reviews: list[ReviewSummary] = Field(default=[], description="Reviews of this book")

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "5d1f7f0e-0a8e-4d5f-8a4e-1a2b3c4d5e6f",
                "title": "1984",
                "isbn": "9780451524935",
                "created_at": "2024-01-15T10:30:00Z",
                "updated_at": "2024-01-15T10:30:00Z",
                "authors": [
                    {
                        "id": "0b8c5b0e-2f57-4bd4-8d0a-0c3f9c1e6a11",
                        "name": "George Orwell",
                        "created_at": "2024-01-15T10:30:00Z",
                        "updated_at": "2024-01-15T10:30:00Z",
                    }
                ],
                "reviews": [],
            }
        },
    )


class BookDetailResponse(BookResponse):
    """Book with reviews that carry their (safe) author."""

    reviews: list[BookReviewResponse] = Field(default=[], description="Reviews with their authors")


# =============================================================================
# Response Payloads
# =============================================================================
class BookData(BaseModel):
    book: BookResponse


class BookDetailData(BaseModel):
    book: BookDetailResponse


class BookListData(BaseModel):
    books: list[BookResponse]
