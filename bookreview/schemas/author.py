"""
Author Pydantic Schemas

These schemas define the shape of data for Author-related API operations.

Pydantic v2 Features Used:
- model_config: Configure models (replaces the v1 Config class)
- Field(): Define constraints and metadata
- field_validator / model_validator: Validate fields and whole models
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from bookreview.schemas.embedded import BookMinimal

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 150


def _clean_name(v: str) -> str:
    cleaned = v.strip()
    if len(cleaned) < NAME_MIN_LENGTH:
        raise ValueError(f"Author name must be at least {NAME_MIN_LENGTH} characters long")
    return cleaned


class AuthorCreate(BaseModel):
    """
    Schema for creating a new author.

    Author names are not unique; the same name may be created twice.
    """

    name: str = Field(
        ...,
        min_length=NAME_MIN_LENGTH,
        max_length=NAME_MAX_LENGTH,
        description="Author's full name",
        examples=["George Orwell", "Jane Austen"],
    )

    model_config = ConfigDict(extra="forbid")

    @field_validator("name")
    @classmethod
    def name_must_not_be_blank(cls, v: str) -> str:
        """Strip surrounding whitespace; whitespace does not count toward the minimum."""
        return _clean_name(v)


class AuthorUpdate(BaseModel):
    """
    Schema for updating an existing author.

    Only the fields present in the request are applied (merge semantics),
    and at least one field must be present.
    """

    name: str | None = Field(
        default=None,
        min_length=NAME_MIN_LENGTH,
        max_length=NAME_MAX_LENGTH,
        description="Author's full name",
    )

    model_config = ConfigDict(extra="forbid")

    @field_validator("name")
    @classmethod
    def name_must_not_be_blank(cls, v: str | None) -> str:
        # Only runs when the client sent the key; an explicit null is not a name
        if v is None:
            raise ValueError("Author name cannot be null")
        return _clean_name(v)

    @model_validator(mode="after")
    def at_least_one_field(self) -> "AuthorUpdate":
        if not self.model_fields_set:
            raise ValueError("At least one field must be provided for update")
        return self


class AuthorResponse(BaseModel):
    """
    Schema for author responses (what the API returns).

    from_attributes=True lets us build this straight from the ORM object:
        AuthorResponse.model_validate(author)
    """

    id: uuid.UUID = Field(..., description="Unique identifier")
    name: str = Field(..., description="Author's full name")
    created_at: datetime = Field(..., description="When the author was created")
    updated_at: datetime = Field(..., description="When the author was last updated")

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "0b8c5b0e-2f57-4bd4-8d0a-0c3f9c1e6a11",
                "name": "George Orwell",
                "created_at": "2024-01-15T10:30:00Z",
                "updated_at": "2024-01-15T10:30:00Z",
            }
        },
    )


class AuthorDetailResponse(AuthorResponse):
    """Author with the books they are credited on."""

    books: list[BookMinimal] = Field(default=[], description="Books by this author")


# =============================================================================
# Response Payloads
# =============================================================================
class AuthorData(BaseModel):
    author: AuthorResponse


class AuthorDetailData(BaseModel):
    author: AuthorDetailResponse


class AuthorListData(BaseModel):
    authors: list[AuthorResponse]
