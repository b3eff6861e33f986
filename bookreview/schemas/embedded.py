"""
Embedded Schemas (Minimal data for nested responses)

Kept in their own module because both the author and the review schemas
embed a book, while the book schemas embed authors and reviews.
"""

import uuid

from pydantic import BaseModel, ConfigDict, Field


class BookMinimal(BaseModel):
    """
    Minimal book info for embedding in author and review responses.

    Just enough to identify the book without pulling its authors/reviews.
    """

    id: uuid.UUID = Field(..., description="Book ID")
    title: str = Field(..., description="Book title")
    isbn: str | None = Field(default=None, description="ISBN")

    model_config = ConfigDict(from_attributes=True)
