"""
Response Envelopes

Every response body is wrapped in the same envelope:

    success:   {"status": "success", "data": {...}}
    lists:     {"status": "success", "results": 3, "data": {...}}
    paginated: {"status": "success", "results": 10, "totalResults": 42, "data": {...}}
    errors:    {"status": "error", "message": "..."}

The generic models let each route declare its exact payload, e.g.
`SuccessResponse[ReviewData]`, so the OpenAPI schema stays precise.
"""

from typing import Generic, Literal, TypeVar

from pydantic import BaseModel, Field

DataT = TypeVar("DataT")


class SuccessResponse(BaseModel, Generic[DataT]):
    """Envelope for a single resource."""

    status: Literal["success"] = "success"
    data: DataT


class CollectionResponse(BaseModel, Generic[DataT]):
    """Envelope for an unpaginated collection."""

    status: Literal["success"] = "success"
    results: int = Field(..., ge=0, description="Number of items in this response")
    data: DataT


class PaginatedResponse(BaseModel, Generic[DataT]):
    """
    Envelope for one page of a collection.

    `results` is the size of this page, `totalResults` the number of rows
    matching the filters regardless of page, so clients can do the paging
    math themselves.
    """

    status: Literal["success"] = "success"
    results: int = Field(..., ge=0, description="Number of items on this page")
    total_results: int = Field(
        ...,
        ge=0,
        serialization_alias="totalResults",
        description="Total number of matching items",
    )
    data: DataT


class ErrorResponse(BaseModel):
    """Body of every error response."""

    status: Literal["error"] = "error"
    message: str = Field(..., examples=["Review not found"])
