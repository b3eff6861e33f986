"""
Pydantic Schemas Package

This package contains Pydantic models for request/response validation.

WHY Separate Schemas from SQLAlchemy Models?
============================================
1. Security: Control exactly what data is exposed in API responses
   (SafeUser never carries the password hash)
2. Validation: Different rules for create vs update vs response
3. Decoupling: Database schema can evolve independently of API
4. Documentation: Schemas generate OpenAPI documentation

Schema Naming Convention:
- XxxCreate: Fields required when creating a new record
- XxxUpdate: Fields allowed when updating (all optional, at least one)
- XxxResponse: Fields returned in API responses
- XxxData: The `data` member of a response envelope
"""

from bookreview.schemas.author import (
    AuthorCreate,
    AuthorData,
    AuthorDetailData,
    AuthorDetailResponse,
    AuthorListData,
    AuthorResponse,
    AuthorUpdate,
)
from bookreview.schemas.book import (
    BookCreate,
    BookData,
    BookDetailData,
    BookDetailResponse,
    BookListData,
    BookResponse,
    BookUpdate,
)
from bookreview.schemas.common import (
    CollectionResponse,
    ErrorResponse,
    PaginatedResponse,
    SuccessResponse,
)
from bookreview.schemas.embedded import BookMinimal
from bookreview.schemas.review import (
    BookReviewResponse,
    ReviewCreate,
    ReviewData,
    ReviewListData,
    ReviewResponse,
    ReviewSummary,
    ReviewUpdate,
)
from bookreview.schemas.user import (
    AuthenticatedUser,
    LoginRequest,
    LoginResponse,
    SafeUser,
    UserCreate,
    UserData,
)

__all__ = [
    # Envelopes
    "SuccessResponse",
    "CollectionResponse",
    "PaginatedResponse",
    "ErrorResponse",
    # Author schemas
    "AuthorCreate",
    "AuthorUpdate",
    "AuthorResponse",
    "AuthorDetailResponse",
    "AuthorData",
    "AuthorDetailData",
    "AuthorListData",
    # Book schemas
    "BookMinimal",
    "BookCreate",
    "BookUpdate",
    "BookResponse",
    "BookDetailResponse",
    "BookData",
    "BookDetailData",
    "BookListData",
    # User / auth schemas
    "UserCreate",
    "LoginRequest",
    "LoginResponse",
    "SafeUser",
    "AuthenticatedUser",
    "UserData",
    # Review schemas
    "ReviewCreate",
    "ReviewUpdate",
    "ReviewSummary",
    "BookReviewResponse",
    "ReviewResponse",
    "ReviewData",
    "ReviewListData",
]
