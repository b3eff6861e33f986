"""
Books Router

CRUD endpoints for books.

Reads are public. Creating, updating and deleting need an ADMIN token.

Author associations:
- POST requires authorIds (at least one existing author)
- PUT with authorIds replaces the whole author set; without it the
  current authors are kept
- DELETE also removes the book's reviews
"""

import uuid

from fastapi import APIRouter, Request, Response, status

from bookreview.config import get_settings
from bookreview.dependencies import AdminUser, BookServiceDep
from bookreview.schemas import (
    BookCreate,
    BookData,
    BookDetailData,
    BookListData,
    BookUpdate,
    CollectionResponse,
    ErrorResponse,
    SuccessResponse,
)
from bookreview.services.rate_limiter import limiter

settings = get_settings()

# =============================================================================
# Router Configuration
# =============================================================================
router = APIRouter(
    prefix="/books",
    tags=["Books"],
    responses={
        404: {"model": ErrorResponse, "description": "Book not found"},
    },
)

ADMIN_ONLY = {
    401: {"model": ErrorResponse, "description": "Missing or invalid token"},
    403: {"model": ErrorResponse, "description": "Admin role required"},
}


# =============================================================================
# Read Endpoints
# =============================================================================
@router.get(
    "",
    response_model=CollectionResponse[BookListData],
    summary="List all books",
    description="Get every book with its authors and reviews, ordered by title.",
)
def list_books(books: BookServiceDep) -> CollectionResponse[BookListData]:
    items = books.list_books()
    return CollectionResponse[BookListData](
        results=len(items),
        data=BookListData(books=items),
    )


@router.get(
    "/{book_id}",
    response_model=SuccessResponse[BookDetailData],
    summary="Get a book by ID",
    description="Retrieve a book with its authors and its reviews (each with its reviewer).",
)
def get_book(book_id: uuid.UUID, books: BookServiceDep) -> SuccessResponse[BookDetailData]:
    book = books.get_book(book_id)
    return SuccessResponse[BookDetailData](data=BookDetailData(book=book))


# =============================================================================
# Write Endpoints (admin)
# =============================================================================
@router.post(
    "",
    response_model=SuccessResponse[BookData],
    status_code=status.HTTP_201_CREATED,
    summary="Create a book",
    description="""
    Create a new book (admin only).

    - **title**: required, 1-200 characters
    - **isbn**: optional, unique
    - **authorIds**: required, at least one existing author ID
    """,
    responses={
        **ADMIN_ONLY,
        409: {"model": ErrorResponse, "description": "ISBN already exists"},
    },
)
@limiter.limit(settings.rate_limit_write)
def create_book(
    request: Request,
    book_data: BookCreate,
    books: BookServiceDep,
    admin: AdminUser,
) -> SuccessResponse[BookData]:
    book = books.create_book(book_data)
    return SuccessResponse[BookData](data=BookData(book=book))


@router.put(
    "/{book_id}",
    response_model=SuccessResponse[BookData],
    summary="Update a book",
    description="Update a book; only the fields sent are changed (admin only).",
    responses={
        **ADMIN_ONLY,
        409: {"model": ErrorResponse, "description": "ISBN already exists"},
    },
)
@limiter.limit(settings.rate_limit_write)
def update_book(
    request: Request,
    book_id: uuid.UUID,
    book_data: BookUpdate,
    books: BookServiceDep,
    admin: AdminUser,
) -> SuccessResponse[BookData]:
    book = books.update_book(book_id, book_data)
    return SuccessResponse[BookData](data=BookData(book=book))


@router.delete(
    "/{book_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a book",
    description="Permanently delete a book and all of its reviews (admin only).",
    responses=ADMIN_ONLY,
)
@limiter.limit(settings.rate_limit_write)
def delete_book(
    request: Request,
    book_id: uuid.UUID,
    books: BookServiceDep,
    admin: AdminUser,
) -> Response:
    books.delete_book(book_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
