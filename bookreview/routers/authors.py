"""
Authors Router

CRUD endpoints for authors.

Every endpoint needs a bearer token; creating, updating and deleting
additionally need the ADMIN role.
"""

import uuid

from fastapi import APIRouter, Depends, Request, Response, status

from bookreview.config import get_settings
from bookreview.dependencies import AdminUser, AuthorServiceDep, get_current_user
from bookreview.schemas import (
    AuthorCreate,
    AuthorData,
    AuthorDetailData,
    AuthorListData,
    AuthorUpdate,
    CollectionResponse,
    ErrorResponse,
    SuccessResponse,
)
from bookreview.services.rate_limiter import limiter

settings = get_settings()

router = APIRouter(
    prefix="/authors",
    tags=["Authors"],
    dependencies=[Depends(get_current_user)],
    responses={
        401: {"model": ErrorResponse, "description": "Missing or invalid token"},
        404: {"model": ErrorResponse, "description": "Author not found"},
    },
)


@router.get(
    "",
    response_model=CollectionResponse[AuthorListData],
    summary="List all authors",
    description="Get every author, ordered by name.",
)
def list_authors(authors: AuthorServiceDep) -> CollectionResponse[AuthorListData]:
    items = authors.list_authors()
    return CollectionResponse[AuthorListData](
        results=len(items),
        data=AuthorListData(authors=items),
    )


@router.get(
    "/{author_id}",
    response_model=SuccessResponse[AuthorDetailData],
    summary="Get an author by ID",
    description="Retrieve an author together with the books they are credited on.",
)
def get_author(
    author_id: uuid.UUID,
    authors: AuthorServiceDep,
) -> SuccessResponse[AuthorDetailData]:
    author = authors.get_author(author_id, include_books=True)
    return SuccessResponse[AuthorDetailData](data=AuthorDetailData(author=author))


@router.post(
    "",
    response_model=SuccessResponse[AuthorData],
    status_code=status.HTTP_201_CREATED,
    summary="Create an author",
    description="Add a new author (admin only).",
    responses={403: {"model": ErrorResponse, "description": "Admin role required"}},
)
@limiter.limit(settings.rate_limit_write)
def create_author(
    request: Request,
    author_data: AuthorCreate,
    authors: AuthorServiceDep,
    admin: AdminUser,
) -> SuccessResponse[AuthorData]:
    author = authors.create_author(author_data)
    return SuccessResponse[AuthorData](data=AuthorData(author=author))


@router.put(
    "/{author_id}",
    response_model=SuccessResponse[AuthorData],
    summary="Update an author",
    description="Update an author's fields; only the fields sent are changed (admin only).",
    responses={403: {"model": ErrorResponse, "description": "Admin role required"}},
)
@limiter.limit(settings.rate_limit_write)
def update_author(
    request: Request,
    author_id: uuid.UUID,
    author_data: AuthorUpdate,
    authors: AuthorServiceDep,
    admin: AdminUser,
) -> SuccessResponse[AuthorData]:
    author = authors.update_author(author_id, author_data)
    return SuccessResponse[AuthorData](data=AuthorData(author=author))


@router.delete(
    "/{author_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete an author",
    description="""
    Permanently delete an author (admin only).

    Authors still credited on a book cannot be deleted (409); remove them
    from those books first.
    """,
    responses={
        403: {"model": ErrorResponse, "description": "Admin role required"},
        409: {"model": ErrorResponse, "description": "Author has associated books"},
    },
)
@limiter.limit(settings.rate_limit_write)
def delete_author(
    request: Request,
    author_id: uuid.UUID,
    authors: AuthorServiceDep,
    admin: AdminUser,
) -> Response:
    authors.delete_author(author_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
