"""
FastAPI Dependencies Module

Dependencies are reusable components injected into route handlers.
FastAPI's Depends() function manages their lifecycle.

WHY Dependency Injection?
=========================
1. Reusability: Write once, use in many routes
2. Testing: Easy to swap dependencies in tests (app.dependency_overrides)
3. Separation of Concerns: Routes stay thin, services hold the logic
4. Lifecycle Management: FastAPI handles creation/cleanup

Provided here:
- Database session (per-request)
- Service objects built on that session
- Pagination parameters
- Bearer token authentication and the admin guard
"""

from typing import Annotated

from fastapi import Depends, Query
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from bookreview.database import get_db
from bookreview.exceptions import ForbiddenError, UnauthorizedError
from bookreview.models import UserRole
from bookreview.schemas.user import AuthenticatedUser, SafeUser
from bookreview.services import AuthorService, AuthService, BookService, ReviewService

# =============================================================================
# Type Aliases with Annotated
# =============================================================================
# Instead of writing:
#   def get_books(db: Session = Depends(get_db)):
#
# You can write:
#   def get_books(db: DbSession):

DbSession = Annotated[Session, Depends(get_db)]


# =============================================================================
# Services
# =============================================================================
# One instance per request, all sharing the request's session.
def get_auth_service(db: DbSession) -> AuthService:
    return AuthService(db)


def get_author_service(db: DbSession) -> AuthorService:
    return AuthorService(db)


def get_book_service(db: DbSession) -> BookService:
    return BookService(db)


def get_review_service(
    db: DbSession,
    books: Annotated[BookService, Depends(get_book_service)],
) -> ReviewService:
    return ReviewService(db, books)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
AuthorServiceDep = Annotated[AuthorService, Depends(get_author_service)]
BookServiceDep = Annotated[BookService, Depends(get_book_service)]
ReviewServiceDep = Annotated[ReviewService, Depends(get_review_service)]


# =============================================================================
# Pagination Parameters
# =============================================================================
class PaginationParams:
    """
    Common pagination parameters for list endpoints.

    - page: Which page to return (1-indexed for user-friendliness)
    - limit: How many items per page

    Usage in route:
        @router.get("/reviews")
        def list_reviews(pagination: Pagination):
            ...
    """

    def __init__(
        self,
        page: int = Query(
            default=1,
            ge=1,
            description="Page number (1-indexed)",
            examples=[1, 2, 3],
        ),
        limit: int = Query(
            default=10,
            ge=1,
            le=100,
            description="Number of items per page (max 100)",
            examples=[10, 25, 50],
        ),
    ) -> None:
        self.page = page
        self.limit = limit


Pagination = Annotated[PaginationParams, Depends()]


# =============================================================================
# JWT Authentication
# =============================================================================
# HTTPBearer extracts the token from "Authorization: Bearer <token>" and adds
# the "Authorize" button to Swagger UI. auto_error=False so a missing header
# reaches get_current_user and gets our own 401 message and envelope.

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    auth: AuthServiceDep,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> SafeUser:
    """
    Resolve the bearer token to the user it was issued for.

    Raises:
        UnauthorizedError: No token, invalid/expired token, or deleted user
    """
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Authentication required. No token provided.")

    return auth.authenticate_token(credentials.credentials)


CurrentUser = Annotated[SafeUser, Depends(get_current_user)]


def get_current_admin(current_user: CurrentUser) -> SafeUser:
    """
    Require the ADMIN role.

    Raises:
        ForbiddenError: If the user is authenticated but not an admin
    """
    if current_user.role != UserRole.ADMIN:
        raise ForbiddenError(
            f"Forbidden: Role '{current_user.role.value}' is not authorized for this action."
        )
    return current_user


AdminUser = Annotated[SafeUser, Depends(get_current_admin)]


def get_actor(current_user: CurrentUser) -> AuthenticatedUser:
    """The caller's {id, role}, as passed to services that authorize."""
    return AuthenticatedUser(id=current_user.id, role=current_user.role)


Actor = Annotated[AuthenticatedUser, Depends(get_actor)]
