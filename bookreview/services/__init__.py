"""
Services Package

Business logic, kept separate from HTTP handling (routers):
- Reusable outside a request (scripts, tests)
- Testable with nothing but a database session

Each service is a class constructed with the Session it works on. Services
raise bookreview.exceptions errors and return Pydantic response schemas,
so ORM objects (and password hashes) never leave this layer.

Current services:
- auth.py: AuthService (registration, login, token authentication)
- authors.py: AuthorService (author CRUD, delete-safety)
- books.py: BookService (book CRUD, author association rules)
- reviews.py: ReviewService (reviews, ownership checks, pagination)
- rate_limiter.py: Rate limiting with slowapi
- security.py: Password hashing and JWT utilities
"""

from bookreview.services.auth import AuthService
from bookreview.services.authors import AuthorService
from bookreview.services.books import BookService
from bookreview.services.reviews import ReviewService

__all__ = ["AuthService", "AuthorService", "BookService", "ReviewService"]
