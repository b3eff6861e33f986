"""
API Routers Package

This package contains FastAPI routers that handle API endpoints.

WHY Routers?
============
1. Organization: Group related endpoints together
2. Modularity: Each router can have its own prefix, tags, dependencies
3. Maintainability: Easy to find and modify endpoint code

Router Structure:
- auth.py: /api/v1/auth/* endpoints (registration, login, profile)
- authors.py: /api/v1/authors/* endpoints
- books.py: /api/v1/books/* endpoints
- reviews.py: /api/v1/reviews/* endpoints

Each router is imported and registered in main.py.
"""

from bookreview.routers.auth import router as auth_router
from bookreview.routers.authors import router as authors_router
from bookreview.routers.books import router as books_router
from bookreview.routers.reviews import router as reviews_router

__all__ = [
    "auth_router",
    "authors_router",
    "books_router",
    "reviews_router",
]
