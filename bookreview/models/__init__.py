"""
SQLAlchemy Models Package

This package contains all database models for the Book Review API.

Model Relationships:
- Author <-> Book: Many-to-Many through the book_authors junction table
- User -> Review: One-to-Many (a user writes many reviews)
- Book -> Review: One-to-Many (a book receives many reviews)

Import all models here so they are available as
`from bookreview.models import Book, Author` and so Alembic discovers them.
"""

# The order matters for SQLAlchemy to resolve relationships
from bookreview.models.user import User, UserRole
from bookreview.models.author import Author
from bookreview.models.book import Book, book_authors
from bookreview.models.review import Review

__all__ = [
    "User",
    "UserRole",
    "Author",
    "Book",
    "book_authors",
    "Review",
]
