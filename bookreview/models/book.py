"""
Book Model

The central model of the catalog.

This file also contains the association table for the many-to-many
relationship between books and authors (book_authors).

WHY an Association Table?
=========================
In relational databases, many-to-many relationships require a "junction"
table holding a foreign key to each side. book_authors stores nothing but
the link, so it is a plain Table rather than a model class: the rows have
no identity or lifecycle of their own.

Delete rules:
- book_id is ON DELETE CASCADE: removing a book removes its links
- author_id is ON DELETE RESTRICT: an author with books cannot be removed
"""

import uuid
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import Column, DateTime, ForeignKey, String, Table, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookreview.database import Base

if TYPE_CHECKING:
    from bookreview.models.author import Author
    from bookreview.models.review import Review


# =============================================================================
# Association Tables
# =============================================================================
book_authors = Table(
    "book_authors",
    Base.metadata,
    Column(
        "book_id",
        Uuid,
        ForeignKey("books.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "author_id",
        Uuid,
        ForeignKey("authors.id", ondelete="RESTRICT"),
        primary_key=True,
        index=True,
    ),
    comment="Association table linking books to their authors",
)


class Book(Base):
    """
    Book model representing books in the catalog.

    Table: books

    Fields:
    - title: Book title (required, 1-200 chars)
    - isbn: International Standard Book Number (optional, unique)

    Relationships:
    - authors: Many-to-Many (a book has one or more authors)
    - reviews: One-to-Many (reviews are deleted together with the book)

    Example:
        book = Book(title="1984", isbn="9780451524935", authors=[orwell])
    """

    __tablename__ = "books"

    # -------------------------------------------------------------------------
    # Primary Key
    # -------------------------------------------------------------------------
    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    # -------------------------------------------------------------------------
    # Basic Fields
    # -------------------------------------------------------------------------
    title: Mapped[str] = mapped_column(
        String(200),
        index=True,
        nullable=False,
        comment="Book title"
    )

    # Optional, but no two books may share an ISBN.
    # NULLs don't collide in a unique index, so many books can omit it.
    isbn: Mapped[str | None] = mapped_column(
        String(20),
        unique=True,
        index=True,
        nullable=True,
        comment="International Standard Book Number"
    )

    # -------------------------------------------------------------------------
    # Timestamps
    # -------------------------------------------------------------------------
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
        nullable=False,
    )

    # -------------------------------------------------------------------------
    # Relationships
    # -------------------------------------------------------------------------
    # back_populates creates a bidirectional relationship:
    #   book.authors  -> list of authors
    #   author.books  -> list of books
    authors: Mapped[list["Author"]] = relationship(
        "Author",
        secondary=book_authors,
        back_populates="books",
    )

    # BookService.delete_book removes reviews explicitly; passive_deletes
    # keeps the ORM from nulling review.book_id on its own.
    reviews: Mapped[list["Review"]] = relationship(
        "Review",
        back_populates="book",
        passive_deletes=True,
        order_by="Review.created_at.desc()",
    )

    def __repr__(self) -> str:
        return f"Book(id={self.id}, title='{self.title}', isbn='{self.isbn}')"
