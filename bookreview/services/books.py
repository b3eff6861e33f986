"""
Book Service

CRUD for books and their author associations.

Association rules:
==================
- A book always has at least one author, given as a list of author IDs
- Author IDs are resolved all-or-nothing: if any ID is unknown, the whole
  operation fails with 400 and the message lists every unknown ID
- On update, authorIds REPLACES the author set; leaving it out keeps the
  current authors
- Deleting a book deletes its reviews and its junction rows explicitly,
  all in the same transaction as the book itself

Every write commits exactly once, so a failure part-way through leaves
nothing behind.
"""

import logging
import uuid
from collections.abc import Iterable

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from bookreview.exceptions import BadRequestError, ConflictError, NotFoundError
from bookreview.models import Author, Book, Review, book_authors
from bookreview.schemas.book import (
    BookCreate,
    BookDetailResponse,
    BookResponse,
    BookUpdate,
)

logger = logging.getLogger(__name__)

BOOK_NOT_FOUND = "Book not found"


def _isbn_conflict(isbn: str | None) -> ConflictError:
    if isbn:
        return ConflictError(f"A book with ISBN {isbn} already exists")
    return ConflictError("A book with this ISBN already exists")


class BookService:
    def __init__(self, db: Session) -> None:
        self.db = db

    # =========================================================================
    # Association helpers
    # =========================================================================
    def resolve_authors(self, author_ids: Iterable[uuid.UUID]) -> list[Author]:
        """
        Load the authors for a list of IDs, all or nothing.

        Duplicate IDs are collapsed. The result keeps the order of first
        appearance in the input.

        Raises:
            BadRequestError: Listing every ID that does not exist
        """
        unique_ids = list(dict.fromkeys(author_ids))

        stmt = select(Author).where(Author.id.in_(unique_ids))
        found = {author.id: author for author in self.db.execute(stmt).scalars()}

        missing = [author_id for author_id in unique_ids if author_id not in found]
        if missing:
            ids = ", ".join(str(author_id) for author_id in missing)
            raise BadRequestError(f"Author(s) not found: {ids}")

        return [found[author_id] for author_id in unique_ids]

    def book_exists(self, book_id: uuid.UUID) -> bool:
        stmt = select(Book.id).where(Book.id == book_id)
        return self.db.execute(stmt).first() is not None

    # =========================================================================
    # CRUD
    # =========================================================================
    def create_book(self, data: BookCreate) -> BookResponse:
        """
        Create a book with its authors in one transaction.

        Raises:
            BadRequestError: If any author ID does not exist
            ConflictError: If the ISBN is already used by another book
        """
        if data.isbn is not None and self._isbn_taken(data.isbn):
            raise _isbn_conflict(data.isbn)

        authors = self.resolve_authors(data.author_ids)

        book = Book(title=data.title, isbn=data.isbn, authors=authors)
        self.db.add(book)
        self._commit_or_conflict(data.isbn)

        logger.info(f"Created book {book.id}: '{book.title}' with {len(authors)} author(s)")
        return BookResponse.model_validate(self._get_or_404(book.id))

    def list_books(self) -> list[BookResponse]:
        """All books with authors and reviews, ordered by title ascending."""
        stmt = (
            select(Book)
            .options(selectinload(Book.authors), selectinload(Book.reviews))
            .order_by(Book.title.asc(), Book.created_at.asc())
        )
        books = self.db.execute(stmt).scalars().all()
        return [BookResponse.model_validate(book) for book in books]

    def get_book(self, book_id: uuid.UUID) -> BookDetailResponse:
        """
        Get a book with its authors, and its reviews with their users.

        Review users go through SafeUser, so no password hash is included.
        """
        book = self._get_or_404(book_id, with_review_users=True)
        return BookDetailResponse.model_validate(book)

    def update_book(self, book_id: uuid.UUID, data: BookUpdate) -> BookResponse:
        """
        Update a book; only supplied fields change.

        All checks run before anything is modified, and the changes are
        committed together.

        Raises:
            NotFoundError: If the book does not exist
            BadRequestError: If authorIds contains unknown IDs
            ConflictError: If the new ISBN belongs to another book
        """
        book = self._get_or_404(book_id)
        changes = data.model_dump(exclude_unset=True)

        new_isbn = changes.get("isbn")
        if new_isbn is not None and new_isbn != book.isbn and self._isbn_taken(new_isbn, book.id):
            raise _isbn_conflict(new_isbn)

        authors = None
        if "author_ids" in changes:
            authors = self.resolve_authors(changes.pop("author_ids"))

        for field, value in changes.items():
            setattr(book, field, value)
        if authors is not None:
            self._replace_authors(book, authors)

        self._commit_or_conflict(new_isbn)

        logger.info(f"Updated book {book.id} (fields: {', '.join(data.model_fields_set)})")
        return BookResponse.model_validate(self._get_or_404(book.id))

    def delete_book(self, book_id: uuid.UUID) -> None:
        """
        Delete a book, its reviews and its author links.

        Raises:
            NotFoundError: If the book does not exist
        """
        if not self.book_exists(book_id):
            raise NotFoundError(BOOK_NOT_FOUND)

        try:
            reviews = self.db.execute(delete(Review).where(Review.book_id == book_id))
            self.db.execute(delete(book_authors).where(book_authors.c.book_id == book_id))
            self.db.execute(delete(Book).where(Book.id == book_id))
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(f"Deleted book {book_id} and {reviews.rowcount} review(s)")

    # =========================================================================
    # Helpers
    # =========================================================================
    def _get_or_404(self, book_id: uuid.UUID, with_review_users: bool = False) -> Book:
        reviews = selectinload(Book.reviews)
        if with_review_users:
            reviews = reviews.selectinload(Review.user)

        stmt = (
            select(Book)
            .options(selectinload(Book.authors), reviews)
            .where(Book.id == book_id)
            .execution_options(populate_existing=True)
        )
        book = self.db.execute(stmt).scalar_one_or_none()
        if book is None:
            raise NotFoundError(BOOK_NOT_FOUND)
        return book

    def _replace_authors(self, book: Book, authors: list[Author]) -> None:
        # Assigning the collection makes the ORM diff the junction rows:
        # links not in `authors` are deleted, new ones inserted.
        book.authors = authors

    def _isbn_taken(self, isbn: str, exclude_id: uuid.UUID | None = None) -> bool:
        stmt = select(Book.id).where(Book.isbn == isbn)
        if exclude_id is not None:
            stmt = stmt.where(Book.id != exclude_id)
        return self.db.execute(stmt).first() is not None

    def _commit_or_conflict(self, isbn: str | None) -> None:
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            logger.warning(f"Duplicate ISBN rejected by database: {isbn}")
            raise _isbn_conflict(isbn)
