"""
Author Service

CRUD for authors. Reads are open to any authenticated user; the routers
restrict writes to admins.

Delete-safety: an author credited on at least one book cannot be deleted.
The caller must detach the author from those books first (by updating
each book's authorIds). The RESTRICT foreign key on book_authors.author_id
backs this rule up in the database.
"""

import logging
import uuid

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from bookreview.exceptions import ConflictError, NotFoundError
from bookreview.models import Author, book_authors
from bookreview.schemas.author import (
    AuthorCreate,
    AuthorDetailResponse,
    AuthorResponse,
    AuthorUpdate,
)

logger = logging.getLogger(__name__)

AUTHOR_NOT_FOUND = "Author not found"
AUTHOR_HAS_BOOKS = (
    "Cannot delete author with associated books. "
    "Please remove book associations first."
)


class AuthorService:
    def __init__(self, db: Session) -> None:
        self.db = db

    def create_author(self, data: AuthorCreate) -> AuthorResponse:
        author = Author(name=data.name)
        self.db.add(author)
        self.db.commit()
        self.db.refresh(author)

        logger.info(f"Created author {author.id}: {author.name}")
        return AuthorResponse.model_validate(author)

    def list_authors(self) -> list[AuthorResponse]:
        """All authors, ordered by name ascending."""
        stmt = select(Author).order_by(Author.name.asc(), Author.created_at.asc())
        authors = self.db.execute(stmt).scalars().all()
        return [AuthorResponse.model_validate(a) for a in authors]

    def get_author(
        self,
        author_id: uuid.UUID,
        include_books: bool = False,
    ) -> AuthorResponse | AuthorDetailResponse:
        """
        Get an author by ID.

        Args:
            author_id: Author to fetch
            include_books: Attach the books the author is credited on

        Raises:
            NotFoundError: If the author does not exist
        """
        author = self._get_or_404(author_id, include_books=include_books)
        if include_books:
            return AuthorDetailResponse.model_validate(author)
        return AuthorResponse.model_validate(author)

    def update_author(self, author_id: uuid.UUID, data: AuthorUpdate) -> AuthorResponse:
        """Apply only the fields present in the request."""
        author = self._get_or_404(author_id)

        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(author, field, value)

        self.db.commit()
        self.db.refresh(author)

        logger.info(f"Updated author {author.id}")
        return AuthorResponse.model_validate(author)

    def delete_author(self, author_id: uuid.UUID) -> None:
        """
        Delete an author that has no books.

        Raises:
            NotFoundError: If the author does not exist
            ConflictError: If any book still references the author
        """
        author = self._get_or_404(author_id)

        if self._count_books(author.id) > 0:
            logger.warning(f"Refused to delete author {author.id}: has associated books")
            raise ConflictError(AUTHOR_HAS_BOOKS)

        # Bulk delete leaves book_authors alone, so the RESTRICT foreign key
        # rejects the row if a book was linked after the check
        try:
            self.db.execute(delete(Author).where(Author.id == author.id))
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            logger.warning(f"Author {author_id} gained a book before delete; rejected by database")
            raise ConflictError(AUTHOR_HAS_BOOKS)

        logger.info(f"Deleted author {author_id}")

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------
    def _get_or_404(self, author_id: uuid.UUID, include_books: bool = False) -> Author:
        stmt = select(Author).where(Author.id == author_id)
        if include_books:
            stmt = stmt.options(selectinload(Author.books))

        author = self.db.execute(stmt).scalar_one_or_none()
        if author is None:
            raise NotFoundError(AUTHOR_NOT_FOUND)
        return author

    def _count_books(self, author_id: uuid.UUID) -> int:
        stmt = (
            select(func.count())
            .select_from(book_authors)
            .where(book_authors.c.author_id == author_id)
        )
        return self.db.execute(stmt).scalar_one()
