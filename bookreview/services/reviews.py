"""
Review Service

Create, read, update and delete book reviews.

Business Rules:
- A user can review a book only once. The (user_id, book_id) unique
  constraint is authoritative; the pre-check only exists to give the
  friendly message without hitting the database error first.
- Only the review's owner or an ADMIN may update or delete it. The acting
  user is passed in explicitly as an AuthenticatedUser.
- Lists are ordered newest first and paginated with offset/limit.
"""

import logging
import uuid

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from bookreview.exceptions import ConflictError, ForbiddenError, NotFoundError
from bookreview.models import Review
from bookreview.schemas.review import ReviewCreate, ReviewResponse, ReviewUpdate
from bookreview.schemas.user import AuthenticatedUser
from bookreview.services.books import BOOK_NOT_FOUND, BookService

logger = logging.getLogger(__name__)

REVIEW_NOT_FOUND = "Review not found"
ALREADY_REVIEWED = "You have already submitted a review for this book"


class ReviewService:
    """
    Review operations.

    Needs a BookService to check that the reviewed book exists.
    """

    def __init__(self, db: Session, books: BookService) -> None:
        self.db = db
        self.books = books

    def create_review(self, data: ReviewCreate, actor: AuthenticatedUser) -> ReviewResponse:
        """
        Create a review owned by the acting user.

        Raises:
            NotFoundError: If the book does not exist
            ConflictError: If the user already reviewed this book
        """
        if not self.books.book_exists(data.book_id):
            raise NotFoundError(BOOK_NOT_FOUND)

        if self._find_existing(actor.id, data.book_id) is not None:
            raise ConflictError(ALREADY_REVIEWED)

        review = Review(
            rating=data.rating,
            comment=data.comment,
            book_id=data.book_id,
            user_id=actor.id,
        )
        self.db.add(review)
        try:
            self.db.commit()
        except IntegrityError as e:
            # Either a concurrent duplicate or the book vanished meanwhile
            self.db.rollback()
            logger.warning(
                f"Review insert rejected by database: user={actor.id} book={data.book_id}: {e.orig}"
            )
            if not self.books.book_exists(data.book_id):
                raise NotFoundError(BOOK_NOT_FOUND)
            raise ConflictError(ALREADY_REVIEWED)

        logger.info(f"Review {review.id} created by user {actor.id} for book {data.book_id}")
        return self.get_review(review.id)

    def list_reviews(
        self,
        book_id: uuid.UUID | None = None,
        user_id: uuid.UUID | None = None,
        page: int = 1,
        limit: int = 10,
    ) -> tuple[list[ReviewResponse], int]:
        """
        List reviews, newest first.

        Filters combine with AND when both are given.

        Returns:
            Tuple of (reviews on this page, total number of matching reviews)
        """
        filters = []
        if book_id is not None:
            filters.append(Review.book_id == book_id)
        if user_id is not None:
            filters.append(Review.user_id == user_id)

        count_stmt = select(func.count()).select_from(Review).where(*filters)
        total = self.db.execute(count_stmt).scalar_one()

        stmt = (
            select(Review)
            .options(selectinload(Review.user), selectinload(Review.book))
            .where(*filters)
            .order_by(Review.created_at.desc(), Review.id)
            .offset((page - 1) * limit)
            .limit(limit)
        )
        reviews = self.db.execute(stmt).scalars().all()

        return [ReviewResponse.model_validate(r) for r in reviews], total

    def get_review(self, review_id: uuid.UUID) -> ReviewResponse:
        return ReviewResponse.model_validate(self._get_or_404(review_id))

    def update_review(
        self,
        review_id: uuid.UUID,
        data: ReviewUpdate,
        actor: AuthenticatedUser,
    ) -> ReviewResponse:
        """
        Update rating and/or comment.

        Raises:
            NotFoundError: If the review does not exist
            ForbiddenError: If the actor is neither the owner nor an admin
        """
        review = self._get_or_404(review_id)
        self._check_can_modify(review, actor, "update")

        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(review, field, value)

        self.db.commit()

        logger.info(f"Review {review.id} updated by user {actor.id}")
        return self.get_review(review.id)

    def delete_review(self, review_id: uuid.UUID, actor: AuthenticatedUser) -> None:
        """Same authorization rule as update_review."""
        review = self._get_or_404(review_id)
        self._check_can_modify(review, actor, "delete")

        self.db.delete(review)
        self.db.commit()

        logger.info(f"Review {review_id} deleted by user {actor.id}")

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------
    def _get_or_404(self, review_id: uuid.UUID) -> Review:
        stmt = (
            select(Review)
            .options(selectinload(Review.user), selectinload(Review.book))
            .where(Review.id == review_id)
            .execution_options(populate_existing=True)
        )
        review = self.db.execute(stmt).scalar_one_or_none()
        if review is None:
            raise NotFoundError(REVIEW_NOT_FOUND)
        return review

    def _find_existing(self, user_id: uuid.UUID, book_id: uuid.UUID) -> uuid.UUID | None:
        stmt = select(Review.id).where(Review.user_id == user_id, Review.book_id == book_id)
        return self.db.execute(stmt).scalar_one_or_none()

    @staticmethod
    def _check_can_modify(review: Review, actor: AuthenticatedUser, action: str) -> None:
        if review.user_id != actor.id and not actor.is_admin:
            logger.warning(f"User {actor.id} denied {action} on review {review.id}")
            raise ForbiddenError(f"Forbidden: You are not authorized to {action} this review")
