"""
pytest Fixtures for Book Review API Tests

This file contains shared fixtures used across all test files.

HOW FIXTURES WORK:
1. pytest discovers fixtures by the @pytest.fixture decorator
2. Tests request fixtures by including them as parameters
3. pytest calls the fixture, provides the return value to the test
4. After the test, cleanup code after yield runs

Database strategy:
- A brand-new in-memory SQLite database per test (function scope)
- Services commit and roll back for real, so there is no outer
  transaction to protect; dropping the database is the cleanup
- Foreign keys are enforced (PRAGMA foreign_keys=ON via build_engine),
  so ON DELETE rules behave as on PostgreSQL
"""

# =============================================================================
# TEST ENVIRONMENT SETUP
# =============================================================================
# IMPORTANT: Set environment variables BEFORE importing the app
# Settings are cached on first import.
import os

os.environ["ENVIRONMENT"] = "testing"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["SECRET_KEY"] = "test-signing-key-for-unit-tests-at-least-32-characters-long"
# Minimum bcrypt cost keeps the suite fast
os.environ["BCRYPT_ROUNDS"] = "4"

from collections.abc import Generator
from datetime import UTC, datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from bookreview.database import Base, build_engine, get_db
from bookreview.main import app
from bookreview.models import Author, Book, Review, User, UserRole
from bookreview.services.security import create_access_token, hash_password

TEST_PASSWORD = "secret123"


# =============================================================================
# DATABASE FIXTURES
# =============================================================================
@pytest.fixture
def engine():
    """
    In-memory SQLite engine, one per test.

    StaticPool keeps the single connection alive; without it the in-memory
    database would disappear between connections.
    """
    test_engine = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=test_engine)

    yield test_engine

    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture
def db_session(engine) -> Generator[Session, None, None]:
    """Session shared by fixtures, services under test and the test client."""
    TestSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
    )
    session = TestSessionLocal()

    yield session

    session.close()


@pytest.fixture
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """
    Create a test client with the test database.

    We override the get_db dependency to use our test session.
    """

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# AUTH HELPERS
# =============================================================================
def auth_header(user: User) -> dict:
    """Authorization header carrying a valid token for `user`."""
    token = create_access_token({"id": str(user.id), "role": user.role.value})
    return {"Authorization": f"Bearer {token}"}


def make_user(
    db_session: Session,
    email: str,
    name: str = "Test User",
    role: UserRole = UserRole.USER,
) -> User:
    user = User(
        name=name,
        email=email,
        hashed_password=hash_password(TEST_PASSWORD),
        role=role,
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================
@pytest.fixture
def sample_user(db_session: Session) -> User:
    """A regular USER."""
    return make_user(db_session, "reader@example.com", name="Jane Reader")


@pytest.fixture
def second_user(db_session: Session) -> User:
    """Another USER, for ownership scenarios."""
    return make_user(db_session, "other@example.com", name="Other Reader")


@pytest.fixture
def admin_user(db_session: Session) -> User:
    """An ADMIN."""
    return make_user(db_session, "admin@example.com", name="Site Admin", role=UserRole.ADMIN)


@pytest.fixture
def user_headers(sample_user: User) -> dict:
    return auth_header(sample_user)


@pytest.fixture
def second_user_headers(second_user: User) -> dict:
    return auth_header(second_user)


@pytest.fixture
def admin_headers(admin_user: User) -> dict:
    return auth_header(admin_user)


@pytest.fixture
def sample_author(db_session: Session) -> Author:
    author = Author(name="George Orwell")
    db_session.add(author)
    db_session.commit()
    db_session.refresh(author)
    return author


@pytest.fixture
def second_author(db_session: Session) -> Author:
    author = Author(name="Aldous Huxley")
    db_session.add(author)
    db_session.commit()
    db_session.refresh(author)
    return author


@pytest.fixture
def sample_book(db_session: Session, sample_author: Author) -> Book:
    """A book with one author and no reviews."""
    book = Book(title="1984", isbn="9780451524935", authors=[sample_author])
    db_session.add(book)
    db_session.commit()
    db_session.refresh(book)
    return book


@pytest.fixture
def second_book(db_session: Session, sample_author: Author) -> Book:
    book = Book(title="Animal Farm", isbn="9780451526342", authors=[sample_author])
    db_session.add(book)
    db_session.commit()
    db_session.refresh(book)
    return book


@pytest.fixture
def sample_review(db_session: Session, sample_book: Book, sample_user: User) -> Review:
    """sample_user's review of sample_book."""
    review = Review(
        book_id=sample_book.id,
        user_id=sample_user.id,
        rating=4,
        comment="I really enjoyed reading this book.",
    )
    db_session.add(review)
    db_session.commit()
    db_session.refresh(review)
    return review


@pytest.fixture
def many_reviews(db_session: Session, sample_book: Book, second_book: Book) -> list[Review]:
    """
    12 reviews of sample_book plus 3 of second_book, by distinct users.

    created_at is spaced one minute apart so "newest first" is unambiguous.
    Returned oldest first.
    """
    base = datetime(2024, 1, 1, tzinfo=UTC)
    reviews = []
    for i in range(15):
        user = make_user(db_session, f"reviewer{i}@example.com", name=f"Reviewer {i}")
        review = Review(
            book_id=sample_book.id if i < 12 else second_book.id,
            user_id=user.id,
            rating=(i % 5) + 1,
            comment=f"Review {i}",
            created_at=base + timedelta(minutes=i),
            updated_at=base + timedelta(minutes=i),
        )
        db_session.add(review)
        reviews.append(review)
    db_session.commit()
    for review in reviews:
        db_session.refresh(review)
    return reviews
