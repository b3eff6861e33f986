"""
Database Configuration Module

This module sets up SQLAlchemy 2.0 for the Book Review API.

We use SYNCHRONOUS SQLAlchemy sessions. FastAPI runs plain `def` endpoints
in its worker thread pool, so one slow query never blocks the event loop.

Session Management Pattern
==========================
We use the "session per request" pattern:
1. Request arrives → create a new session
2. Services use that session for every database operation in the request
3. Services commit once per logical operation; errors roll back
4. Close session when request ends

Consistency rules that matter under concurrency (unique email, unique ISBN,
one review per user per book) live in the schema as unique constraints.
"""

from collections.abc import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from bookreview.config import get_settings

settings = get_settings()


# =============================================================================
# Database Engine
# =============================================================================
def build_engine(database_url: str, **overrides) -> Engine:
    """
    Create an engine with arguments suited to the database backend.

    PostgreSQL gets a sized connection pool with pre-ping. SQLite does not
    accept pool sizing arguments and needs `check_same_thread=False` because
    FastAPI hands the session to worker threads.

    Foreign keys are switched on for every SQLite connection so the
    ON DELETE rules declared on the models are enforced the same way they
    are on PostgreSQL.
    """
    if database_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
    else:
        kwargs = {
            "pool_size": settings.db_pool_size,
            "max_overflow": settings.db_max_overflow,
            "pool_pre_ping": True,
        }
    kwargs["echo"] = settings.debug
    kwargs.update(overrides)

    new_engine = create_engine(database_url, **kwargs)

    if database_url.startswith("sqlite"):
        @event.listens_for(new_engine, "connect")
        def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return new_engine


engine = build_engine(settings.database_url)


# =============================================================================
# Session Factory
# =============================================================================
# - autocommit=False: services decide when a unit of work is committed
# - autoflush=False: don't auto-flush before queries (more predictable behavior)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)


# =============================================================================
# Base Model Class
# =============================================================================
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Alembic uses Base.metadata to discover the tables for migrations.
    """
    pass


# =============================================================================
# Dependency Injection
# =============================================================================
def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI.

    Code before yield creates the session, code after yield closes it.
    Closing a session with an open transaction rolls it back, so a request
    that fails half-way leaves nothing behind.

    Yields:
        SQLAlchemy Session instance
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# =============================================================================
# Utility Functions
# =============================================================================
def create_tables() -> None:
    """
    Create all database tables.

    Useful for development and tests. In production, use Alembic migrations.
    """
    # Models must be imported so they register with Base.metadata
    import bookreview.models  # noqa: F401

    Base.metadata.create_all(bind=engine)


def drop_tables() -> None:
    """
    Drop all database tables.

    DANGER: This deletes all data! Never use in production.
    """
    import bookreview.models  # noqa: F401

    Base.metadata.drop_all(bind=engine)
