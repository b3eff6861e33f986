#!/usr/bin/env python3
"""
Database Seed Script

Populates the database with sample authors and books for development.

USAGE:
    # From the project root, with the virtualenv active
    python scripts/seed_data.py            # add sample data
    python scripts/seed_data.py --clear    # wipe catalog and reviews first

Data goes through AuthorService / BookService, so the same validation and
association rules apply as over HTTP. Users are not seeded; create an
admin with scripts/create_admin.py.
"""

import argparse
import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy import delete
from sqlalchemy.orm import Session

from bookreview.database import SessionLocal, create_tables
from bookreview.models import Author, Book, Review, book_authors
from bookreview.schemas import AuthorCreate, BookCreate
from bookreview.services import AuthorService, BookService

AUTHOR_NAMES = [
    "George Orwell",
    "Jane Austen",
    "Ernest Hemingway",
    "Agatha Christie",
    "Isaac Asimov",
    "J.R.R. Tolkien",
    "Terry Pratchett",
    "Neil Gaiman",
]

BOOKS = [
    {"title": "1984", "isbn": "9780451524935", "authors": ["George Orwell"]},
    {"title": "Animal Farm", "isbn": "9780451526342", "authors": ["George Orwell"]},
    {"title": "Pride and Prejudice", "isbn": "9780141439518", "authors": ["Jane Austen"]},
    {"title": "The Old Man and the Sea", "isbn": "9780684801223", "authors": ["Ernest Hemingway"]},
    {"title": "Murder on the Orient Express", "isbn": "9780062693662", "authors": ["Agatha Christie"]},
    {"title": "Foundation", "isbn": "9780553293357", "authors": ["Isaac Asimov"]},
    {"title": "The Hobbit", "isbn": "9780547928227", "authors": ["J.R.R. Tolkien"]},
    {"title": "I, Robot", "isbn": "9780553382563", "authors": ["Isaac Asimov"]},
    {"title": "Good Omens", "isbn": "9780060853983", "authors": ["Terry Pratchett", "Neil Gaiman"]},
]


def clear_data(db: Session) -> None:
    """Remove reviews, books, links and authors (users are kept)."""
    print("Clearing existing catalog data...")
    db.execute(delete(Review))
    db.execute(delete(book_authors))
    db.execute(delete(Book))
    db.execute(delete(Author))
    db.commit()
    print("Data cleared.")


def create_authors(db: Session) -> dict:
    """Create sample authors, keyed by name."""
    print("Creating authors...")
    service = AuthorService(db)
    authors = {name: service.create_author(AuthorCreate(name=name)) for name in AUTHOR_NAMES}
    print(f"Created {len(authors)} authors.")
    return authors


def create_books(db: Session, authors: dict) -> list:
    """Create sample books linked to the authors above."""
    print("Creating books...")
    service = BookService(db)

    books = []
    for data in BOOKS:
        payload = BookCreate(
            title=data["title"],
            isbn=data["isbn"],
            author_ids=[authors[name].id for name in data["authors"]],
        )
        books.append(service.create_book(payload))

    print(f"Created {len(books)} books.")
    return books


def seed_database(clear_existing: bool = False) -> None:
    """
    Seed the database.

    Args:
        clear_existing: If True, clears the catalog before seeding.
    """
    print("=" * 60)
    print("Starting database seed...")
    print("=" * 60)

    create_tables()
    db = SessionLocal()

    try:
        if clear_existing:
            clear_data(db)

        authors = create_authors(db)
        books = create_books(db, authors)

        print("=" * 60)
        print("Database seeding completed successfully!")
        print("=" * 60)
        print("\nSummary:")
        print(f"  - Authors: {len(authors)}")
        print(f"  - Books: {len(books)}")

    except Exception as e:
        print(f"Error seeding database: {e}")
        db.rollback()
        raise
    finally:
        db.close()


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed the Book Review database with sample data")
    parser.add_argument(
        "--clear",
        action="store_true",
        help="delete existing authors, books and reviews first",
    )
    args = parser.parse_args()
    seed_database(clear_existing=args.clear)


if __name__ == "__main__":
    main()
