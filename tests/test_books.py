"""
Tests for Books API Endpoints

This module tests all CRUD operations for books:
- List books (GET /api/v1/books)
- Get single book (GET /api/v1/books/{id})
- Create book (POST /api/v1/books)
- Update book (PUT /api/v1/books/{id})
- Delete book (DELETE /api/v1/books/{id})

Reads are public; writes need an ADMIN token.
"""

import uuid

from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from bookreview.models import Author, Book, Review, User, book_authors

BOOKS_URL = "/api/v1/books"


# =============================================================================
# Read Endpoints
# =============================================================================
class TestListBooks:
    """Tests for GET /api/v1/books"""

    def test_list_books_empty(self, client: TestClient):
        response = client.get(BOOKS_URL)

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"status": "success", "results": 0, "data": {"books": []}}

    def test_list_books_is_public_and_ordered(
        self, client: TestClient, sample_book: Book, second_book: Book
    ):
        response = client.get(BOOKS_URL)

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["results"] == 2
        titles = [b["title"] for b in body["data"]["books"]]
        assert titles == ["1984", "Animal Farm"]

    def test_list_books_includes_authors_and_reviews(
        self, client: TestClient, sample_review: Review
    ):
        response = client.get(BOOKS_URL)

        book = response.json()["data"]["books"][0]
        assert [a["name"] for a in book["authors"]] == ["George Orwell"]
        assert len(book["reviews"]) == 1
        assert book["reviews"][0]["rating"] == 4


class TestGetBook:
    """Tests for GET /api/v1/books/{book_id}"""

    def test_get_book_success(self, client: TestClient, sample_book: Book):
        response = client.get(f"{BOOKS_URL}/{sample_book.id}")

        assert response.status_code == status.HTTP_200_OK
        book = response.json()["data"]["book"]
        assert book["id"] == str(sample_book.id)
        assert book["title"] == "1984"
        assert book["isbn"] == "9780451524935"
        assert book["authors"][0]["name"] == "George Orwell"
        assert book["reviews"] == []

    def test_review_users_have_no_secret(
        self, client: TestClient, sample_review: Review, sample_user: User
    ):
        response = client.get(f"{BOOKS_URL}/{sample_review.book_id}")

        review = response.json()["data"]["book"]["reviews"][0]
        assert review["user"]["id"] == str(sample_user.id)
        assert review["user"]["name"] == "Jane Reader"
        assert "hashed_password" not in review["user"]
        assert "password" not in review["user"]

    def test_get_book_not_found(self, client: TestClient):
        response = client.get(f"{BOOKS_URL}/{uuid.uuid4()}")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {"status": "error", "message": "Book not found"}

    def test_get_book_invalid_id(self, client: TestClient):
        response = client.get(f"{BOOKS_URL}/12345")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["status"] == "error"


# =============================================================================
# Create
# =============================================================================
class TestCreateBook:
    """Tests for POST /api/v1/books"""

    def test_create_book(self, client: TestClient, admin_headers: dict, sample_author: Author):
        book_data = {
            "title": "Homage to Catalonia",
            "isbn": "9780156421171",
            "authorIds": [str(sample_author.id)],
        }

        response = client.post(BOOKS_URL, json=book_data, headers=admin_headers)

        assert response.status_code == status.HTTP_201_CREATED
        book = response.json()["data"]["book"]
        assert book["title"] == "Homage to Catalonia"
        assert book["isbn"] == "9780156421171"
        assert [a["id"] for a in book["authors"]] == [str(sample_author.id)]
        assert book["reviews"] == []

    def test_create_book_with_several_authors(
        self,
        client: TestClient,
        admin_headers: dict,
        sample_author: Author,
        second_author: Author,
    ):
        response = client.post(
            BOOKS_URL,
            json={
                "title": "Anthology",
                "authorIds": [str(sample_author.id), str(second_author.id)],
            },
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_201_CREATED
        book = response.json()["data"]["book"]
        assert book["isbn"] is None
        assert {a["name"] for a in book["authors"]} == {"George Orwell", "Aldous Huxley"}

    def test_unknown_author_fails_and_persists_nothing(
        self,
        client: TestClient,
        db_session: Session,
        admin_headers: dict,
        sample_author: Author,
    ):
        missing = uuid.uuid4()

        response = client.post(
            BOOKS_URL,
            json={"title": "Ghost Book", "authorIds": [str(sample_author.id), str(missing)]},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["message"] == f"Author(s) not found: {missing}"
        count = db_session.execute(select(func.count()).select_from(Book)).scalar_one()
        assert count == 0

    def test_every_missing_author_is_listed(
        self, client: TestClient, admin_headers: dict, sample_author: Author
    ):
        first, second = uuid.uuid4(), uuid.uuid4()

        response = client.post(
            BOOKS_URL,
            json={"title": "Ghost Book", "authorIds": [str(first), str(sample_author.id), str(second)]},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["message"] == f"Author(s) not found: {first}, {second}"

    def test_duplicate_isbn_conflicts(
        self, client: TestClient, admin_headers: dict, sample_book: Book, sample_author: Author
    ):
        response = client.post(
            BOOKS_URL,
            json={"title": "Copy", "isbn": "9780451524935", "authorIds": [str(sample_author.id)]},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_409_CONFLICT
        assert "9780451524935" in response.json()["message"]

    def test_empty_author_list_rejected(self, client: TestClient, admin_headers: dict):
        response = client.post(
            BOOKS_URL,
            json={"title": "Orphan", "authorIds": []},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "authorIds" in response.json()["message"]

    def test_author_ids_required(self, client: TestClient, admin_headers: dict):
        response = client.post(BOOKS_URL, json={"title": "Orphan"}, headers=admin_headers)

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_invalid_author_id_format(self, client: TestClient, admin_headers: dict):
        response = client.post(
            BOOKS_URL,
            json={"title": "Orphan", "authorIds": ["abc"]},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_title_too_long(self, client: TestClient, admin_headers: dict, sample_author: Author):
        response = client.post(
            BOOKS_URL,
            json={"title": "x" * 201, "authorIds": [str(sample_author.id)]},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_non_admin_forbidden(self, client: TestClient, user_headers: dict, sample_author: Author):
        response = client.post(
            BOOKS_URL,
            json={"title": "Nope", "authorIds": [str(sample_author.id)]},
            headers=user_headers,
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_anonymous_unauthorized(self, client: TestClient, sample_author: Author):
        response = client.post(
            BOOKS_URL,
            json={"title": "Nope", "authorIds": [str(sample_author.id)]},
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


# =============================================================================
# Update
# =============================================================================
class TestUpdateBook:
    """Tests for PUT /api/v1/books/{book_id}"""

    def test_update_title_keeps_authors(
        self, client: TestClient, admin_headers: dict, sample_book: Book, sample_author: Author
    ):
        response = client.put(
            f"{BOOKS_URL}/{sample_book.id}",
            json={"title": "Nineteen Eighty-Four"},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        book = response.json()["data"]["book"]
        assert book["title"] == "Nineteen Eighty-Four"
        assert book["isbn"] == "9780451524935"
        assert [a["id"] for a in book["authors"]] == [str(sample_author.id)]

    def test_author_ids_replace_the_set(
        self,
        client: TestClient,
        db_session: Session,
        admin_headers: dict,
        sample_book: Book,
        second_author: Author,
    ):
        book_id = sample_book.id

        response = client.put(
            f"{BOOKS_URL}/{book_id}",
            json={"authorIds": [str(second_author.id)]},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        assert [a["name"] for a in response.json()["data"]["book"]["authors"]] == ["Aldous Huxley"]

        links = db_session.execute(
            select(book_authors.c.author_id).where(book_authors.c.book_id == book_id)
        ).scalars().all()
        assert links == [second_author.id]

    def test_unknown_author_leaves_book_untouched(
        self,
        client: TestClient,
        admin_headers: dict,
        sample_book: Book,
        sample_author: Author,
    ):
        book_id = sample_book.id

        response = client.put(
            f"{BOOKS_URL}/{book_id}",
            json={"title": "Changed", "authorIds": [str(uuid.uuid4())]},
            headers=admin_headers,
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST

        book = client.get(f"{BOOKS_URL}/{book_id}").json()["data"]["book"]
        assert book["title"] == "1984"
        assert [a["id"] for a in book["authors"]] == [str(sample_author.id)]

    def test_isbn_can_be_cleared(self, client: TestClient, admin_headers: dict, sample_book: Book):
        response = client.put(
            f"{BOOKS_URL}/{sample_book.id}",
            json={"isbn": None},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["data"]["book"]["isbn"] is None

    def test_isbn_taken_by_another_book(
        self, client: TestClient, admin_headers: dict, sample_book: Book, second_book: Book
    ):
        response = client.put(
            f"{BOOKS_URL}/{second_book.id}",
            json={"isbn": "9780451524935"},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_keeping_own_isbn_is_fine(self, client: TestClient, admin_headers: dict, sample_book: Book):
        response = client.put(
            f"{BOOKS_URL}/{sample_book.id}",
            json={"isbn": "9780451524935", "title": "1984 (Signet Classics)"},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_200_OK

    def test_empty_update_rejected(self, client: TestClient, admin_headers: dict, sample_book: Book):
        response = client.put(f"{BOOKS_URL}/{sample_book.id}", json={}, headers=admin_headers)

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_update_not_found(self, client: TestClient, admin_headers: dict):
        response = client.put(
            f"{BOOKS_URL}/{uuid.uuid4()}",
            json={"title": "Whatever"},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_non_admin_forbidden(self, client: TestClient, user_headers: dict, sample_book: Book):
        response = client.put(
            f"{BOOKS_URL}/{sample_book.id}",
            json={"title": "Hacked"},
            headers=user_headers,
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN


# =============================================================================
# Delete
# =============================================================================
class TestDeleteBook:
    """Tests for DELETE /api/v1/books/{book_id}"""

    def test_delete_book_removes_reviews_and_links(
        self,
        client: TestClient,
        db_session: Session,
        admin_headers: dict,
        sample_book: Book,
        sample_review: Review,
        second_user: User,
    ):
        book_id = sample_book.id
        other_review = Review(book_id=book_id, user_id=second_user.id, rating=2)
        db_session.add(other_review)
        db_session.commit()
        review_ids = [sample_review.id, other_review.id]

        response = client.delete(f"{BOOKS_URL}/{book_id}", headers=admin_headers)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert client.get(f"{BOOKS_URL}/{book_id}").status_code == status.HTTP_404_NOT_FOUND
        for review_id in review_ids:
            response = client.get(f"/api/v1/reviews/{review_id}")
            assert response.status_code == status.HTTP_404_NOT_FOUND

        links = db_session.execute(
            select(func.count()).select_from(book_authors).where(book_authors.c.book_id == book_id)
        ).scalar_one()
        assert links == 0

    def test_authors_survive_book_delete(
        self,
        client: TestClient,
        admin_headers: dict,
        sample_book: Book,
        sample_author: Author,
    ):
        author_id = sample_author.id

        client.delete(f"{BOOKS_URL}/{sample_book.id}", headers=admin_headers)

        response = client.get(f"/api/v1/authors/{author_id}", headers=admin_headers)
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["data"]["author"]["books"] == []

    def test_delete_not_found(self, client: TestClient, admin_headers: dict):
        response = client.delete(f"{BOOKS_URL}/{uuid.uuid4()}", headers=admin_headers)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_non_admin_forbidden(self, client: TestClient, user_headers: dict, sample_book: Book):
        response = client.delete(f"{BOOKS_URL}/{sample_book.id}", headers=user_headers)

        assert response.status_code == status.HTTP_403_FORBIDDEN
