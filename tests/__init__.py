"""
Test Suite for the Book Review API

Test Organization:
- conftest.py: Shared fixtures (test database, client, users, sample data)
- test_auth.py: Registration, login and bearer-token handling
- test_authors.py: /api/v1/authors endpoints
- test_books.py: /api/v1/books endpoints
- test_reviews.py: /api/v1/reviews endpoints
- test_services.py: Service layer without HTTP
- test_security.py: Password hashing and JWT helpers
- test_main.py: Root, health check and error envelope

Running Tests:
    # Run all tests
    pytest

    # Run with coverage
    pytest --cov=bookreview --cov-report=html

    # Run specific file
    pytest tests/test_reviews.py

    # Run with verbose output
    pytest -v
"""
