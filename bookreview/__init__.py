"""
Book Review API Application Package

Package Structure:
- config.py: Application configuration using Pydantic Settings
- database.py: SQLAlchemy engine, session factory and Base
- exceptions.py: Operational errors mapped to HTTP status codes
- main.py: FastAPI application factory and exception handlers
- dependencies.py: Dependency injection (sessions, services, auth)
- models/: SQLAlchemy ORM models
- schemas/: Pydantic request/response schemas
- routers/: API route handlers
- services/: Business logic
"""

__version__ = "0.1.0"
