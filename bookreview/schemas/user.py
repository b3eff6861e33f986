"""
User Pydantic Schemas

These schemas define the shape of data for user and authentication
operations.

Schemas:
- UserCreate: Registration data (name, email, password)
- LoginRequest: Credentials for login
- SafeUser: Public user data (never exposes the password hash)
- AuthenticatedUser: The {id, role} identity carried by an access token and
  passed explicitly into service calls that need authorization

Pydantic v2 Features Used:
- Field(): Define constraints and metadata
- field_validator: Validate and transform field values
- EmailStr: Built-in email validation (email-validator package)
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from bookreview.models.user import UserRole

# bcrypt only looks at the first 72 bytes of a password
PASSWORD_MAX_BYTES = 72
EMAIL_MAX_LENGTH = 100


class UserCreate(BaseModel):
    """
    Schema for user registration.

    Role is not accepted from the client: every registration is a USER.

    Example request body:
    {
        "name": "Jane Reader",
        "email": "jane@example.com",
        "password": "secret123"
    }
    """

    name: str = Field(
        ...,
        min_length=2,
        max_length=100,
        description="Display name",
        examples=["Jane Reader"],
    )

    email: EmailStr = Field(
        ...,
        description="User's email address",
        examples=["jane@example.com"],
    )

    password: str = Field(
        ...,
        min_length=6,
        description="Password (at least 6 characters, at most 72 bytes as UTF-8)",
        examples=["secret123"],
    )

    @field_validator("name")
    @classmethod
    def name_must_not_be_blank(cls, v: str) -> str:
        """Reject names that are only whitespace and strip the rest."""
        if len(v.strip()) < 2:
            raise ValueError("Name must be at least 2 characters long")
        return v.strip()

    @field_validator("password")
    @classmethod
    def password_must_fit_bcrypt(cls, v: str) -> str:
        if len(v.encode("utf-8")) > PASSWORD_MAX_BYTES:
            raise ValueError(f"Password must be at most {PASSWORD_MAX_BYTES} bytes")
        return v

    @field_validator("email")
    @classmethod
    def email_must_fit_column(cls, v: str) -> str:
        if len(v) > EMAIL_MAX_LENGTH:
            raise ValueError(f"Email must be {EMAIL_MAX_LENGTH} characters or less")
        return v


class LoginRequest(BaseModel):
    """Email/password credentials."""

    email: EmailStr = Field(..., description="Registered email address")
    password: str = Field(
        ...,
        min_length=1,
        max_length=PASSWORD_MAX_BYTES,
        description="Account password",
    )


class SafeUser(BaseModel):
    """
    Schema for user responses (what the API returns).

    SECURITY: Never includes the password hash. Every response that embeds
    a user (profile, review author, book review author) goes through this
    schema, which is what keeps the hash from leaking.
    """

    id: uuid.UUID = Field(..., description="Unique user identifier")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="User's email address")
    role: UserRole = Field(..., description="USER or ADMIN")
    created_at: datetime = Field(..., description="When the user registered")
    updated_at: datetime = Field(..., description="When the user was last updated")

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "6f1c2a4e-8d0b-4c47-9a43-1f7d2e5b9c10",
                "name": "Jane Reader",
                "email": "jane@example.com",
                "role": "USER",
                "created_at": "2024-01-15T10:30:00Z",
                "updated_at": "2024-01-15T10:30:00Z",
            }
        },
    )


class AuthenticatedUser(BaseModel):
    """
    Identity of the caller, as embedded in the access token.

    Services receive this explicitly; they never look at the request.
    """

    id: uuid.UUID
    role: UserRole

    model_config = ConfigDict(from_attributes=True, frozen=True)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


# =============================================================================
# Response Payloads
# =============================================================================
class UserData(BaseModel):
    user: SafeUser


class LoginResponse(BaseModel):
    """
    Login envelope: the token sits next to `data`.

    Usage:
        Authorization: Bearer <token>
    """

    status: str = "success"
    token: str = Field(..., description="JWT access token")
    data: UserData
