"""
Authentication Service

Handles user registration, login and token-based identity.

Security Features:
=================
1. Passwords stored only as bcrypt hashes (see services/security.py)
2. Login failures use one generic message, so callers cannot probe which
   emails are registered
3. Tokens carry {id, role} and expire (settings.access_token_expire_minutes)
4. Only SafeUser leaves this service; the hash never does

Usage:
    auth = AuthService(db)
    user = auth.register("Jane Reader", "jane@example.com", "secret123")
    user, token = auth.login("jane@example.com", "secret123")
"""

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bookreview.exceptions import ConflictError, UnauthorizedError
from bookreview.models import User, UserRole
from bookreview.schemas.user import SafeUser
from bookreview.services.security import (
    create_access_token,
    decode_token,
    hash_password,
    verify_password,
)

logger = logging.getLogger(__name__)

EMAIL_IN_USE = "Email already in use"
INVALID_CREDENTIALS = "Invalid email or password"
INVALID_TOKEN = "Invalid or expired token."
USER_GONE = "User associated with this token no longer exists."


class AuthService:
    """Credential operations bound to one database session."""

    def __init__(self, db: Session) -> None:
        self.db = db

    # -------------------------------------------------------------------------
    # Registration
    # -------------------------------------------------------------------------
    def register(self, name: str, email: str, password: str) -> SafeUser:
        """
        Create a new USER account.

        Raises:
            ConflictError: If the email is already registered
        """
        return self._create_user(name, email, password, UserRole.USER)

    def create_admin(self, name: str, email: str, password: str) -> SafeUser:
        """
        Create an ADMIN account.

        Not reachable over HTTP; used by scripts/create_admin.py.
        """
        return self._create_user(name, email, password, UserRole.ADMIN)

    def _create_user(self, name: str, email: str, password: str, role: UserRole) -> SafeUser:
        # Pre-check gives the friendly message; the unique index decides races
        if self._get_by_email(email) is not None:
            raise ConflictError(EMAIL_IN_USE)

        user = User(
            name=name,
            email=email,
            hashed_password=hash_password(password),
            role=role,
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            logger.warning(f"Duplicate email rejected by database: {email}")
            raise ConflictError(EMAIL_IN_USE)
        self.db.refresh(user)

        logger.info(f"Registered {role.value} account: {user.email} ({user.id})")
        return SafeUser.model_validate(user)

    # -------------------------------------------------------------------------
    # Login
    # -------------------------------------------------------------------------
    def login(self, email: str, password: str) -> tuple[SafeUser, str]:
        """
        Verify credentials and issue an access token.

        Returns:
            Tuple of (user, token)

        Raises:
            UnauthorizedError: Same message for unknown email and wrong password
        """
        user = self._get_by_email(email)

        if user is None or not verify_password(password, user.hashed_password):
            logger.warning(f"Failed login attempt for {email}")
            raise UnauthorizedError(INVALID_CREDENTIALS)

        token = create_access_token({"id": str(user.id), "role": user.role.value})
        logger.info(f"User logged in: {user.id}")
        return SafeUser.model_validate(user), token

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------
    def find_by_id(self, user_id: uuid.UUID | str) -> SafeUser | None:
        """Return the user, or None if the id is unknown or malformed."""
        if not isinstance(user_id, uuid.UUID):
            try:
                user_id = uuid.UUID(str(user_id))
            except ValueError:
                return None

        user = self.db.get(User, user_id)
        if user is None:
            return None
        return SafeUser.model_validate(user)

    def authenticate_token(self, token: str) -> SafeUser:
        """
        Resolve a bearer token to the user it was issued for.

        Raises:
            UnauthorizedError: Token invalid/expired, or its user was deleted
        """
        payload = decode_token(token)
        if payload is None or "id" not in payload:
            raise UnauthorizedError(INVALID_TOKEN)

        user = self.find_by_id(payload["id"])
        if user is None:
            raise UnauthorizedError(USER_GONE)
        return user

    def _get_by_email(self, email: str) -> User | None:
        stmt = select(User).where(User.email == email)
        return self.db.execute(stmt).scalar_one_or_none()
