"""
Security Service

Handles password hashing and JWT token operations.

Security Features:
==================
1. Password hashing with bcrypt (passlib), cost factor from settings
2. Signed, expiring JWT access tokens (python-jose, HS256)
3. Constant-time password verification

Usage:
    from bookreview.services.security import hash_password, verify_password

    hashed = hash_password("secret123")
    is_valid = verify_password("secret123", hashed)

    token = create_access_token({"id": str(user.id), "role": user.role.value})
    payload = decode_token(token)  # None when invalid or expired
"""

import logging
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext

from bookreview.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()

# -------------------------------------------------------------------------
# Password Hashing Configuration
# -------------------------------------------------------------------------
# bcrypt__rounds is the cost factor; tests lower it through BCRYPT_ROUNDS
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds,
)


def hash_password(password: str) -> str:
    """
    Hash a plain text password using bcrypt.

    Args:
        password: Plain text password

    Returns:
        Bcrypt hash of the password (salted, so never equal to the input)

    Example:
        >>> hashed = hash_password("secret123")
        >>> hashed.startswith("$2b$")
        True
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a hashed password.

    Args:
        plain_password: The password to verify
        hashed_password: The stored bcrypt hash

    Returns:
        True if password matches, False otherwise
    """
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError as e:
        # Malformed hash in storage: treat as a mismatch
        logger.warning(f"Password verification failed: {e}")
        return False


# -------------------------------------------------------------------------
# JWT Tokens
# -------------------------------------------------------------------------
def create_access_token(
    data: dict,
    expires_delta: timedelta | None = None,
) -> str:
    """
    Create a signed JWT access token.

    Args:
        data: Claims to encode (the API uses {"id": ..., "role": ...})
        expires_delta: Optional custom lifetime; defaults to
            settings.access_token_expire_minutes (one day)

    Returns:
        Encoded JWT token string

    Example:
        >>> token = create_access_token({"id": "abc", "role": "USER"})
        >>> token.count(".") == 2  # header.payload.signature
        True
    """
    to_encode = data.copy()

    if expires_delta is not None:
        expire = datetime.now(UTC) + expires_delta
    else:
        expire = datetime.now(UTC) + timedelta(minutes=settings.access_token_expire_minutes)

    to_encode.update({"exp": expire, "iat": datetime.now(UTC)})

    return jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )


def decode_token(token: str) -> dict | None:
    """
    Decode and validate a JWT token.

    Signature and expiry are both checked.

    Returns:
        Decoded payload if valid, None if invalid, tampered or expired
    """
    try:
        return jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError as e:
        logger.warning(f"JWT decode error: {e}")
        return None
