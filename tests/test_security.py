"""
Tests for Password Hashing and Access Tokens
"""

from datetime import timedelta

from jose import jwt

from bookreview.config import get_settings
from bookreview.services.security import (
    create_access_token,
    decode_token,
    hash_password,
    verify_password,
)


class TestPasswordHashing:
    def test_hash_is_not_plaintext(self):
        hashed = hash_password("secret123")

        assert hashed != "secret123"
        assert hashed.startswith("$2")

    def test_same_password_different_hashes(self):
        """Each hash gets its own salt."""
        assert hash_password("secret123") != hash_password("secret123")

    def test_verify(self):
        hashed = hash_password("secret123")

        assert verify_password("secret123", hashed)
        assert not verify_password("secret124", hashed)

    def test_verify_malformed_hash(self):
        assert verify_password("secret123", "not-a-bcrypt-hash") is False


class TestAccessTokens:
    def test_round_trip(self):
        token = create_access_token({"id": "abc", "role": "USER"})

        payload = decode_token(token)

        assert payload["id"] == "abc"
        assert payload["role"] == "USER"
        assert payload["exp"] > payload["iat"]

    def test_default_lifetime(self):
        settings = get_settings()
        payload = decode_token(create_access_token({"id": "abc"}))

        assert payload["exp"] - payload["iat"] == settings.access_token_expire_minutes * 60

    def test_expired(self):
        token = create_access_token({"id": "abc"}, expires_delta=timedelta(seconds=-1))

        assert decode_token(token) is None

    def test_tampered_payload(self):
        token = create_access_token({"id": "abc", "role": "USER"})
        forged_payload = jwt.encode({"id": "abc", "role": "ADMIN"}, "x" * 32).split(".")[1]
        header, _, signature = token.split(".")

        assert decode_token(f"{header}.{forged_payload}.{signature}") is None

    def test_garbage(self):
        assert decode_token("not-a-token") is None
