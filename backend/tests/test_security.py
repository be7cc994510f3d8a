"""Tests for password hashing and access tokens."""
from datetime import timedelta

import jwt

from kosaquest.infra.security.jwt import create_access_token, decode_token
from kosaquest.infra.security.password import get_password_hash, verify_password


class TestPasswords:
    def test_hash_and_verify(self):
        hashed = get_password_hash("secret123")
        assert hashed != "secret123"
        assert verify_password("secret123", hashed)
        assert not verify_password("secret124", hashed)


class TestTokens:
    def test_round_trip(self):
        token = create_access_token(data={"sub": "user-1"})
        payload = decode_token(token)
        assert payload["sub"] == "user-1"
        assert payload["type"] == "access"

    def test_expired_token(self):
        token = create_access_token(data={"sub": "user-1"}, expires_delta=timedelta(seconds=-5))
        assert decode_token(token) is None

    def test_token_signed_with_other_key_rejected(self):
        forged = jwt.encode({"sub": "user-1", "type": "access"}, "some-other-key", algorithm="HS256")
        assert decode_token(forged) is None

    def test_garbage(self):
        assert decode_token("not-a-jwt") is None
