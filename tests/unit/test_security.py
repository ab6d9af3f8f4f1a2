"""Unit tests for auth/security.py: JWT decoding."""

from datetime import UTC, datetime, timedelta

import pytest
from jose import JWTError, jwt

from panel_api.auth.security import decode_token
from panel_api.config import get_settings
from tests.helpers.token_factory import create_access_token, create_refresh_token


class TestDecodeToken:
    def test_access_token_claims(self):
        token = create_access_token("user-456", "staff", username="staff", email="s@test.org")
        payload = decode_token(token)

        assert payload["sub"] == "user-456"
        assert payload["role"] == "staff"
        assert payload["username"] == "staff"
        assert payload["email"] == "s@test.org"
        assert payload["type"] == "access"
        assert "exp" in payload
        assert "jti" in payload

    def test_refresh_token_type(self):
        assert decode_token(create_refresh_token("user-1", "admin"))["type"] == "refresh"

    def test_expired_token_raises(self):
        settings = get_settings()
        token = jwt.encode(
            {"sub": "u", "type": "access", "exp": datetime.now(UTC) - timedelta(minutes=1)},
            settings.jwt_secret_key,
            algorithm=settings.jwt_algorithm,
        )
        with pytest.raises(JWTError):
            decode_token(token)

    def test_wrong_secret_raises(self):
        token = jwt.encode({"sub": "u", "type": "access"}, "another-secret", algorithm="HS256")
        with pytest.raises(JWTError):
            decode_token(token)

    def test_garbage_raises(self):
        with pytest.raises(JWTError):
            decode_token("not.a.jwt")
