"""JWT token utilities.

Tokens are issued by the panel's identity provider; this service only
decodes and validates them with the shared secret. Token creation helpers
live in ``tests/helpers/token_factory.py`` and must never be imported from
production code.

Access tokens are short-lived. Individual tokens can be revoked before
expiry through the Redis deny-list in :mod:`panel_api.auth.token_revocation`.
"""

from typing import Any

from jose import jwt

from panel_api.config import get_settings


def decode_token(token: str) -> dict[str, Any]:
    """Decode and validate a JWT token. Raises JWTError on failure."""
    settings = get_settings()
    return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
