"""Encryption at rest for sensitive setting values."""

import base64
import hashlib
import json
import logging
from typing import Any

from cryptography.fernet import Fernet, InvalidToken

logger = logging.getLogger(__name__)

SECRET_MASK = "********"


def _derive_fernet_key(secret: str) -> bytes:
    """Derive a Fernet-compatible key from an arbitrary secret string."""
    return base64.urlsafe_b64encode(hashlib.sha256(secret.encode("utf-8")).digest())


class SettingsCipher:
    """Seals setting values into Fernet tokens and back.

    Values are JSON-encoded before encryption so numbers, booleans and
    objects keep their type after a round trip.
    """

    def __init__(self, secret: str):
        self._fernet = Fernet(_derive_fernet_key(secret))

    def seal(self, value: Any) -> str:
        plaintext = json.dumps(value, ensure_ascii=False)
        return self._fernet.encrypt(plaintext.encode("utf-8")).decode("utf-8")

    def unseal(self, token: Any) -> Any:
        """Decrypt a sealed value. Returns None if it cannot be decrypted."""
        if not isinstance(token, str):
            logger.warning("Sealed setting value is not a token (got %s)", type(token).__name__)
            return None
        try:
            plaintext = self._fernet.decrypt(token.encode("utf-8"))
        except InvalidToken:
            logger.warning("Failed to decrypt setting value; was the encryption key rotated?")
            return None
        return json.loads(plaintext)


def mask_secret(value: Any) -> Any:
    """Replace a non-empty secret with a fixed mask for display."""
    if value in (None, ""):
        return value
    return SECRET_MASK
