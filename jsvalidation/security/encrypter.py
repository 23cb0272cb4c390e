"""
JsValidation Encrypter
======================

Symmetric encryption of the session CSRF token handed to the client
plugin. The plugin sends it back in the `X-XSRF-TOKEN` header of
remote validation requests, where `VerifyCsrfToken` decrypts it.

Example:
    encrypter = Encrypter("app-secret")
    payload = encrypter.encrypt(session.token())
    encrypter.decrypt(payload) == session.token()
"""

from __future__ import annotations

import base64
import hashlib
from typing import Optional, Union

from cryptography.fernet import Fernet, InvalidToken


class EncryptionError(Exception):
    """Base exception for encryption errors."""
    pass


class DecryptError(EncryptionError):
    """Raised when a payload cannot be decrypted."""
    pass


class Encrypter:
    """
    Fernet-based encrypter.

    Any secret is accepted; the Fernet key is derived from its
    SHA-256 digest.
    """

    def __init__(self, secret_key: Union[str, bytes], ttl: Optional[int] = None) -> None:
        """
        Args:
            secret_key: Application secret
            ttl: Maximum payload age in seconds when decrypting
        """
        if not secret_key:
            raise EncryptionError("An encryption secret is required")

        if isinstance(secret_key, str):
            secret_key = secret_key.encode("utf-8")

        key = base64.urlsafe_b64encode(hashlib.sha256(secret_key).digest())
        self._fernet = Fernet(key)
        self.ttl = ttl

    def encrypt(self, value: str) -> str:
        """Encrypt a string value."""
        return self._fernet.encrypt(value.encode("utf-8")).decode("ascii")

    def decrypt(self, payload: str) -> str:
        """
        Decrypt a payload produced by `encrypt`.

        Raises:
            DecryptError: If the payload is invalid, tampered or expired
        """
        try:
            data = self._fernet.decrypt(payload.encode("ascii"), ttl=self.ttl)
        except (InvalidToken, UnicodeEncodeError) as e:
            raise DecryptError("The payload is invalid") from e
        return data.decode("utf-8")
