"""
Encryption codec for license material stored at rest.

Uses Fernet symmetric encryption. The Fernet key is derived from a
host-supplied secret, so the same secret always decrypts earlier writes.
"""

import base64
import logging
from functools import lru_cache

from cryptography.fernet import Fernet, InvalidToken
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from core.domain.exceptions import DecryptionError

logger = logging.getLogger(__name__)

KDF_SALT = b"pls-license-storage"
KDF_ITERATIONS = 100_000


@lru_cache(maxsize=8)
def derive_fernet_key(secret: str) -> bytes:
    """
    Derive a Fernet key from an arbitrary secret string.

    Derived keys are cached per secret.

    Args:
        secret: Host secret (e.g. Django SECRET_KEY)

    Returns:
        URL-safe base64 encoded 32-byte key
    """
    if not secret:
        raise ValueError("Encryption secret cannot be empty")
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=32,
        salt=KDF_SALT,
        iterations=KDF_ITERATIONS,
    )
    return base64.urlsafe_b64encode(kdf.derive(secret.encode()))


class EncryptionCodec:
    """Encrypts and decrypts opaque payloads with a key derived from a secret."""

    def __init__(self, secret: str):
        self._fernet = Fernet(derive_fernet_key(secret))

    def encrypt(self, plaintext: bytes) -> bytes:
        """
        Encrypt a payload for storage.

        Args:
            plaintext: Raw bytes

        Returns:
            Fernet token bytes
        """
        return self._fernet.encrypt(plaintext)

    def decrypt(self, ciphertext: bytes) -> bytes:
        """
        Decrypt a stored payload.

        Args:
            ciphertext: Fernet token bytes

        Returns:
            The original plaintext

        Raises:
            DecryptionError: If the token is malformed, tampered or was
                encrypted with another secret
        """
        if isinstance(ciphertext, str):
            ciphertext = ciphertext.encode()
        try:
            return self._fernet.decrypt(ciphertext)
        except (InvalidToken, TypeError, ValueError) as e:
            logger.error("Failed to decrypt stored payload: invalid token or key")
            raise DecryptionError("Stored license data could not be decrypted") from e
