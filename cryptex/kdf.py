"""Passphrase based key derivation (PBKDF2-HMAC-SHA256)"""

import logging
import secrets
from collections.abc import Iterator
from contextlib import contextmanager

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from .exceptions import KeyDerivationError
from .memory import SecretInput, secure_buffer, wipe

__all__ = ["derive_key", "derived_key", "generate_salt"]

KEY_SIZE = 32
PBKDF2_ITERATIONS = 10000
DEFAULT_SALT_SIZE = 16

logger = logging.getLogger(__name__)


def generate_salt(length: int = DEFAULT_SALT_SIZE) -> bytes:
    """Return a cryptographically secure random salt."""
    if length <= 0:
        raise ValueError("salt length must be positive")
    return secrets.token_bytes(length)


def derive_key(
    passphrase: SecretInput,
    salt: SecretInput | None = None,
    *,
    require_salt: bool = False,
) -> bytearray:
    """Stretch a passphrase into a 32 byte key.

    The same passphrase and salt always yield the same key.  A missing salt is
    treated as an empty one, which makes identical passphrases produce
    identical keys; pass ``require_salt=True`` to refuse that.

    The returned buffer belongs to the caller, who should :func:`wipe` it
    after use (or use :func:`derived_key` instead).

    Raises:
        KeyDerivationError: if the salt is required but empty, or the
            underlying PBKDF2 implementation failed.
    """
    with secure_buffer(passphrase) as secret, secure_buffer(salt) as salt_bytes:
        if not salt_bytes:
            if require_salt:
                raise KeyDerivationError("a non-empty salt is required")
            logger.warning("deriving key without a salt; a random salt is recommended")
        if not secret:
            logger.warning("deriving key from an empty passphrase")

        try:
            kdf = PBKDF2HMAC(
                algorithm=hashes.SHA256(),
                length=KEY_SIZE,
                salt=bytes(salt_bytes),
                iterations=PBKDF2_ITERATIONS,
            )
            return bytearray(kdf.derive(secret))
        except (TypeError, ValueError, UnsupportedAlgorithm) as e:
            raise KeyDerivationError(f"key derivation failed: {type(e).__name__}") from e


@contextmanager
def derived_key(
    passphrase: SecretInput,
    salt: SecretInput | None = None,
    *,
    require_salt: bool = False,
) -> Iterator[bytearray]:
    """Derive a key which is zeroed as soon as the with block is left."""
    key = derive_key(passphrase, salt, require_salt=require_salt)
    try:
        yield key
    finally:
        wipe(key)
