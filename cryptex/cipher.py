"""Encrypt and decrypt data under a passphrase.

Keys are derived with PBKDF2-HMAC-SHA256 and the data is encrypted with
XChaCha20-Poly1305.  The result is hex text which is wire compatible with
other Cryptex implementations.

A salt is optional, but highly recommended.  It should be generated with
:func:`cryptex.generate_salt` and stored next to the ciphertext.
"""

import logging

from . import aead, binascii
from .kdf import derived_key
from .memory import SecretInput
from .nonce import generate_nonce

__all__ = ["encrypt", "decrypt"]

logger = logging.getLogger(__name__)


def encrypt(
    plaintext: bytes | bytearray | memoryview | str,
    passphrase: SecretInput,
    salt: SecretInput | None = None,
    *,
    require_salt: bool = False,
) -> str:
    """Encrypt plaintext with a key derived from passphrase and salt.

    Args:
        plaintext:  Data to encrypt.  Strings are encoded as UTF-8.
        passphrase:  Passphrase to derive the key from.
        salt:  Optional salt.  ``None`` is treated as an empty salt.
        require_salt:  Refuse to encrypt without a non-empty salt.

    Returns:
        The lowercase hex encoded nonce, ciphertext and tag.

    Raises:
        KeyDerivationError: if no key could be derived.
        EncodingError: if no ciphertext could be produced.
        TypeError: if plaintext is neither bytes-like nor a string.
    """
    if isinstance(plaintext, str):
        plaintext = plaintext.encode("utf-8")
    elif not isinstance(plaintext, (bytes, bytearray, memoryview)):
        raise TypeError(
            f"expected bytes-like object or str, got {type(plaintext).__name__}"
        )

    with derived_key(passphrase, salt, require_salt=require_salt) as key:
        nonce = generate_nonce()
        ciphertext = aead.encrypt(plaintext, key, nonce)

    logger.debug("encrypted %d bytes", len(plaintext))
    return binascii.encode(nonce, ciphertext)


def decrypt(
    ciphertext: str | bytes,
    passphrase: SecretInput,
    salt: SecretInput | None = None,
    *,
    require_salt: bool = False,
) -> bytes:
    """Authenticate and decrypt hex text produced by :func:`encrypt`.

    The passphrase and salt have to be the ones used for encryption.

    Raises:
        MalformedInputError: if ciphertext is not well-formed hex text.
        KeyDerivationError: if no key could be derived.
        AuthenticationError: if the ciphertext was tampered with or the
            passphrase or salt are wrong.
    """
    # Decode first so malformed input fails without paying for the KDF
    nonce, payload = binascii.decode(ciphertext)

    with derived_key(passphrase, salt, require_salt=require_salt) as key:
        plaintext = aead.decrypt(payload, key, nonce)

    logger.debug("decrypted %d bytes", len(plaintext))
    return plaintext
