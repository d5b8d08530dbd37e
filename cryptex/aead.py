"""XChaCha20-Poly1305 (IETF) authenticated encryption without associated data"""

from nacl.bindings import (
    crypto_aead_xchacha20poly1305_ietf_ABYTES,
    crypto_aead_xchacha20poly1305_ietf_decrypt,
    crypto_aead_xchacha20poly1305_ietf_encrypt,
    crypto_aead_xchacha20poly1305_ietf_KEYBYTES,
    crypto_aead_xchacha20poly1305_ietf_NPUBBYTES,
)
from nacl.exceptions import CryptoError

from .exceptions import AuthenticationError, EncodingError
from .kdf import KEY_SIZE
from .nonce import NONCE_SIZE

__all__ = ["TAG_SIZE", "encrypt", "decrypt"]

TAG_SIZE = crypto_aead_xchacha20poly1305_ietf_ABYTES

if (
    KEY_SIZE != crypto_aead_xchacha20poly1305_ietf_KEYBYTES
    or NONCE_SIZE != crypto_aead_xchacha20poly1305_ietf_NPUBBYTES
):
    raise ImportError("libsodium disagrees with the XChaCha20-Poly1305 key or nonce size")


def encrypt(plaintext: bytes, key: bytes | bytearray, nonce: bytes) -> bytes:
    """Encrypt and authenticate plaintext.

    Returns the ciphertext followed by the 16 byte Poly1305 tag.
    """
    _check_key_and_nonce(key, nonce)
    try:
        return crypto_aead_xchacha20poly1305_ietf_encrypt(
            bytes(plaintext), None, bytes(nonce), bytes(key)
        )
    except CryptoError as e:
        raise EncodingError("encryption produced no output") from e


def decrypt(ciphertext: bytes, key: bytes | bytearray, nonce: bytes) -> bytes:
    """Verify the tag of ciphertext and decrypt it.

    No plaintext is returned unless the tag matches.

    Raises:
        AuthenticationError: if the tag is missing or does not match, i.e. the
            ciphertext was modified or the key or nonce are wrong.
    """
    _check_key_and_nonce(key, nonce)
    if len(ciphertext) < TAG_SIZE:
        raise AuthenticationError("ciphertext is shorter than the tag")
    try:
        return crypto_aead_xchacha20poly1305_ietf_decrypt(
            bytes(ciphertext), None, bytes(nonce), bytes(key)
        )
    except CryptoError as e:
        raise AuthenticationError("ciphertext could not be authenticated") from e


def _check_key_and_nonce(key: bytes | bytearray, nonce: bytes) -> None:
    if len(key) != KEY_SIZE:
        raise ValueError(f"key must be {KEY_SIZE} bytes long")
    if len(nonce) != NONCE_SIZE:
        raise ValueError(f"nonce must be {NONCE_SIZE} bytes long")
