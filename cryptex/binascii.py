"""Convenience functions for reading and writing the hex wire format

A ciphertext on the wire is ``hex(nonce || ciphertext || tag)``, without any
version byte or algorithm identifier.
"""

import re

from .aead import TAG_SIZE
from .exceptions import EncodingError, MalformedInputError
from .nonce import NONCE_SIZE

__all__ = ["encode", "decode", "MIN_DECODED_SIZE"]

MIN_DECODED_SIZE = NONCE_SIZE + TAG_SIZE

_HEX_RE = re.compile(r"[0-9a-fA-F]*")


def encode(nonce: bytes, ciphertext: bytes) -> str:
    """Render nonce and ciphertext as lowercase hex."""
    if len(nonce) != NONCE_SIZE:
        raise EncodingError(f"nonce must be {NONCE_SIZE} bytes long")
    try:
        return (bytes(nonce) + bytes(ciphertext)).hex()
    except (TypeError, MemoryError) as e:
        raise EncodingError("could not hex encode ciphertext") from e


def decode(text: str | bytes | bytearray | memoryview) -> tuple[bytes, bytes]:
    """Split hex wire text into nonce and ciphertext (tag included).

    Upper- and lowercase digits are accepted, anything else (whitespace
    included) is not.

    Raises:
        MalformedInputError: if text is not hex, has an odd length or is too
            short to contain a nonce and a tag.
    """
    if isinstance(text, (bytes, bytearray, memoryview)):
        try:
            text = bytes(text).decode("ascii")
        except UnicodeDecodeError as e:
            raise MalformedInputError("ciphertext contains non-hex characters") from e

    if not _HEX_RE.fullmatch(text):
        raise MalformedInputError("ciphertext contains non-hex characters")
    if len(text) % 2:
        raise MalformedInputError("ciphertext has an odd number of hex digits")

    decoded = bytes.fromhex(text)
    if len(decoded) < MIN_DECODED_SIZE:
        raise MalformedInputError(
            f"ciphertext must decode to at least {MIN_DECODED_SIZE} bytes, "
            f"got {len(decoded)}"
        )
    return decoded[:NONCE_SIZE], decoded[NONCE_SIZE:]
