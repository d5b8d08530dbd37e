"""Authenticated passphrase encryption with XChaCha20-Poly1305."""

from .aead import TAG_SIZE
from .cipher import decrypt, encrypt
from .exceptions import (
    AuthenticationError,
    CryptexError,
    EncodingError,
    KeyDerivationError,
    MalformedInputError,
)
from .kdf import KEY_SIZE, PBKDF2_ITERATIONS, derive_key, derived_key, generate_salt
from .memory import secure_buffer, wipe
from .nonce import NONCE_SIZE, generate_nonce
