"""Cryptex exceptions"""


class CryptexError(Exception):
    """Base class of all errors raised by cryptex."""


class MalformedInputError(CryptexError, ValueError):
    """Raised if a ciphertext is not valid hex or too short to hold a nonce
    and an authentication tag."""


class AuthenticationError(CryptexError):
    """Raised if the authentication tag did not match.

    This happens for tampered or corrupted ciphertexts as well as for a wrong
    passphrase or salt; the two cases cannot be told apart.
    """


class KeyDerivationError(CryptexError):
    """Raised if no key could be derived from the passphrase and salt."""


class EncodingError(CryptexError):
    """Raised if encryption or encoding could not produce any output."""
