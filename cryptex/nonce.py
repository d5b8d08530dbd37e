"""Random nonces for XChaCha20-Poly1305"""

import secrets

__all__ = ["NONCE_SIZE", "generate_nonce"]

NONCE_SIZE = 24


def generate_nonce() -> bytes:
    """Return a fresh random 24 byte nonce.

    XChaCha20's extended nonce is large enough that random nonces will not
    collide in practice, so no counter or shared state is needed.
    """
    return secrets.token_bytes(NONCE_SIZE)
