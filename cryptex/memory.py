"""Scoped handling of buffers holding passphrases, salts and keys.

Everything handed to :func:`secure_buffer` is copied into a private
``bytearray`` which is zeroed as soon as the ``with`` block is left, no matter
whether it was left normally or through an exception.

Python cannot zero immutable ``bytes`` objects.  The crypto libraries insist on
``bytes`` for some of their arguments, so short-lived immutable copies exist
for the duration of a single library call.  Wiping is thus best effort for the
buffers this package owns.
"""

from collections.abc import Iterator
from contextlib import contextmanager

__all__ = ["SecretInput", "secure_buffer", "wipe"]

SecretInput = bytes | bytearray | memoryview | str


def wipe(buffer: bytearray | memoryview) -> None:
    """Overwrite a mutable buffer with zeros in place."""
    view = memoryview(buffer).cast("B")
    view[:] = bytes(len(view))


@contextmanager
def secure_buffer(data: SecretInput | None) -> Iterator[bytearray]:
    """Yield a private copy of data which is zeroed on exit.

    Strings are encoded as UTF-8 and ``None`` yields an empty buffer.  The
    caller's object is never modified.
    """
    if data is None:
        buffer = bytearray()
    elif isinstance(data, str):
        buffer = bytearray(data.encode("utf-8"))
    elif isinstance(data, (bytes, bytearray, memoryview)):
        buffer = bytearray(data)
    else:
        raise TypeError(f"expected bytes-like object or str, got {type(data).__name__}")

    try:
        yield buffer
    finally:
        wipe(buffer)
