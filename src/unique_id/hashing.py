"""SHA-256 helpers producing identifier-safe short hashes."""

from __future__ import annotations

import base64
import hashlib

MAX_HASH_LENGTH = 41

_IDENTIFIER_SAFE = str.maketrans({"+": "_", "/": "$"})


def sha256_digest(text: str) -> bytes:
    """Return the raw SHA-256 digest of the UTF-8 encoding of ``text``."""
    return hashlib.sha256(text.encode("utf-8")).digest()


def sha256_base64(text: str) -> str:
    """Return the SHA-256 digest of ``text`` as standard padded base64."""
    return base64.b64encode(sha256_digest(text)).decode("ascii")


def short_hash(text: str, length: int) -> str:
    """Create a short hash of ``text`` usable as an identifier.

    The digest is rendered in base64 with ``+`` and ``/`` swapped for ``_``
    and ``$``, so every character is one of ``A-Za-z0-9_$``. The top bit of
    the first byte is cleared, which keeps the first base64 character in
    ``A-Za-f`` so the result never starts with a digit.

    Args:
        text: String to hash
        length: Number of characters to return (1 to 41)

    Returns:
        Hash string of exactly ``length`` characters.
    """
    digest = bytearray(sha256_digest(text))
    digest[0] &= 0x7F

    encoded = base64.b64encode(bytes(digest)).decode("ascii").rstrip("=")
    return encoded.translate(_IDENTIFIER_SAFE)[:length]


__all__ = ["MAX_HASH_LENGTH", "sha256_base64", "sha256_digest", "short_hash"]
