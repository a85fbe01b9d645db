"""
Core Component: Hashing

BLAKE3 for receipts and bitfield digests; FNV-1a for short string keys.

No seeding, no randomness, no timestamps.
"""

import blake3

_FNV_PRIME = 16777619
_FNV_OFFSET = 2166136261
_U32_MASK = 0xFFFFFFFF


def blake3_hash(data: bytes) -> str:
    """
    Return hex-encoded BLAKE3 digest of the byte stream.

    Args:
        data: Raw bytes to hash.

    Returns:
        str: Hexadecimal digest (64 characters for BLAKE3-256).

    Example:
        >>> blake3_hash(b"test")
        '4878ca0425c739fa427f7eda20fe845f6b2e46ba5fe2a14df5b1e32f50603215'
    """
    hasher = blake3.blake3()
    hasher.update(data)
    return hasher.hexdigest()


def fnv1a_hash(text: str | bytes) -> int:
    """
    32-bit FNV-1a hash of a string (UTF-8 encoded) or raw bytes.

    Each byte is XORed in as an unsigned value 0..255 (reference FNV-1a).
    A C loop over signed chars would sign-extend bytes >= 0x80 instead, so
    hashes of non-ASCII input match only builds where char is unsigned.

    Example:
        >>> fnv1a_hash("")
        2166136261
    """
    data = text.encode("utf-8") if isinstance(text, str) else text

    h = _FNV_OFFSET
    for byte in data:
        h ^= byte
        h = (h * _FNV_PRIME) & _U32_MASK
    return h
