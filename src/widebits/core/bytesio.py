"""
Core Component: Byte Serialization (Big-Endian)

Stable, deterministic byte serialization of wide bitfields for hashing.

Format (frozen):
  - 4 ASCII bytes tag: b"WBF1"
  - 1 byte W (word width in bits)
  - 4 bytes N (word count, uint32, big-endian)
  - N words, each big-endian in W/8 bytes, word 0 first
"""

from .registry import param_registry


def serialize_bitfield_be(bitfield: list[int], word_bits: int) -> bytes:
    """
    Encode a wide bitfield as a deterministic byte stream.

    Args:
        bitfield: List of N words.
        word_bits: Word width W in bits (one of the supported widths).

    Returns:
        bytes: Deterministic serialization.

    Raises:
        SerializationError: If W is unsupported, N does not fit in uint32, or a
            word lies outside [0, 2**W).
    """
    supported = param_registry()["supported_word_bits"]
    if word_bits not in supported:
        raise SerializationError(
            f"Unsupported word width: {word_bits}. Must be one of {supported}"
        )

    N = len(bitfield)
    if N > 0xFFFFFFFF:
        raise SerializationError(f"Too many words: {N}")

    stream = bytearray()
    stream.extend(param_registry()["byte_frame_tags"]["BITFIELD"].encode("ascii"))
    stream.append(word_bits)
    stream.extend(N.to_bytes(4, byteorder='big'))

    bytes_per_word = word_bits // 8
    for k, word in enumerate(bitfield):
        if word < 0 or word >> word_bits:
            raise SerializationError(
                f"Word {k} out of range for {word_bits}-bit words: {word:#x}"
            )
        stream.extend(word.to_bytes(bytes_per_word, byteorder='big'))

    return bytes(stream)


def deserialize_bitfield_be(data: bytes) -> tuple[list[int], int]:
    """
    Inverse of serialize_bitfield_be.

    Returns:
        tuple[list[int], int]: (bitfield, word_bits)

    Raises:
        SerializationError: On bad tag, unsupported width, or length mismatch.
    """
    tag = param_registry()["byte_frame_tags"]["BITFIELD"].encode("ascii")
    if data[:4] != tag:
        raise SerializationError(f"Bad frame tag: {bytes(data[:4])!r}, expected {tag!r}")
    if len(data) < 9:
        raise SerializationError(f"Truncated header: {len(data)} bytes")

    word_bits = data[4]
    if word_bits not in param_registry()["supported_word_bits"]:
        raise SerializationError(f"Unsupported word width in header: {word_bits}")

    N = int.from_bytes(data[5:9], byteorder='big')
    bytes_per_word = word_bits // 8
    expected = 9 + N * bytes_per_word
    if len(data) != expected:
        raise SerializationError(
            f"Payload length mismatch: expected {expected} bytes, got {len(data)}"
        )

    bitfield = []
    for k in range(N):
        start = 9 + k * bytes_per_word
        bitfield.append(int.from_bytes(data[start:start + bytes_per_word], byteorder='big'))

    return bitfield, word_bits


class SerializationError(Exception):
    """Raised when serialization input is invalid."""
    pass
