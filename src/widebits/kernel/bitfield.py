"""
Kernel Component: Wide Bitfields (INDEX, SET/CLEAR/TEST, COMBINE)

A wide bitfield is a bitfield that spans a list of words because there are
more flags than bits in one word.

Representation:
  - list[int] of length N (caller-allocated, caller-owned)
  - Each entry is a Python int holding W least-significant bits
  - Global bit i lives in word i // W at in-word position i % W

Operations mutate the caller's list in place and never keep a reference to it.
"""

from ..core.checks import require
from .align import is_power_of_two, round_up_quotient

DEFAULT_WORD_BITS = 32


def word_mask(word_bits: int = DEFAULT_WORD_BITS) -> int:
    """All-ones word of the given width."""
    return (1 << word_bits) - 1


def _require_word_bits(word_bits: int) -> None:
    require(
        word_bits >= 8 and is_power_of_two(word_bits),
        f"Word width must be a power of two >= 8, got {word_bits}"
    )


def bit_location(bit: int, word_bits: int = DEFAULT_WORD_BITS) -> tuple[int, int]:
    """
    Map a global bit index to (word index, in-word mask).

    Args:
        bit: Global bit index (>= 0).
        word_bits: Word width W.

    Returns:
        tuple[int, int]: (bit // W, 1 << (bit % W))

    Raises:
        PreconditionError: If bit < 0 or W is not a power of two >= 8.

    Example:
        >>> bit_location(33, 32)
        (1, 2)
    """
    _require_word_bits(word_bits)
    require(bit >= 0, f"Bit index must be non-negative, got {bit}")

    # W is a power of two, so % W is & (W - 1)
    return bit // word_bits, 1 << (bit & (word_bits - 1))


def _checked_location(bitfield: list[int], bit: int, word_bits: int) -> tuple[int, int]:
    index, mask = bit_location(bit, word_bits)
    require(
        index < len(bitfield),
        f"Bit {bit} out of range for {len(bitfield)} x {word_bits}-bit words"
    )
    return index, mask


def new_wide_bitfield(num_bits: int, word_bits: int = DEFAULT_WORD_BITS) -> list[int]:
    """
    Allocate a zeroed bitfield with room for num_bits flags.

    The word count is ceil(num_bits / W); the caller owns the returned list.
    """
    _require_word_bits(word_bits)
    require(num_bits >= 0, f"Bit count must be non-negative, got {num_bits}")
    return [0] * round_up_quotient(num_bits, word_bits)


def wide_bitfield_is_set(bitfield: list[int], bit: int, word_bits: int = DEFAULT_WORD_BITS) -> bool:
    """True if the given global bit is set."""
    index, mask = _checked_location(bitfield, bit, word_bits)
    return (bitfield[index] & mask) != 0


def wide_bitfield_set_bit(bitfield: list[int], bit: int, word_bits: int = DEFAULT_WORD_BITS) -> None:
    """Set one bit to 1. Idempotent; only the owning word is written."""
    index, mask = _checked_location(bitfield, bit, word_bits)
    bitfield[index] |= mask


def wide_bitfield_clear_bit(bitfield: list[int], bit: int, word_bits: int = DEFAULT_WORD_BITS) -> None:
    """Clear one bit to 0. Idempotent; only the owning word is written."""
    index, mask = _checked_location(bitfield, bit, word_bits)
    bitfield[index] &= ~mask & word_mask(word_bits)


def _require_same_shape(a: list[int], b: list[int], out: list[int]) -> None:
    require(
        len(a) == len(b) == len(out),
        f"Word count mismatch: a={len(a)}, b={len(b)}, out={len(out)}"
    )


def wide_bitfield_xor_bits(a: list[int], b: list[int], out: list[int]) -> None:
    """
    out[k] = a[k] ^ b[k] for every word.

    out may be the same list as a or b.

    Raises:
        PreconditionError: If the three lists differ in length.
    """
    _require_same_shape(a, b, out)
    for k in range(len(out)):
        out[k] = a[k] ^ b[k]


def wide_bitfield_and_bits(a: list[int], b: list[int], out: list[int]) -> None:
    """
    out[k] = a[k] & b[k] for every word.

    out may be the same list as a or b.

    Raises:
        PreconditionError: If the three lists differ in length.
    """
    _require_same_shape(a, b, out)
    for k in range(len(out)):
        out[k] = a[k] & b[k]
