"""
Kernel Component: Forward Bit Scan

Finds the next set bit at or after a global index, crossing word boundaries.

Iteration is driven by the caller with a plain integer cursor:

    bit = wide_bitmask_scan_forward(mask, 0)
    while bit is not None:
        ...
        bit = wide_bitmask_scan_forward(mask, bit + 1)

which visits every set bit exactly once in ascending order. iter_set_bits()
wraps that loop.

First-word policy: when the cursor points mid-word, bits of that word below
the cursor are masked off before scanning, so a bit is never reported at an
index smaller than the cursor.

Exhaustion: a scan that finds nothing returns None. There is no sentinel
cursor value to misread.
"""

from typing import Iterator

from ..core.checks import require
from .bitfield import DEFAULT_WORD_BITS, bit_location
from .flags import bit_mask_scan_forward


def wide_bitmask_scan_forward(
    mask: list[int],
    start: int = 0,
    word_bits: int = DEFAULT_WORD_BITS
) -> int | None:
    """
    Global index of the least-significant '1' bit at or after start.

    Args:
        mask: Wide bit-mask (list of N words).
        start: Scan cursor, 0 <= start <= N*W. start == N*W means no more bits.
        word_bits: Word width W.

    Returns:
        int | None: Global bit index, or None if no set bit remains.

    Raises:
        PreconditionError: If start is negative or beyond N*W.

    Example:
        >>> wide_bitmask_scan_forward([0b1010, 0b0001], 2, 32)
        3
    """
    N = len(mask)
    require(
        0 <= start <= N * word_bits,
        f"Scan cursor {start} out of range [0, {N * word_bits}]"
    )

    word_index, first_bit = bit_location(start, word_bits)
    if word_index >= N:
        return None

    # Drop bits below the cursor in the first word only
    word = mask[word_index] & ~(first_bit - 1)

    while True:
        local = bit_mask_scan_forward(word)
        if local is not None:
            return local + word_index * word_bits

        word_index += 1
        if word_index >= N:
            return None
        word = mask[word_index]


def iter_set_bits(
    mask: list[int],
    start: int = 0,
    word_bits: int = DEFAULT_WORD_BITS
) -> Iterator[int]:
    """
    Yield every set bit index >= start in ascending order.

    The mask is read lazily; mutating words behind the cursor while iterating
    does not affect the remaining results.
    """
    bit = wide_bitmask_scan_forward(mask, start, word_bits)
    while bit is not None:
        yield bit
        bit = wide_bitmask_scan_forward(mask, bit + 1, word_bits)
