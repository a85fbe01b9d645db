"""
Kernel Component: Single-Word Flags

Predicates and scans over one word. The wide-bitfield operations in
bitfield.py and scan.py are these, lifted to a list of words.
"""


def any_flag_set(src: int, test: int) -> bool:
    """True if any bit set in test is also set in src."""
    return (src & test) != 0


def all_flags_set(src: int, test: int) -> bool:
    """True if every bit set in test is also set in src."""
    return (src & test) == test


def bit_mask_scan_forward(mask: int) -> int | None:
    """
    Index of the least-significant '1' bit of mask.

    Returns:
        int | None: 0-based bit index, or None if mask == 0.

    Example:
        >>> bit_mask_scan_forward(0b1000)
        3
    """
    if mask == 0:
        return None
    # mask & -mask isolates the lowest set bit
    return (mask & -mask).bit_length() - 1


def count_set_bits(value: int) -> int:
    """Population count of a non-negative word."""
    return bin(value).count('1')
