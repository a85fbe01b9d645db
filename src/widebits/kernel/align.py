"""
Kernel Component: Alignment / Power-of-Two Arithmetic

Pure integer helpers underpinning word/bit index math.

All inputs are non-negative integers. Power-of-two alignment arguments are
checked with require(); a violation raises PreconditionError.
"""

from ..core.checks import require

_U32_MASK = 0xFFFFFFFF


def is_power_of_two(value: int) -> bool:
    """True iff value != 0 and value has exactly one set bit."""
    return value != 0 and (value & (value - 1)) == 0


def is_pow2_aligned(value: int, alignment: int) -> bool:
    """True iff value is a multiple of the power-of-two alignment."""
    require(is_power_of_two(alignment), f"Alignment must be a power of two, got {alignment}")
    return (value & (alignment - 1)) == 0


def pow2_align(value: int, alignment: int) -> int:
    """
    Round value up to the nearest multiple of alignment.

    Args:
        value: Non-negative value to align.
        alignment: Desired alignment (power of two).

    Returns:
        int: Smallest r >= value with r % alignment == 0.

    Raises:
        PreconditionError: If alignment is not a power of two or value < 0.

    Example:
        >>> pow2_align(13, 8)
        16
    """
    require(is_power_of_two(alignment), f"Alignment must be a power of two, got {alignment}")
    require(value >= 0, f"Value must be non-negative, got {value}")
    return (value + alignment - 1) & ~(alignment - 1)


def pow2_align_down(value: int, alignment: int) -> int:
    """
    Round value down to the nearest multiple of alignment.

    Returns:
        int: Largest r <= value with r % alignment == 0.

    Raises:
        PreconditionError: If alignment is not a power of two or value < 0.

    Example:
        >>> pow2_align_down(13, 8)
        8
    """
    require(is_power_of_two(alignment), f"Alignment must be a power of two, got {alignment}")
    require(value >= 0, f"Value must be non-negative, got {value}")
    return value & ~(alignment - 1)


def pow2_pad(value: int) -> int:
    """Smallest power of two >= value. pow2_pad(0) == 1."""
    if is_power_of_two(value):
        return value

    ret = 1
    while ret < value:
        ret <<= 1
    return ret


def round_up_quotient(dividend: int, divisor: int) -> int:
    """
    Integer division rounded up: ceil(dividend / divisor).

    Raises:
        PreconditionError: If divisor <= 0.
    """
    require(divisor > 0, f"Divisor must be positive, got {divisor}")
    return (dividend + (divisor - 1)) // divisor


def round_up_to_multiple(operand: int, alignment: int) -> int:
    """Round operand up to a multiple of any positive alignment."""
    return round_up_quotient(operand, alignment) * alignment


def round_down_to_multiple(operand: int, alignment: int) -> int:
    """Round operand down to a multiple of any positive alignment."""
    require(alignment > 0, f"Alignment must be positive, got {alignment}")
    return (operand // alignment) * alignment


def log2(u: int) -> int:
    """
    floor(log2(u)) by repeated right shift.

    Not exact for non powers of two (rounds down). log2(0) == 0 and
    log2(1) == 0; callers that need to tell them apart must check u first.
    """
    log_value = 0
    while u > 1:
        log_value += 1
        u >>= 1
    return log_value


def ceil_log2(u: int) -> int:
    """Smallest k with 2**k >= u. ceil_log2(0) == ceil_log2(1) == 0."""
    log_value = 0
    while (1 << log_value) < u:
        log_value += 1
    return log_value


def high_part(value: int) -> int:
    """Upper 32 bits of a 64-bit value."""
    return (value >> 32) & _U32_MASK


def low_part(value: int) -> int:
    """Lower 32 bits of a 64-bit value."""
    return value & _U32_MASK


def num_bytes_to_num_dwords(num_bytes: int) -> int:
    """Number of 4-byte dwords needed to cover num_bytes (3 bytes -> 1 dword)."""
    return pow2_align(num_bytes, 4) // 4
