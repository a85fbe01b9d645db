"""
widebits: Wide-Bitfield Arithmetic

Treats a list of fixed-width words as one logical bit-vector: indexed
test/set/clear, elementwise XOR/AND, and ascending forward scan.
"""

__version__ = "0.1.0"

from .kernel import (
    is_power_of_two,
    pow2_align,
    pow2_align_down,
    log2,
    round_up_quotient,
    any_flag_set,
    all_flags_set,
    bit_location,
    new_wide_bitfield,
    wide_bitfield_is_set,
    wide_bitfield_set_bit,
    wide_bitfield_clear_bit,
    wide_bitfield_xor_bits,
    wide_bitfield_and_bits,
    wide_bitmask_scan_forward,
    iter_set_bits
)
from .core import PreconditionError

__all__ = [
    # Align
    "is_power_of_two",
    "pow2_align",
    "pow2_align_down",
    "log2",
    "round_up_quotient",

    # Flags
    "any_flag_set",
    "all_flags_set",

    # Bitfield
    "bit_location",
    "new_wide_bitfield",
    "wide_bitfield_is_set",
    "wide_bitfield_set_bit",
    "wide_bitfield_clear_bit",
    "wide_bitfield_xor_bits",
    "wide_bitfield_and_bits",

    # Scan
    "wide_bitmask_scan_forward",
    "iter_set_bits",

    # Errors
    "PreconditionError",
]
