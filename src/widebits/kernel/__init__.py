"""
Kernel: wide-bitfield arithmetic.

Components:
  - align: power-of-two alignment, rounding, log2
  - flags: single-word any/all predicates, scan, popcount
  - bitfield: INDEX, SET/CLEAR/TEST, XOR/AND over lists of words
  - scan: forward bit scan across word boundaries
"""

from .align import (
    is_power_of_two,
    is_pow2_aligned,
    pow2_align,
    pow2_align_down,
    pow2_pad,
    round_up_quotient,
    round_up_to_multiple,
    round_down_to_multiple,
    log2,
    ceil_log2,
    high_part,
    low_part,
    num_bytes_to_num_dwords
)
from .flags import (
    any_flag_set,
    all_flags_set,
    bit_mask_scan_forward,
    count_set_bits
)
from .bitfield import (
    DEFAULT_WORD_BITS,
    word_mask,
    bit_location,
    new_wide_bitfield,
    wide_bitfield_is_set,
    wide_bitfield_set_bit,
    wide_bitfield_clear_bit,
    wide_bitfield_xor_bits,
    wide_bitfield_and_bits
)
from .scan import (
    wide_bitmask_scan_forward,
    iter_set_bits
)

__all__ = [
    # Align
    "is_power_of_two",
    "is_pow2_aligned",
    "pow2_align",
    "pow2_align_down",
    "pow2_pad",
    "round_up_quotient",
    "round_up_to_multiple",
    "round_down_to_multiple",
    "log2",
    "ceil_log2",
    "high_part",
    "low_part",
    "num_bytes_to_num_dwords",

    # Flags
    "any_flag_set",
    "all_flags_set",
    "bit_mask_scan_forward",
    "count_set_bits",

    # Bitfield
    "DEFAULT_WORD_BITS",
    "word_mask",
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

    # Receipts
    "kernel_receipts",
]


def kernel_receipts(section_label: str, fixtures: list[dict]) -> dict:
    """
    Generate receipts for kernel operations over fixed fixtures.

    Args:
        section_label: ASCII identifier (e.g., "kernel-smoke").
        fixtures: List of dicts with keys:
            - "words": list[int] (not modified)
            - "word_bits": int
            - "label": str

    Returns:
        dict: Receipt digest with:
            - kernel.params_hash
            - bitfield.<label>: put_bitfield() entry per fixture
            - set_clear_ok: set/clear of every bit touches only that bit
            - combine_ok: a ^ a == 0 and a & ones == a
            - scan_orders: set bits enumerated by forward scan
            - scan_matches_popcount: scan count == population count
    """
    from ..core import Receipts, blake3_hash
    import json

    receipts = Receipts(section_label)

    # 1. kernel.params_hash: scan policy and index mapping in effect
    policy_table = {
        "index": "word = bit // W, mask = 1 << (bit % W)",
        "scan_first_word": "mask-below-cursor",
        "scan_exhausted": "none",
    }
    policy_bytes = json.dumps(policy_table, sort_keys=True).encode('utf-8')
    receipts.put("kernel.params_hash", blake3_hash(policy_bytes))

    # 2. One bitfield entry per fixture (hash + scan order)
    entries = {
        fix["label"]: receipts.put_bitfield(
            f"bitfield.{fix['label']}", fix["words"], fix["word_bits"]
        )
        for fix in fixtures
    }

    # 3. set_clear_ok: every bit, on a private copy
    set_clear_tests = []
    for fix in fixtures:
        words = fix["words"]
        W = fix["word_bits"]
        ok = True
        for bit in range(len(words) * W):
            work = list(words)
            wide_bitfield_set_bit(work, bit, W)
            ok = ok and wide_bitfield_is_set(work, bit, W)
            wide_bitfield_clear_bit(work, bit, W)
            ok = ok and not wide_bitfield_is_set(work, bit, W)

            # Every other bit is as it was
            expected = list(words)
            index, mask = bit_location(bit, W)
            expected[index] &= ~mask
            ok = ok and work == expected

        set_clear_tests.append({"label": fix["label"], "ok": ok})

    receipts.put("set_clear_ok", all(t["ok"] for t in set_clear_tests))
    receipts.put("set_clear_tests", set_clear_tests)

    # 4. combine_ok
    combine_tests = []
    for fix in fixtures:
        words = fix["words"]
        W = fix["word_bits"]
        out = [0] * len(words)

        wide_bitfield_xor_bits(words, words, out)
        xor_zero = all(w == 0 for w in out)

        ones = [word_mask(W)] * len(words)
        wide_bitfield_and_bits(words, ones, out)
        and_identity = out == list(words)

        combine_tests.append({
            "label": fix["label"],
            "xor_self_zero": xor_zero,
            "and_ones_identity": and_identity
        })

    receipts.put("combine_ok", all(
        t["xor_self_zero"] and t["and_ones_identity"] for t in combine_tests
    ))
    receipts.put("combine_tests", combine_tests)

    # 5. scan_orders
    scan_orders = []
    for fix in fixtures:
        bits = entries[fix["label"]]["set_bits"]
        popcount = sum(count_set_bits(w) for w in fix["words"])
        scan_orders.append({
            "label": fix["label"],
            "bits": bits,
            "ascending": all(a < b for a, b in zip(bits, bits[1:])),
            "popcount": popcount
        })

    receipts.put("scan_orders", scan_orders)
    receipts.put("scan_matches_popcount", all(
        len(s["bits"]) == s["popcount"] and s["ascending"] for s in scan_orders
    ))

    return receipts.digest()
