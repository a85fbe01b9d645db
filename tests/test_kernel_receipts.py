"""
Kernel receipts: deterministic digest of kernel behaviour over fixtures.

Verifies:
  ✓ kernel_receipts() sections all report ok
  ✓ Scan orders recorded for the two-word fixture
  ✓ Double run produces identical section_hash
  ✓ Fixtures are not modified
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from widebits.core import Receipts, assert_double_run_equal
from widebits.kernel import kernel_receipts


FIXTURES = [
    {"label": "two_word_w32", "words": [0b1010, 0b0001], "word_bits": 32},
    {"label": "sparse_w8", "words": [0, 0x80, 0, 0x01], "word_bits": 8},
    {"label": "dense_w64", "words": [0xFFFF_FFFF_FFFF_FFFF], "word_bits": 64},
    {"label": "empty_w16", "words": [0, 0], "word_bits": 16},
]


def test_kernel_receipts_all_ok():
    snapshot = [list(fix["words"]) for fix in FIXTURES]

    digest = kernel_receipts("kernel-fixtures", FIXTURES)
    payload = digest["payload"]

    assert payload["set_clear_ok"] is True
    assert payload["combine_ok"] is True
    assert payload["scan_matches_popcount"] is True
    entry = payload["bitfield.two_word_w32"]
    assert entry["word_bits"] == 32
    assert entry["words"] == 2
    assert entry["set_bits"] == [1, 3, 32]
    assert len(entry["hash"]) == 64
    assert all(f"bitfield.{fix['label']}" in payload for fix in FIXTURES)

    orders = {s["label"]: s["bits"] for s in payload["scan_orders"]}
    assert orders["two_word_w32"] == [1, 3, 32]
    assert orders["sparse_w8"] == [15, 24]
    assert orders["dense_w64"] == list(range(64))
    assert orders["empty_w16"] == []

    assert [fix["words"] for fix in FIXTURES] == snapshot

    print("✓ kernel_receipts() all sections ok")


def test_kernel_receipts_double_run():
    def build():
        digest = kernel_receipts("kernel-fixtures", FIXTURES)
        r = Receipts("kernel-double-run")
        r.put("section_hash", digest["section_hash"])
        return r

    assert_double_run_equal(build)

    print("✓ kernel_receipts() deterministic")
