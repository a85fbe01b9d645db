"""
Core Component: Bitfield Receipts & Double-Run Checker

A receipt is an ordered record of what a batch of bitfield operations
produced, sealed with a BLAKE3 section hash. Bitfields go in through
put_bitfield(), which stores the serialized hash, word geometry and the set
bits found by a forward scan, so two runs can be compared bit by bit.

Every digest binds the parameter registry hash: two digests only compare
equal under the same frozen constants (word widths, scan policy, ...).
"""

import json
from typing import Any, Callable

from .registry import param_registry
from .hashing import blake3_hash
from .bytesio import serialize_bitfield_be

_SCALARS = (bool, int, str, type(None))


class Receipts:
    """
    Section-scoped receipt builder.

    Payload values are JSON scalars (int, bool, str, None) and lists/dicts of
    them; floats are refused so digests never depend on float formatting.
    """

    def __init__(self, section: str):
        self.section = section
        self.payload = []  # (key, value) in insertion order

    def _insert(self, key: str, value: Any) -> None:
        if any(k == key for k, _ in self.payload):
            raise ReceiptError(f"Duplicate key in receipts: '{key}'")
        self.payload.append((key, value))

    def put(self, key: str, value: Any) -> None:
        """
        Record a plain value.

        Raises:
            ReceiptError: If key is duplicate or value holds a float, a
                non-string dict key, or a non-JSON type.
        """
        _check_plain(value, key)
        self._insert(key, value)

    def put_bitfield(self, key: str, bitfield: list[int], word_bits: int) -> dict:
        """
        Record a wide bitfield.

        The entry is {"word_bits", "words", "hash", "set_bits"} where hash is
        the BLAKE3 digest of serialize_bitfield_be() and set_bits is the
        ascending forward-scan order. The bitfield itself is not retained.

        Returns:
            dict: The recorded entry.

        Raises:
            ReceiptError: If key is duplicate.
            SerializationError: If a word is out of range for word_bits.
        """
        from ..kernel.scan import iter_set_bits

        entry = {
            "word_bits": word_bits,
            "words": len(bitfield),
            "hash": blake3_hash(serialize_bitfield_be(bitfield, word_bits)),
            "set_bits": list(iter_set_bits(bitfield, 0, word_bits)),
        }
        self._insert(key, entry)
        return entry

    def digest(self) -> dict:
        """
        Returns {"section", "version", "param_registry_hash", "payload",
        "section_hash"}; section_hash covers every other field.
        """
        registry = param_registry()

        sealed = {
            "section": self.section,
            "version": registry["version"],
            "param_registry_hash": blake3_hash(_canonical_json(registry)),
            "payload": dict(self.payload),
        }
        sealed["section_hash"] = blake3_hash(_canonical_json(sealed))
        return sealed


def _is_bitfield_entry(value: Any) -> bool:
    return isinstance(value, dict) and {"hash", "set_bits", "word_bits"} <= value.keys()


def first_differing_bit(entry_a: dict, entry_b: dict) -> int | None:
    """
    Lowest bit index set in exactly one of two put_bitfield() entries.

    None when the set bits agree (the entries may still differ in width or
    word count).
    """
    diff = set(entry_a["set_bits"]) ^ set(entry_b["set_bits"])
    return min(diff) if diff else None


def assert_double_run_equal(build_section_callable: Callable[[], Receipts]) -> None:
    """
    Build the section twice and require identical section_hash.

    Raises:
        DeterminismError: Naming the first differing key (sorted order) and,
            when that key holds a bitfield, the first differing bit.
    """
    digest_a = build_section_callable().digest()
    digest_b = build_section_callable().digest()

    if digest_a["section_hash"] == digest_b["section_hash"]:
        return

    payload_a = digest_a["payload"]
    payload_b = digest_b["payload"]

    key = next(
        (k for k in sorted(payload_a.keys() | payload_b.keys())
         if payload_a.get(k) != payload_b.get(k)),
        None
    )
    value_a = payload_a.get(key)
    value_b = payload_b.get(key)

    bit = None
    if _is_bitfield_entry(value_a) and _is_bitfield_entry(value_b):
        bit = first_differing_bit(value_a, value_b)

    raise DeterminismError(
        section=digest_a["section"],
        first_differing_key=key,
        first_differing_bit=bit,
        value_a=value_a,
        value_b=value_b,
    )


def _canonical_json(obj: Any) -> bytes:
    return json.dumps(obj, sort_keys=True, ensure_ascii=False, separators=(',', ':')).encode('utf-8')


def _check_plain(value: Any, key: str) -> None:
    # Iterative walk: (value, path) pairs still to inspect
    pending = [(value, key)]
    while pending:
        item, path = pending.pop()
        if isinstance(item, float):
            raise ReceiptError(f"Floats forbidden in receipts (at '{path}')")
        if isinstance(item, _SCALARS):
            continue
        if isinstance(item, (list, tuple)):
            pending.extend((v, f"{path}[{i}]") for i, v in enumerate(item))
        elif isinstance(item, dict):
            for k, v in item.items():
                if not isinstance(k, str):
                    raise ReceiptError(f"Non-string dict key {k!r} at '{path}'")
                pending.append((v, f"{path}.{k}"))
        else:
            raise ReceiptError(
                f"Unsupported type {type(item).__name__} at '{path}'"
            )


class ReceiptError(Exception):
    """Raised on a duplicate key or a value that cannot go into a receipt."""
    pass


class DeterminismError(Exception):
    """Raised when two builds of the same section hash differently."""

    def __init__(
        self,
        section: str,
        first_differing_key: str | None,
        first_differing_bit: int | None,
        value_a: Any,
        value_b: Any
    ):
        self.section = section
        self.first_differing_key = first_differing_key
        self.first_differing_bit = first_differing_bit
        self.value_a = value_a
        self.value_b = value_b

        where = f"key '{first_differing_key}'"
        if first_differing_bit is not None:
            where += f", bit {first_differing_bit}"
        super().__init__(
            f"Section '{section}' differs between runs at {where}: {value_a!r} != {value_b!r}"
        )
