"""
Core Component: Parameter Registry

Frozen constants for wide-bitfield operation.
Every receipt digest binds the hash of this registry, so a change to any
constant (scan policy, default word width, ...) changes every section hash.

No randomness, no environment leakage. Environment-driven knobs live in
settings.py instead.
"""


def param_registry() -> dict:
    """
    Returns a frozen mapping of all global constants used by the library.

    Keys and values are JSON-serializable primitives or lists.

    Returns:
        dict: Frozen parameter mapping with exact keys and values.

    Raises:
        RegistryError: If any required key is missing (internal consistency check).
    """
    registry = {
        "version": "0.1.0",

        # Word geometry
        "default_word_bits": 32,
        "supported_word_bits": [8, 16, 32, 64],
        "bit_order": "lsb-first",  # bit i of a word is (word >> i) & 1

        # Forward scan policy
        # Bits below the cursor inside the first word are masked off.
        "scan_first_word": "mask-below-cursor",
        # Exhausted scans return None (no sentinel cursor value).
        "scan_exhausted": "none",

        # Hashing
        "hash_algo": "BLAKE3",

        # Debug print routing
        "dbg_print_prefix": "WIDEBITS",
        "dbg_print_categories": ["INFO", "WARN", "ERROR", "SC"],
        "dbg_print_default_mode": "DISABLE",

        # Byte frame tags for serialization (ASCII 4-byte tags)
        "byte_frame_tags": {
            "BITFIELD": "WBF1",
        },
    }

    required_keys = {
        "version", "default_word_bits", "supported_word_bits", "bit_order",
        "scan_first_word", "scan_exhausted", "hash_algo", "dbg_print_prefix",
        "dbg_print_categories", "dbg_print_default_mode", "byte_frame_tags",
    }

    actual_keys = set(registry.keys())
    if actual_keys != required_keys:
        missing = required_keys - actual_keys
        extra = actual_keys - required_keys
        raise RegistryError(
            f"param_registry() key mismatch. Missing: {missing}, Extra: {extra}"
        )

    return registry


class RegistryError(Exception):
    """Raised when param_registry() has missing or unexpected keys."""
    pass
