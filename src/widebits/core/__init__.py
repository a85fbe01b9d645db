"""
Core foundation: registry, settings, precondition checks, hashing,
serialization, receipts.

Nothing in core knows about bit layout; the kernel builds on it.
"""

from .registry import param_registry, RegistryError
from .settings import (
    ValueType,
    Settings,
    load_settings,
    string_to_value_type,
    SettingsError
)
from .checks import (
    require,
    checks_enabled,
    set_checks_enabled,
    apply_settings,
    PreconditionError
)
from .hashing import blake3_hash, fnv1a_hash
from .bytesio import (
    serialize_bitfield_be,
    deserialize_bitfield_be,
    SerializationError
)
from .receipts import (
    Receipts,
    assert_double_run_equal,
    first_differing_bit,
    ReceiptError,
    DeterminismError
)

__all__ = [
    # Registry
    "param_registry",
    "RegistryError",

    # Settings
    "ValueType",
    "Settings",
    "load_settings",
    "string_to_value_type",
    "SettingsError",

    # Checks
    "require",
    "checks_enabled",
    "set_checks_enabled",
    "apply_settings",
    "PreconditionError",

    # Hashing
    "blake3_hash",
    "fnv1a_hash",

    # Serialization
    "serialize_bitfield_be",
    "deserialize_bitfield_be",
    "SerializationError",

    # Receipts
    "Receipts",
    "assert_double_run_equal",
    "first_differing_bit",
    "ReceiptError",
    "DeterminismError",
]
