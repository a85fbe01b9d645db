"""
Core Component: Runtime Settings

Environment-driven knobs, read once and passed explicitly to whatever needs
them. checks.apply_settings() installs checks_enabled; make_printer() uses
prints_enabled, log_dir and word_bits:

  WIDEBITS_UNCHECKED      "1" disables precondition checks
  WIDEBITS_ENABLE_PRINTS  "1" selects the real debug printer
  WIDEBITS_LOG_DIR        directory for debug print log files
  WIDEBITS_WORD_BITS      default word width for callers that ask for it

Values are parsed with C-style semantics (string_to_value_type), so "0x10"
reads as 16 and a boolean is any nonzero integer.
"""

import os
import re
from dataclasses import dataclass
from enum import Enum
from typing import Mapping

from .registry import param_registry


class ValueType(Enum):
    """Data type of a setting value."""
    BOOLEAN = "bool"
    INT = "int"
    UINT = "uint"
    UINT64 = "uint64"
    FLOAT = "float"
    STR = "str"


# strtol(..., 0): optional sign, then hex, octal or decimal digits
_C_INT_RE = re.compile(r"\s*([+-]?)(0[xX][0-9a-fA-F]+|0[0-7]*|[1-9][0-9]*)")
_C_FLOAT_RE = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def _parse_c_int(text: str) -> int:
    """Leading-prefix integer parse with base auto-detection; 0 if none."""
    m = _C_INT_RE.match(text)
    if m is None:
        return 0
    sign, digits = m.groups()
    if digits[:2] in ("0x", "0X"):
        value = int(digits[2:], 16)
    elif digits.startswith("0") and len(digits) > 1:
        value = int(digits, 8)
    else:
        value = int(digits, 10)
    return -value if sign == "-" else value


def _parse_c_decimal(text: str) -> int:
    """atoi(): leading decimal digits only; 0 if none."""
    m = re.match(r"\s*([+-]?\d+)", text)
    return int(m.group(1)) if m else 0


def string_to_value_type(text: str, value_type: ValueType, value_size: int | None = None):
    """
    Convert a raw setting string to the requested data type.

    Args:
        text: Setting value in string form.
        value_type: Target type.
        value_size: For ValueType.STR, buffer size in characters including the
            terminator; the result keeps at most value_size - 1 characters.

    Returns:
        bool | int | float | str: Converted value. Unparseable numbers read
        as zero. INT wraps to signed 32 bits, UINT to 32 bits, UINT64 to 64.

    Raises:
        SettingsError: If value_type is unknown or value_size < 1.
    """
    if value_type is ValueType.BOOLEAN:
        return _parse_c_decimal(text) != 0

    if value_type is ValueType.INT:
        v = _parse_c_int(text) & 0xFFFFFFFF
        return v - (1 << 32) if v & 0x80000000 else v

    if value_type is ValueType.UINT:
        return _parse_c_int(text) & 0xFFFFFFFF

    if value_type is ValueType.UINT64:
        return _parse_c_int(text) & 0xFFFFFFFFFFFFFFFF

    if value_type is ValueType.FLOAT:
        m = _C_FLOAT_RE.match(text)
        return float(m.group(1)) if m else 0.0

    if value_type is ValueType.STR:
        if value_size is None:
            return text
        if value_size < 1:
            raise SettingsError(f"String buffer size must be >= 1, got {value_size}")
        return text[:value_size - 1]

    raise SettingsError(f"Unknown value type: {value_type!r}")


@dataclass(frozen=True)
class Settings:
    """Resolved runtime settings."""
    checks_enabled: bool = True
    prints_enabled: bool = False
    log_dir: str = "."
    word_bits: int = 32


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """
    Build Settings from WIDEBITS_* variables.

    Args:
        environ: Mapping to read from (defaults to os.environ).

    Raises:
        SettingsError: If WIDEBITS_WORD_BITS names an unsupported width.
    """
    env = os.environ if environ is None else environ

    word_bits = param_registry()["default_word_bits"]
    raw_bits = env.get("WIDEBITS_WORD_BITS")
    if raw_bits:
        word_bits = string_to_value_type(raw_bits, ValueType.UINT)
        supported = param_registry()["supported_word_bits"]
        if word_bits not in supported:
            raise SettingsError(
                f"WIDEBITS_WORD_BITS={raw_bits!r} not in supported widths {supported}"
            )

    return Settings(
        checks_enabled=not string_to_value_type(
            env.get("WIDEBITS_UNCHECKED", "0"), ValueType.BOOLEAN
        ),
        prints_enabled=string_to_value_type(
            env.get("WIDEBITS_ENABLE_PRINTS", "0"), ValueType.BOOLEAN
        ),
        log_dir=env.get("WIDEBITS_LOG_DIR", "."),
        word_bits=word_bits,
    )


class SettingsError(Exception):
    """Raised when a setting cannot be converted or is out of range."""
    pass
