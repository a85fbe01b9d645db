"""
Core Component: Precondition Checks

Kernel preconditions (power-of-two alignment, in-range bit index, matching
word counts) are programmer errors, not recoverable conditions. They are
verified by require() and reported as PreconditionError.

The initial state comes from load_settings().checks_enabled (that is,
WIDEBITS_UNCHECKED). apply_settings() installs the value of an explicitly
built Settings. With checks off require() does nothing and a violated
precondition surfaces as whatever Python raises naturally (IndexError) or as
a wrong result.
"""

from .settings import Settings, load_settings

_checks_enabled = load_settings().checks_enabled


def checks_enabled() -> bool:
    """Return True if require() currently verifies conditions."""
    return _checks_enabled


def set_checks_enabled(enabled: bool) -> bool:
    """
    Turn precondition checking on or off.

    Returns:
        bool: The previous setting, so callers can restore it.
    """
    global _checks_enabled
    previous = _checks_enabled
    _checks_enabled = bool(enabled)
    return previous


def apply_settings(settings: Settings) -> bool:
    """
    Make settings.checks_enabled the active checking mode.

    Returns:
        bool: The previous setting.
    """
    return set_checks_enabled(settings.checks_enabled)


def require(condition: bool, message: str) -> None:
    """
    Raise PreconditionError with message if checks are on and condition is false.
    """
    if _checks_enabled and not condition:
        raise PreconditionError(message)


class PreconditionError(ValueError):
    """Raised when a caller violates a kernel precondition."""
    pass
