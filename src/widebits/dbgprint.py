"""
Debug Print Routing

Category-routed debug printing. Each category (info, warning, error, shader
compiler) has its own mode: disabled, printed to a stream, or written to a
log file. Every category starts DISABLE and stays that way until set_mode()
changes it; nothing resets modes implicitly.

State is owned by a DbgPrinter instance handed to whoever prints, not held in
module globals. make_printer() picks the real printer or NullDbgPrinter from
Settings.prints_enabled, so disabled builds pay nothing per call.

Which categories are live is tracked in two wide bitfields (one for PRINT,
one for FILE), indexed by category number.
"""

import sys
from enum import Enum, IntEnum, IntFlag
from pathlib import Path
from typing import Callable, TextIO

from .core.registry import param_registry
from .core.checks import apply_settings
from .core.settings import Settings, load_settings
from .kernel.bitfield import (
    new_wide_bitfield,
    wide_bitfield_is_set,
    wide_bitfield_set_bit,
    wide_bitfield_clear_bit,
    wide_bitfield_xor_bits
)
from .kernel.scan import iter_set_bits


class DbgPrintCategory(IntEnum):
    """Category of a debug print."""
    INFO_MSG = 0
    WARN_MSG = 1
    ERROR_MSG = 2
    SC_MSG = 3


DBG_PRINT_CAT_COUNT = len(DbgPrintCategory)


class DbgPrintMode(Enum):
    """Where a category's messages go."""
    DISABLE = "disable"
    PRINT = "print"
    FILE = "file"


class DbgPrintStyle(IntFlag):
    """Style controls: prefix and trailing newline."""
    DEFAULT = 0x0
    NO_PREFIX = 0x1
    NO_CRLF = 0x2
    NO_PREFIX_NO_CRLF = 0x3


DbgPrintCallback = Callable[[DbgPrintCategory, str], None]


def snprintf(fmt: str, *args, buf_size: int | None = None) -> str:
    """
    printf-style formatting with an optional output buffer size.

    The format is always applied, so "%%" becomes "%" even with no args.
    With buf_size, the result keeps at most buf_size - 1 characters
    (room for the terminator of a C buffer). buf_size=0 yields "".
    """
    text = fmt % args
    if buf_size is None:
        return text
    return text[:max(buf_size - 1, 0)]


class DbgPrinter:
    """
    Routes formatted messages by category.

    Args:
        settings: Resolved settings (defaults to load_settings()).
        stream: Target for PRINT mode (defaults to sys.stdout at write time).
    """

    def __init__(self, settings: Settings | None = None, stream: TextIO | None = None):
        self.settings = settings if settings is not None else load_settings()
        self.stream = stream
        self.prefix = param_registry()["dbg_print_prefix"]

        W = self.settings.word_bits
        self._print_bits = new_wide_bitfield(DBG_PRINT_CAT_COUNT, W)
        self._file_bits = new_wide_bitfield(DBG_PRINT_CAT_COUNT, W)
        self._callback = None
        self._files = {}  # category -> open file

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def set_mode(self, category: DbgPrintCategory, mode: DbgPrintMode) -> None:
        """Set the output mode for one category."""
        category = DbgPrintCategory(category)
        W = self.settings.word_bits

        wide_bitfield_clear_bit(self._print_bits, category, W)
        wide_bitfield_clear_bit(self._file_bits, category, W)

        if mode is DbgPrintMode.PRINT:
            wide_bitfield_set_bit(self._print_bits, category, W)
        elif mode is DbgPrintMode.FILE:
            wide_bitfield_set_bit(self._file_bits, category, W)

        if mode is not DbgPrintMode.FILE:
            log = self._files.pop(category, None)
            if log is not None:
                log.close()

    def mode(self, category: DbgPrintCategory) -> DbgPrintMode:
        """Current mode of a category."""
        W = self.settings.word_bits
        if wide_bitfield_is_set(self._print_bits, category, W):
            return DbgPrintMode.PRINT
        if wide_bitfield_is_set(self._file_bits, category, W):
            return DbgPrintMode.FILE
        return DbgPrintMode.DISABLE

    def enabled_categories(self) -> list[DbgPrintCategory]:
        """Categories not DISABLE, in ascending order."""
        # PRINT and FILE bits never overlap, so XOR is their union
        live = [0] * len(self._print_bits)
        wide_bitfield_xor_bits(self._print_bits, self._file_bits, live)
        return [
            DbgPrintCategory(bit)
            for bit in iter_set_bits(live, 0, self.settings.word_bits)
        ]

    def set_callback(self, callback: DbgPrintCallback | None) -> None:
        """Install a callback receiving (category, text) for every emitted message."""
        self._callback = callback

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def open_log_file(self, filename: str, mode: str = "a") -> TextIO:
        """Open filename inside settings.log_dir, creating the directory."""
        log_dir = Path(self.settings.log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        return open(log_dir / filename, mode, encoding="utf-8")

    def _log_file(self, category: DbgPrintCategory) -> TextIO:
        log = self._files.get(category)
        if log is None:
            name = f"{self.prefix.lower()}_{category.name.lower()}.log"
            log = self.open_log_file(name)
            self._files[category] = log
        return log

    def printf(self, category: DbgPrintCategory, style: DbgPrintStyle, fmt: str, *args) -> None:
        """
        Format and route a message.

        Disabled categories are dropped before formatting.
        """
        category = DbgPrintCategory(category)
        mode = self.mode(category)
        if mode is DbgPrintMode.DISABLE:
            return

        text = snprintf(fmt, *args)
        if not style & DbgPrintStyle.NO_PREFIX:
            text = f"{self.prefix}-{category.name.split('_')[0]}: {text}"
        if not style & DbgPrintStyle.NO_CRLF:
            text += "\n"

        if mode is DbgPrintMode.PRINT:
            out = self.stream if self.stream is not None else sys.stdout
        else:
            out = self._log_file(category)
        out.write(text)
        out.flush()

        if self._callback is not None:
            self._callback(category, text)

    def _printf_at_caller(self, category: DbgPrintCategory, fmt: str, args: tuple) -> None:
        # Frame 2 is whoever called info()/warn()/error()
        frame = sys._getframe(2)
        site = (Path(frame.f_code.co_filename).name, frame.f_lineno, frame.f_code.co_name)
        self.printf(category, DbgPrintStyle.DEFAULT, fmt + " (%s:%d:%s)", *args, *site)

    def info(self, fmt: str, *args) -> None:
        """Info message, suffixed with the caller's (file:line:function)."""
        self._printf_at_caller(DbgPrintCategory.INFO_MSG, fmt, args)

    def warn(self, fmt: str, *args) -> None:
        """Warning message, suffixed with the caller's (file:line:function)."""
        self._printf_at_caller(DbgPrintCategory.WARN_MSG, fmt, args)

    def error(self, fmt: str, *args) -> None:
        """Error message, suffixed with the caller's (file:line:function)."""
        self._printf_at_caller(DbgPrintCategory.ERROR_MSG, fmt, args)

    def assert_printf(self, fmt: str, *args) -> None:
        """Assertion report. Never filtered by category mode; always printed."""
        text = f"{self.prefix}-ASSERT: {snprintf(fmt, *args)}\n"
        out = self.stream if self.stream is not None else sys.stdout
        out.write(text)
        out.flush()

    def close(self) -> None:
        """Close any open log files. Modes are left as they are."""
        for log in self._files.values():
            log.close()
        self._files.clear()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False


class NullDbgPrinter:
    """DbgPrinter stand-in used when prints are disabled. Every call is a no-op."""

    def set_mode(self, category, mode) -> None:
        pass

    def mode(self, category) -> DbgPrintMode:
        return DbgPrintMode.DISABLE

    def enabled_categories(self) -> list:
        return []

    def set_callback(self, callback) -> None:
        pass

    def printf(self, category, style, fmt, *args) -> None:
        pass

    def info(self, fmt, *args) -> None:
        pass

    def warn(self, fmt, *args) -> None:
        pass

    def error(self, fmt, *args) -> None:
        pass

    def assert_printf(self, fmt, *args) -> None:
        pass

    def close(self) -> None:
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        return False


def make_printer(settings: Settings | None = None, stream: TextIO | None = None):
    """
    Select the printer implementation for these settings.

    Also installs settings.checks_enabled as the active precondition mode,
    so one resolved Settings configures the whole library.

    Returns:
        DbgPrinter if settings.prints_enabled, else NullDbgPrinter.
    """
    settings = settings if settings is not None else load_settings()
    apply_settings(settings)
    if settings.prints_enabled:
        return DbgPrinter(settings, stream)
    return NullDbgPrinter()
