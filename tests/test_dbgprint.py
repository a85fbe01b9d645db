"""
Debug Print Routing

Verifies:
  - All categories start DISABLE; disabled messages are dropped
  - PRINT mode writes prefixed, newline-terminated text to the stream
  - info/warn/error append the caller's (file:line:function)
  - Style flags drop the prefix and/or newline
  - FILE mode writes to a per-category file under log_dir
  - enabled_categories() reflects mode changes in ascending order
  - Callback receives emitted messages
  - assert_printf() ignores category modes
  - make_printer() selects NullDbgPrinter and installs checks_enabled
  - snprintf() truncation and "%%" handling
"""

import io
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from widebits.core import (
    Settings,
    PreconditionError,
    apply_settings,
    checks_enabled,
)
from widebits.dbgprint import (
    DbgPrintCategory,
    DbgPrintMode,
    DbgPrintStyle,
    DbgPrinter,
    NullDbgPrinter,
    make_printer,
    snprintf,
)
from widebits.kernel import wide_bitfield_set_bit


def _printer(tmp_path=None):
    settings = Settings(prints_enabled=True, log_dir=str(tmp_path or "."))
    stream = io.StringIO()
    return DbgPrinter(settings, stream), stream


def _site(func_name, line):
    return f" (test_dbgprint.py:{line}:{func_name})\n"


def test_defaults_disabled():
    printer, stream = _printer()

    for category in DbgPrintCategory:
        assert printer.mode(category) is DbgPrintMode.DISABLE
    assert printer.enabled_categories() == []

    printer.info("dropped %d", 1)
    assert stream.getvalue() == ""

    print("✓ All categories start disabled")


def test_print_mode_prefix_and_newline():
    printer, stream = _printer()
    printer.set_mode(DbgPrintCategory.WARN_MSG, DbgPrintMode.PRINT)

    line = sys._getframe().f_lineno + 1
    printer.warn("bit %d set in word %d", 5, 1)
    printer.info("still disabled")

    assert stream.getvalue() == (
        "WIDEBITS-WARN: bit 5 set in word 1"
        + _site("test_print_mode_prefix_and_newline", line)
    )


def test_print_styles():
    printer, stream = _printer()
    printer.set_mode(DbgPrintCategory.SC_MSG, DbgPrintMode.PRINT)

    printer.printf(DbgPrintCategory.SC_MSG, DbgPrintStyle.NO_PREFIX, "a")
    printer.printf(DbgPrintCategory.SC_MSG, DbgPrintStyle.NO_CRLF, "b")
    printer.printf(DbgPrintCategory.SC_MSG, DbgPrintStyle.NO_PREFIX_NO_CRLF, "c")

    assert stream.getvalue() == "a\nWIDEBITS-SC: bc"


def test_printf_percent_escape_without_args():
    printer, stream = _printer()
    printer.set_mode(DbgPrintCategory.INFO_MSG, DbgPrintMode.PRINT)

    printer.printf(DbgPrintCategory.INFO_MSG, DbgPrintStyle.NO_PREFIX, "done 100%%")
    printer.printf(DbgPrintCategory.INFO_MSG, DbgPrintStyle.NO_PREFIX, "%d is 100%%", 5)

    assert stream.getvalue() == "done 100%\n5 is 100%\n"


def test_file_mode_writes_log(tmp_path):
    printer, stream = _printer(tmp_path / "logs")
    printer.set_mode(DbgPrintCategory.ERROR_MSG, DbgPrintMode.FILE)

    line = sys._getframe().f_lineno + 1
    printer.error("scan exhausted at %d", 64)
    printer.close()

    log = tmp_path / "logs" / "widebits_error_msg.log"
    assert log.read_text(encoding="utf-8") == (
        "WIDEBITS-ERROR: scan exhausted at 64"
        + _site("test_file_mode_writes_log", line)
    )
    assert stream.getvalue() == ""


def test_enabled_categories_track_modes():
    printer, _ = _printer()

    printer.set_mode(DbgPrintCategory.SC_MSG, DbgPrintMode.PRINT)
    printer.set_mode(DbgPrintCategory.INFO_MSG, DbgPrintMode.FILE)
    assert printer.enabled_categories() == [
        DbgPrintCategory.INFO_MSG, DbgPrintCategory.SC_MSG
    ]

    printer.set_mode(DbgPrintCategory.INFO_MSG, DbgPrintMode.PRINT)
    assert printer.mode(DbgPrintCategory.INFO_MSG) is DbgPrintMode.PRINT

    printer.set_mode(DbgPrintCategory.SC_MSG, DbgPrintMode.DISABLE)
    assert printer.enabled_categories() == [DbgPrintCategory.INFO_MSG]

    print("✓ enabled_categories follows set_mode")


def test_callback_receives_text():
    printer, _ = _printer()
    seen = []
    printer.set_callback(lambda category, text: seen.append((category, text)))
    printer.set_mode(DbgPrintCategory.INFO_MSG, DbgPrintMode.PRINT)

    line = sys._getframe().f_lineno + 1
    printer.info("hello")
    printer.warn("disabled, not delivered")

    assert seen == [(
        DbgPrintCategory.INFO_MSG,
        "WIDEBITS-INFO: hello" + _site("test_callback_receives_text", line),
    )]


def test_assert_printf_ignores_modes():
    printer, stream = _printer()
    assert printer.enabled_categories() == []

    printer.assert_printf("bit %d out of range (%d%%)", 70, 100)

    assert stream.getvalue() == "WIDEBITS-ASSERT: bit 70 out of range (100%)\n"

    NullDbgPrinter().assert_printf("dropped")


def test_make_printer_selects_null():
    assert isinstance(make_printer(Settings(prints_enabled=False)), NullDbgPrinter)

    stream = io.StringIO()
    printer = make_printer(Settings(prints_enabled=True), stream)
    assert isinstance(printer, DbgPrinter)

    null = NullDbgPrinter()
    null.set_mode(DbgPrintCategory.INFO_MSG, DbgPrintMode.PRINT)
    null.info("nothing")
    assert null.mode(DbgPrintCategory.INFO_MSG) is DbgPrintMode.DISABLE
    assert null.enabled_categories() == []


def test_make_printer_installs_checks_mode():
    previous = checks_enabled()
    try:
        make_printer(Settings(checks_enabled=False))
        assert checks_enabled() is False
        with pytest.raises(IndexError):
            wide_bitfield_set_bit([0], 64)

        make_printer(Settings(checks_enabled=True))
        with pytest.raises(PreconditionError):
            wide_bitfield_set_bit([0], 64)
    finally:
        apply_settings(Settings(checks_enabled=previous))

    print("✓ make_printer() applies checks_enabled")


def test_snprintf_truncates():
    assert snprintf("%d-%s", 7, "abc") == "7-abc"
    assert snprintf("%d-%s", 7, "abc", buf_size=4) == "7-a"
    assert snprintf("100%%") == "100%"
    assert snprintf("abc", buf_size=0) == ""
