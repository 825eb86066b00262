"""
Unit tests for the field router (unitfmt.router).

Tests field selection, preservation of everything outside the selected
fields, header pass-through and the four invalid-input modes.
"""

from __future__ import annotations

import logging

import pytest

from tests.conftest import DF_OUTPUT, LS_LINE
from unitfmt.exceptions import ParseError
from unitfmt.router import FieldRouter


def _router(make_config, **options) -> FieldRouter:
    return FieldRouter(make_config(**options))


class TestFieldSelection:
    def test_default_converts_first_field_only(self, make_config):
        assert _router(make_config, from_unit="si").format_line("1K 2K") == "1000 2K"

    def test_selected_field_padded_in_place(self, make_config):
        router = _router(make_config, delimiter=" ", fields="2-2", formatting={"padding": 4})
        assert router.format_line("a 10 b 20") == "a   10 b 20"

    def test_all_fields_keep_spacing(self, make_config):
        router = _router(make_config, from_unit="si", fields="-")
        assert router.format_line("  1K   2K\t3K") == "  1000   2000\t3000"

    def test_multiple_ranges(self, make_config):
        router = _router(make_config, from_unit="si", fields="1,3")
        assert router.format_line("1K 2K 3K") == "1000 2K 3000"

    def test_fields_past_end_of_line(self, make_config):
        router = _router(make_config, from_unit="si", fields="5-")
        assert router.format_line("1K 2K") == "1K 2K"

    def test_explicit_delimiter(self, make_config):
        router = _router(make_config, from_unit="si", delimiter=",", fields=2)
        assert router.format_line("a,1K,b c") == "a,1000,b c"

    def test_ls_size_column(self, make_config):
        router = _router(make_config, to="iec", fields=5)
        assert router.format_line(LS_LINE) == LS_LINE.replace(" 4096 ", " 4.0K ")

    def test_empty_line(self, make_config):
        assert _router(make_config).format_line("") == ""


class TestInvalidModes:
    """A bad field in the middle of ``1K x 3K``."""

    LINE = "1K x 3K"

    def test_fail_raises(self, make_config):
        router = _router(make_config, from_unit="si", fields="-", invalid="fail")
        with pytest.raises(ParseError):
            router.format_line(self.LINE)

    def test_warn_puts_message_inline(self, make_config, caplog):
        router = _router(make_config, from_unit="si", fields="-", invalid="warn")
        with caplog.at_level(logging.WARNING, logger="unitfmt.router"):
            out = router.format_line(self.LINE)
        assert out == "1000 invalid number: 'x' 3000"
        assert "invalid number" in caplog.text

    def test_ignore_omits_field(self, make_config):
        router = _router(make_config, from_unit="si", fields="-", invalid="ignore")
        assert router.format_line(self.LINE) == "1000  3000"

    def test_abort_drops_rest_of_line(self, make_config):
        router = _router(make_config, from_unit="si", fields="-", invalid="abort")
        assert router.format_line(self.LINE) == "1000"

    def test_abort_keeps_no_trailing_delimiter(self, make_config):
        router = _router(make_config, from_unit="si", delimiter=",", fields="-", invalid="abort")
        assert router.format_line("1K,,2K,bad,4K") == "1000,,2000"

    def test_abort_on_first_field(self, make_config):
        router = _router(make_config, invalid="abort")
        assert router.format_line("bad 2") == ""

    def test_unselected_bad_field_is_untouched(self, make_config):
        router = _router(make_config, from_unit="si", fields=1)
        assert router.format_line(self.LINE) == "1000 x 3K"


class TestFormatLines:
    def test_header_passes_through(self, make_config):
        router = _router(make_config, from_unit="si", header=1)
        assert list(router.format_lines(["Size", "1K", "2K"])) == ["Size", "1000", "2000"]

    def test_header_longer_than_input(self, make_config):
        router = _router(make_config, from_unit="si", header=5)
        assert list(router.format_lines(["1K", "2K"])) == ["1K", "2K"]

    def test_lazy(self, make_config):
        """Lines are converted as they are consumed."""
        lines = iter(["1K", "oops"])
        out = _router(make_config, from_unit="si").format_lines(lines)
        assert next(out) == "1000"
        with pytest.raises(ParseError):
            next(out)

    def test_df_output(self, make_config):
        router = _router(make_config, to="si", fields="2-4", header=1)
        lines = DF_OUTPUT.splitlines()
        assert list(router.format_lines(lines)) == [
            lines[0],
            "/dev/sda1    53G 8.6G 42G  18% /",
            "tmpfs         8.3G          0  8.3G   0% /dev/shm",
        ]
