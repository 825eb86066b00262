"""
Unit tests for the per-field conversion pipeline
(unitfmt.transforms.pipeline).

These tests run whole fields through extract -> resolve -> rescale ->
round -> emit -> export and check the final text.
"""

from __future__ import annotations

import pytest

from unitfmt.exceptions import InvalidUnitError, ParseError
from unitfmt.transforms.pipeline import ConversionPipeline, ConversionResult


def _convert(field: str, make_config, **options) -> str:
    return ConversionPipeline(make_config(**options)).convert(field)


class TestScaledOutput:
    """Conversions with a target unit family."""

    @pytest.mark.parametrize(
        "field, to, expected",
        [
            ("1000", "si", "1.0K"),
            ("2048", "iec", "2.0K"),
            ("4096", "iec-i", "4.0Ki"),
            ("1500", "si", "1.5K"),
            ("999", "si", "999"),
            ("0", "si", "0"),
            ("-1500", "si", "-1.5K"),
        ],
    )
    def test_to_family(self, make_config, field, to, expected):
        assert _convert(field, make_config, to=to) == expected

    def test_default_rounding_is_from_zero(self, make_config):
        assert _convert("12345", make_config, to="si") == "13K"

    def test_configured_rounding(self, make_config):
        assert _convert("12345", make_config, to="si", rounding="nearest") == "12K"
        assert _convert("12999", make_config, to="si", rounding="down") == "12K"

    def test_rounding_carries_into_next_tier(self, make_config):
        """999.999K rounds to 1000K, which is shown as 1.0M."""
        assert _convert("999999", make_config, to="si") == "1.0M"

    def test_decimal_to_binary_family(self, make_config):
        assert _convert("1000000", make_config, to="iec") == "977K"

    def test_binary_source_to_decimal_target(self, make_config):
        assert _convert("1M", make_config, from_unit="iec", to="si") == "1.1M"

    def test_kilo_below_binary_tier(self, make_config):
        """1K (1000) is less than one KiB, so it is shown unscaled."""
        assert _convert("1K", make_config, from_unit="si", to="iec") == "1000"

    def test_top_tier(self, make_config):
        assert _convert("1Y", make_config, from_unit="si", to="si") == "1.0Y"
        assert _convert("5000Y", make_config, from_unit="si", to="si") == "5000Y"

    def test_unit_size_scaled(self, make_config):
        assert _convert("1M", make_config, from_unit="si", to="si", to_unit_size=1000) == "1.0K"

    def test_padding(self, make_config):
        assert _convert("1000", make_config, to="si", formatting={"padding": 6}) == "  1.0K"


class TestPlainOutput:
    """Conversions without a target unit family."""

    @pytest.mark.parametrize(
        "field, from_unit, expected",
        [
            ("1K", "si", "1000"),
            ("1K", "iec", "1024"),
            ("1Ki", "iec-i", "1024"),
            ("1K", "auto", "1000"),
            ("1Ki", "auto", "1024"),
            ("1.5M", "si", "1500000"),
        ],
    )
    def test_from_family(self, make_config, field, from_unit, expected):
        assert _convert(field, make_config, from_unit=from_unit) == expected

    def test_integral_without_decimals(self, make_config):
        assert _convert("42", make_config) == "42"

    def test_fraction_kept(self, make_config):
        assert _convert("2.5", make_config) == "2.5"

    @pytest.mark.parametrize(
        "field, rounding, expected",
        [
            ("2.3", "up", "3"),
            ("-2.3", "up", "-2"),
            ("-2.3", "down", "-3"),
            ("-2.3", "from-zero", "-3"),
            ("2.5", "nearest", "3"),
        ],
    )
    def test_rounding_to_integer(self, make_config, field, rounding, expected):
        assert _convert(field, make_config, rounding=rounding) == expected

    def test_unit_size(self, make_config):
        assert _convert("2048", make_config, to_unit_size=1024) == "2"

    def test_user_suffix_round_trips(self, make_config):
        field = _convert("10KB", make_config, from_unit="si", formatting={"suffix": "B"})
        assert field == "10000B"

    def test_grouping(self, make_config):
        assert _convert("1234567", make_config, formatting={"grouping": True}) == "1,234,567"

    def test_comma_decimal_point(self, make_config):
        assert _convert("1,5K", make_config, from_unit="si", decimal_point=",") == "1500"

    @pytest.mark.parametrize(
        "field, from_unit, expected",
        [("5X", "si", "5"), ("1Ki", "si", "1"), ("3Q", "iec", "3"), ("7B", "auto", "7")],
    )
    def test_unknown_suffix_is_unscaled(self, make_config, field, from_unit, expected):
        assert _convert(field, make_config, from_unit=from_unit) == expected


class TestErrors:
    def test_invalid_number(self, make_config):
        with pytest.raises(ParseError):
            _convert("abc", make_config)

    def test_suffix_without_from(self, make_config):
        with pytest.raises(InvalidUnitError):
            _convert("1K", make_config)


class TestRun:
    def test_result_parts(self, make_config):
        result = ConversionPipeline(make_config(to="si")).run("1000")
        assert isinstance(result, ConversionResult)
        assert result.text == "1.0K"
        assert result.value == pytest.approx(1.0)
        assert result.unit_suffix == "K"

    def test_pipeline_is_reusable(self, make_config):
        pipeline = ConversionPipeline(make_config(to="si"))
        assert [pipeline.convert(f) for f in ("1000", "2000", "1000")] == ["1.0K", "2.0K", "1.0K"]
