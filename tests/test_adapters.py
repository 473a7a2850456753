"""Tests for primitive adapters: validated parsing, zero values, formatting."""

import math
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from uuid import UUID

import pytest

from tinyjson_core.adapters import (
    enum_zero,
    format_enum,
    format_float,
    format_timedelta,
    parse_bool,
    parse_date,
    parse_datetime,
    parse_decimal,
    parse_enum,
    parse_float,
    parse_int,
    parse_scalar,
    parse_timedelta,
    parse_uuid,
    zero_value,
)
from tinyjson_core.typedef import describe

from models import Color, Style


# ---------------------------------------------------------------------------
# Scalars
# ---------------------------------------------------------------------------

class TestScalars:
    def test_bool_case_insensitive(self):
        assert parse_bool("true") is True
        assert parse_bool("False") is False
        assert parse_bool("yes") is None

    def test_int(self):
        assert parse_int("12345") == 12345
        assert parse_int("-5") == -5
        assert parse_int("12.5") is None
        assert parse_int("1_000") is None
        assert parse_int("9" * 5000) is None

    def test_float(self):
        assert parse_float("12.532") == 12.532
        assert parse_float("1e3") == 1000.0
        assert parse_float("abc") is None
        assert math.isnan(parse_float("NaN"))
        assert parse_float("-Infinity") == -math.inf

    def test_decimal(self):
        assert parse_decimal("12.532") == Decimal("12.532")
        assert parse_decimal("nan") is None

    def test_parse_scalar_nullable_vs_zero(self):
        assert parse_scalar(describe(int), "oops") == 0
        assert parse_scalar(describe(int | None), "oops") is None
        assert parse_scalar(describe(bool), "oops") is False
        assert parse_scalar(describe(Decimal), "oops") == Decimal(0)


# ---------------------------------------------------------------------------
# Special value types
# ---------------------------------------------------------------------------

class TestSpecialValues:
    def test_datetime_iso(self):
        assert parse_datetime('"2021-02-16T14:07:24.3912313Z"') == datetime(
            2021, 2, 16, 14, 7, 24, 391231, tzinfo=timezone.utc
        )

    def test_datetime_reduced_precision(self):
        assert parse_datetime("2021-06") == datetime(2021, 6, 1)
        assert parse_datetime("2021-06-19") == datetime(2021, 6, 19)

    def test_datetime_invalid(self):
        assert parse_datetime("yesterday") is None

    def test_datetime_offset_preserved(self):
        value = parse_datetime('"2024-03-01T10:00:00+05:30"')
        assert value.utcoffset() == timedelta(hours=5, minutes=30)

    def test_date(self):
        assert parse_date('"2024-01-15"') == date(2024, 1, 15)
        assert parse_date("bad") is None

    def test_timedelta(self):
        assert parse_timedelta('"00:00:00"') == timedelta(0)
        assert parse_timedelta("01:02:03") == timedelta(hours=1, minutes=2, seconds=3)
        assert parse_timedelta("2.01:02:03.5") == timedelta(
            days=2, hours=1, minutes=2, seconds=3, milliseconds=500
        )
        assert parse_timedelta("-00:00:01") == timedelta(seconds=-1)
        assert parse_timedelta("3") == timedelta(days=3)

    def test_timedelta_invalid(self):
        assert parse_timedelta("25:00:00") is None
        assert parse_timedelta("soon") is None
        assert parse_timedelta("9" * 12) is None

    def test_uuid(self):
        text = "6f1d3c3e-2a7b-4c55-9d8e-0b1a2c3d4e5f"
        assert parse_uuid(f'"{text}"') == UUID(text)
        assert parse_uuid("not-a-uuid") is None

    def test_format_timedelta(self):
        assert format_timedelta(timedelta(0)) == "00:00:00"
        assert format_timedelta(timedelta(hours=1, minutes=2, seconds=3)) == "01:02:03"
        assert format_timedelta(timedelta(days=2, microseconds=5)) == "2.00:00:00.0000050"
        assert format_timedelta(timedelta(seconds=-90)) == "-00:01:30"

    @pytest.mark.parametrize(
        "value",
        [timedelta(0), timedelta(days=3, hours=4), timedelta(seconds=-90), timedelta(microseconds=123456)],
    )
    def test_timedelta_text_is_canonical(self, value):
        assert parse_timedelta(format_timedelta(value)) == value


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class TestEnums:
    def test_by_name(self):
        assert parse_enum(describe(Color), '"Green"') is Color.Green

    def test_by_name_ignore_case(self):
        assert parse_enum(describe(Color), '"green"') is Color.Green
        assert parse_enum(describe(Color), '"green"', ignore_case=False) is Color.Red

    def test_by_value(self):
        assert parse_enum(describe(Color), "2") is Color.Blue
        assert parse_enum(describe(Color), '"2"') is Color.Blue

    def test_unknown_gives_zero_member(self):
        assert parse_enum(describe(Color), '"sfdoijsdfoij"') is Color.Red

    def test_unknown_nullable_gives_none(self):
        assert parse_enum(describe(Color | None), '"sfdoijsdfoij"') is None

    def test_flag_names(self):
        assert parse_enum(describe(Style), '"Bold, Italic"') == Style.Bold | Style.Italic

    def test_flag_value(self):
        assert parse_enum(describe(Style), "3") == Style.Bold | Style.Italic
        assert parse_enum(describe(Style), "10") == Style.Italic | Style.Strikethrough

    def test_zero_members(self):
        assert enum_zero(Color) is Color.Red
        assert enum_zero(Style) is Style.Plain
        assert zero_value(describe(Style)) is Style.Plain

    def test_format_names(self):
        assert format_enum(Color.Green) == "Green"
        assert format_enum(Style.Bold) == "Bold"
        assert format_enum(Style.Bold | Style.Italic) == "Bold, Italic"
        assert format_enum(Style(6)) == "Italic, Underline"
        assert format_enum(Style.Plain) == "Plain"

    def test_format_unnamed_combination(self):
        assert format_enum(Style(19)) == "19"
        assert format_enum(Style(17)) == "17"


# ---------------------------------------------------------------------------
# Floats
# ---------------------------------------------------------------------------

def test_format_float():
    assert format_float(5.0) == "5"
    assert format_float(4.3) == "4.3"
    assert format_float(-0.25) == "-0.25"
    assert format_float(1e300) == "1e+300"
    assert format_float(math.inf) == "Infinity"
    assert format_float(math.nan) == "NaN"
