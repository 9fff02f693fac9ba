"""Tests for column kinds and shaft rendering."""

from __future__ import annotations

import datetime as dt

import pytest

from pi.pillar import shaft as shaft_module
from pi.pillar.options import PillarOptions
from pi.pillar.shaft import LinesShaft, NumericShaft, escape_string, pillar_shaft, register_shaft
from pi.pillar.styles import AnsiTheme, PlainTheme
from pi.pillar.text import visible_width
from pi.pillar.type_sum import column_kind, type_summary, value_kind


def _shaft(data, **overrides):
    return pillar_shaft(data, PillarOptions(color=False, **overrides), PlainTheme())


# ---------------------------------------------------------------------------
# Kinds
# ---------------------------------------------------------------------------


class TestColumnKind:
    @pytest.mark.parametrize(
        ("value", "kind"),
        [
            (True, "logical"),
            (3, "integer"),
            (3.5, "double"),
            ("x", "character"),
            (dt.date(2017, 5, 15), "date"),
            (dt.datetime(2017, 5, 15, 12), "datetime"),
            ([1, 2], "list"),
            ({"a": 1}, "list"),
            (object(), "generic"),
        ],
    )
    def test_value_kind(self, value: object, kind: str) -> None:
        assert value_kind(value) == kind

    def test_missing_values_do_not_vote(self) -> None:
        assert column_kind([None, "a", None]) == "character"

    def test_empty_column_is_logical(self) -> None:
        assert column_kind([]) == "logical"
        assert column_kind([None, None]) == "logical"

    def test_integers_and_floats_are_double(self) -> None:
        assert column_kind([1, 2.5]) == "double"

    def test_other_mixes_are_generic(self) -> None:
        assert column_kind([1, "a"]) == "generic"

    def test_type_summary(self) -> None:
        assert type_summary([1.5]) == "dbl"
        assert type_summary([1]) == "int"
        assert type_summary(["a"]) == "chr"
        assert type_summary([True]) == "lgl"
        assert type_summary([dt.datetime(2020, 1, 1)]) == "dttm"


# ---------------------------------------------------------------------------
# Numbers
# ---------------------------------------------------------------------------


class TestNumericShaft:
    def test_decimal_points_are_aligned(self) -> None:
        shaft = _shaft([1.5, -2.25, None])
        assert shaft.format(shaft.width) == [" 1.5 ", "-2.25", "NA   "]
        assert (shaft.min_width, shaft.width) == (5, 5)

    def test_integers_are_exact(self) -> None:
        shaft = _shaft([1, 22, 333])
        assert shaft.format(3) == ["  1", " 22", "333"]

    def test_significant_digits(self) -> None:
        assert _shaft([123.456]).format(3) == ["123"]
        assert _shaft([0.012345]).format(6) == ["0.0123"]

    def test_sigfig_option(self) -> None:
        assert _shaft([3.14159], sigfig=5).format(6) == ["3.1416"]

    def test_zero_and_special_values(self) -> None:
        shaft = _shaft([0.0, 1.25, float("nan"), float("inf"), float("-inf")])
        assert [line.strip() for line in shaft.format(shaft.width)] == [
            "0",
            "1.25",
            "NaN",
            "Inf",
            "-Inf",
        ]

    def test_wide_range_switches_to_scientific(self) -> None:
        shaft = _shaft([1e10, 1e-10])
        assert isinstance(shaft, NumericShaft)
        assert shaft.scientific
        assert shaft.format(shaft.width) == ["1e10 ", "1e-10"]

    def test_max_dec_width_keeps_decimal(self) -> None:
        shaft = _shaft([1e10, 1e-10], max_dec_width=30)
        assert not shaft.scientific
        assert shaft.width == 22
        assert shaft.min_width == 5

    def test_narrow_width_falls_back_to_scientific(self) -> None:
        shaft = _shaft([1e10, 1e-10], max_dec_width=30)
        lines = shaft.format(10)
        assert [line.strip() for line in lines] == ["1e10", "1e-10"]
        assert all(visible_width(line) == 10 for line in lines)

    def test_integers_beyond_float_range(self) -> None:
        shaft = _shaft([10**400, -(10**400), 1])
        assert isinstance(shaft, NumericShaft)
        assert shaft.scientific
        assert shaft.format(shaft.width) == [" 1e400", "-1e400", " 1e0  "]

    def test_one_line_per_row(self) -> None:
        data = [float(i) / 7 for i in range(25)]
        assert len(_shaft(data).format(8)) == 25

    def test_negative_numbers_are_styled(self) -> None:
        shaft = pillar_shaft([-1, 2], PillarOptions(), AnsiTheme())
        assert shaft.format(2) == ["\x1b[31m-1\x1b[0m", " 2"]


# ---------------------------------------------------------------------------
# Other kinds
# ---------------------------------------------------------------------------


class TestLinesShafts:
    def test_logical(self) -> None:
        assert _shaft([True, False, None]).format(5) == [" TRUE", "FALSE", "   NA"]

    def test_character_truncates_with_ellipsis(self) -> None:
        shaft = _shaft(["This is rather long", None, "?"])
        assert (shaft.min_width, shaft.width) == (3, 19)
        assert shaft.format(5) == ["This…", "<NA> ", "?    "]

    def test_character_min_width_never_exceeds_width(self) -> None:
        shaft = _shaft(["a", "b"])
        assert (shaft.min_width, shaft.width) == (1, 1)

    def test_min_chars_option(self) -> None:
        assert _shaft(["abcdefgh"], min_chars=6).min_width == 6

    def test_control_characters_are_escaped(self) -> None:
        assert _shaft(["a\nb"]).format(4) == ["a\\nb"]
        assert escape_string("x\x01") == "x\\x01"

    def test_date(self) -> None:
        shaft = _shaft([dt.date(2017, 5, 16), None])
        assert shaft.format(shaft.width) == ["2017-05-16", "        NA"]
        assert shaft.min_width == shaft.width

    def test_datetime(self) -> None:
        shaft = _shaft([dt.datetime(2017, 5, 15, 0, 0, 30)])
        assert shaft.format(shaft.width) == ["2017-05-15 00:00:30"]

    def test_list_cells(self) -> None:
        shaft = _shaft([[1, 2, 3], {"a": 1}])
        assert shaft.format(shaft.width) == ["<list [3]>", "<dict [1]>"]

    def test_generic_cells(self) -> None:
        shaft = _shaft([1, "a"])
        assert shaft.format(shaft.width) == ["1", "a"]

    def test_missing_value_is_styled(self) -> None:
        shaft = pillar_shaft([None, "a"], PillarOptions(), AnsiTheme())
        assert shaft.format(4)[0] == "\x1b[31m<NA>\x1b[0m"


class TestRegisterShaft:
    def test_custom_rule_replaces_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(shaft_module, "_SHAFT_BUILDERS", dict(shaft_module._SHAFT_BUILDERS))

        def yes_no(data, options, theme):
            return LinesShaft(["yes" if v else "no" for v in data])

        register_shaft("logical", yes_no)
        assert _shaft([True, False]).format(3) == ["yes", "no "]
